import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from optima_api.config import settings
from optima_api.database import db
from optima_api.exceptions import (
    OptimaException,
    general_exception_handler,
    http_exception_handler,
    optima_exception_handler,
    pydantic_validation_exception_handler,
    scheduling_exception_handler,
    validation_exception_handler,
)
from optima_api.routers import projects, scheduler
from optima_api.seed import seed_demo_data
from optima_scheduler import SchedulingError


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.basicConfig(level=settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info("🚀 FastAPI server starting up...")

    # Log configuration info
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Host: {settings.host}, Port: {settings.port}")
    logger.info(f"Debug mode: {settings.debug}")

    db.create_db_and_tables()
    if await db.health_check():
        logger.info("✅ Database connection successful")
    else:
        logger.warning("⚠️ Database connection failed, continuing in degraded mode")

    if settings.seed_demo_data:
        with Session(db.get_engine()) as session:
            seed_demo_data(session)

    current = scheduler.get_schedule_service().current_strategy()
    logger.info(f"📅 Default scheduling strategy: {current.name}")

    yield
    # Shutdown
    logger.info("🔄 FastAPI server shutting down...")


# Initialize FastAPI app
app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Add exception handlers
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)
app.add_exception_handler(OptimaException, optima_exception_handler)
app.add_exception_handler(SchedulingError, scheduling_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include API routers
app.include_router(projects.router, prefix="/api")
app.include_router(scheduler.router, prefix="/api")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    db_healthy = await db.health_check()

    return {
        "status": "healthy" if db_healthy else "unhealthy",
        "message": "Optima API is running",
        "version": settings.api_version,
        "database": "connected" if db_healthy else "disconnected",
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Optima API",
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/health",
    }


def run() -> None:
    """Console entry point"""
    import uvicorn

    uvicorn.run(
        "optima_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
