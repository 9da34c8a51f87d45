import logging
from collections.abc import Generator

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from optima_api.config import settings

logger = logging.getLogger(__name__)


class Database:
    """Database connection manager"""

    def __init__(self, database_url: str | None = None):
        self._database_url = database_url
        self._engine: Engine | None = None

    @property
    def database_url(self) -> str:
        return self._database_url or settings.database_url

    def get_engine(self) -> Engine:
        """Get SQLModel engine for database operations"""
        if self._engine is None:
            database_url = self.database_url
            if database_url.startswith("sqlite"):
                engine_args = {"connect_args": {"check_same_thread": False}}
                # In-memory databases only live as long as their connection
                if database_url in ("sqlite://", "sqlite:///:memory:"):
                    engine_args["poolclass"] = StaticPool
            else:
                engine_args = {
                    "pool_pre_ping": True,
                    "pool_recycle": 3600,
                    "pool_size": 5,
                    "max_overflow": 10,
                    "connect_args": {"application_name": "Optima-API"},
                }

            self._engine = create_engine(
                database_url, echo=settings.debug, **engine_args
            )
            logger.info("✅ SQLModel engine initialized")
        return self._engine

    def create_db_and_tables(self) -> None:
        """Create all tables registered on the SQLModel metadata"""
        # Register table models before create_all
        from optima_api import models  # noqa: F401

        SQLModel.metadata.create_all(self.get_engine())

    def get_session(self) -> Generator[Session, None, None]:
        """Get database session"""
        engine = self.get_engine()
        with Session(engine) as session:
            yield session

    async def health_check(self) -> bool:
        """Check database connection health"""
        try:
            with self.get_engine().connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"❌ Database health check failed: {e}")
            return False


# Global database instance
db = Database()


# Dependency for FastAPI
def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency to get database session"""
    yield from db.get_session()
