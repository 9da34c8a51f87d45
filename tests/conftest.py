import os
from decimal import Decimal

import pytest

# Set test environment variables before importing any application code
os.environ.update({
    "DATABASE_URL": "sqlite://",
    "ENVIRONMENT": "test",
    "DEBUG": "false",
    "DEFAULT_STRATEGY": "greedy",
    "SEED_DEMO_DATA": "false",
    "CORS_ORIGINS": "http://localhost:3000,http://localhost:5173",
})

# Import after setting environment variables
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from optima_scheduler import WorkItem


def make_item(item_id: int, deadline: int, revenue, **kwargs) -> WorkItem:
    """Shorthand for building engine work items in tests"""
    return WorkItem(id=item_id, deadline=deadline, revenue=Decimal(str(revenue)), **kwargs)


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads"""
    from optima_api import models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create database session"""
    with Session(engine) as session:
        yield session


@pytest.fixture
def schedule_service():
    """Schedule service with its own registry so tests don't share selection"""
    from optima_api.services import ScheduleService
    from optima_scheduler import StrategyRegistry

    return ScheduleService(registry=StrategyRegistry())


@pytest.fixture
def client(engine, schedule_service):
    """Test client with database and schedule service dependencies overridden"""
    from fastapi.testclient import TestClient

    from optima_api.database import get_db
    from optima_api.main import app
    from optima_api.routers.scheduler import get_schedule_service

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_schedule_service] = lambda: schedule_service
    yield TestClient(app)
    app.dependency_overrides.clear()
