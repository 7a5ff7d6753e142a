"""Pytest configuration and shared fixtures."""

import os
import uuid
from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

import vocabkeep.models  # noqa: F401
from vocabkeep.core.config import Settings
from vocabkeep.db.base import Base
from vocabkeep.db.engine import create_db_engine
from vocabkeep.db.session import get_db
from vocabkeep.learning_engine.srs.service import SchedulingEngine
from vocabkeep.main import create_app
from tests.helpers.seed import FrozenClock

# In-memory SQLite by default; point at PostgreSQL to run against the real store
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite://")

FIXED_NOW = datetime(2026, 3, 2, 9, 30, tzinfo=UTC)


@pytest.fixture(scope="function")
def db_engine() -> Generator[Engine, None, None]:
    """Fresh schema per test."""
    engine = create_db_engine(TEST_DATABASE_URL)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine: Engine) -> Generator[Session, None, None]:
    """Database session; application code commits through it."""
    session = Session(bind=db_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def clock() -> FrozenClock:
    """Controllable clock starting at a fixed instant."""
    return FrozenClock(FIXED_NOW)


@pytest.fixture
def engine(clock: FrozenClock) -> SchedulingEngine:
    """Scheduling engine with the default review limit and a frozen clock."""
    return SchedulingEngine(review_limit=20, clock=clock)


@pytest.fixture
def tenant_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def other_tenant_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the test application."""
    return Settings(ENV="test", DATABASE_URL=TEST_DATABASE_URL, REVIEW_LIMIT=20)


@pytest.fixture
def client(db: Session, db_engine: Engine, test_settings: Settings) -> Generator[TestClient, None, None]:
    """Test client sharing the test session with the application."""
    app = create_app(test_settings, db_engine=db_engine)

    def override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
