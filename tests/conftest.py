"""Pytest fixtures and configuration for slotwise tests."""

import pytest
from datetime import datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from slotwise.database.database import Base
from slotwise.database.repository import TaskRepository
from slotwise.database.calendar_event_repository import CalendarEventRepository
from slotwise.database.settings_repository import SettingsRepository
from slotwise.database.suggestion_repository import SuggestionRepository
from slotwise.models.settings import AutoScheduleSettings
from slotwise.models.task import Task, TaskStatus


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def now():
    """Fixed reference time: Monday 2026-03-02 07:00, before default work hours."""
    return datetime(2026, 3, 2, 7, 0)


@pytest.fixture(scope="function")
def session_factory(test_user_id):
    """Session factory bound to a fresh in-memory database with a seeded test user."""
    from sqlalchemy import event
    from slotwise.database.models import UserDB

    # StaticPool keeps every session on the same in-memory connection
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Create test user (required for foreign key constraints)
    created = datetime.utcnow()
    with factory() as session:
        session.add(UserDB(
            id=test_user_id,
            email="test@example.com",
            name="Test User",
            created_at=created,
            updated_at=created,
        ))
        session.commit()

    try:
        yield factory
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Create a database session for testing."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def add_user(db_session: Session):
    """Insert another user and return its ID."""
    from slotwise.models.user import User
    from slotwise.database.user_repository import UserRepository

    def _add(user_id: str) -> str:
        created = datetime.utcnow()
        UserRepository(db_session).create_or_update(User(
            id=user_id,
            email=f"{user_id}@example.com",
            name=user_id,
            created_at=created,
            updated_at=created,
        ))
        return user_id

    return _add


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def calendar_repository(db_session: Session):
    return CalendarEventRepository(db_session)


@pytest.fixture
def settings_repository(db_session: Session):
    return SettingsRepository(db_session)


@pytest.fixture
def suggestion_repository(db_session: Session):
    return SuggestionRepository(db_session)


@pytest.fixture
def settings(test_user_id):
    """Default auto-schedule settings (work 9-17, high 9-12, medium 13-16, low 16-18)."""
    return AutoScheduleSettings(user_id=test_user_id)


@pytest.fixture
def sample_task_base(test_user_id, now):
    """Base task data for creating test tasks.
    
    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "user_id": test_user_id,
        "title": "Test Task",
        "description": "Test description",
        "status": TaskStatus.TODO,
        "created_at": now,
        "updated_at": now,
        "due_date": None,
        "duration": 60,
        "energy_level": None,
        "scheduled_start": None,
        "scheduled_end": None,
        "is_auto_scheduled": False,
    }


@pytest.fixture
def make_task(sample_task_base):
    """Build a Task from the base data; `start` plus the duration fills in the schedule."""
    counter = {"n": 0}

    def _make(start=None, **overrides) -> Task:
        counter["n"] += 1
        data = {**sample_task_base, "id": str(uuid.uuid4()), **overrides}
        # Keep creation order stable for capacity ordering
        data["created_at"] = data["created_at"] + timedelta(seconds=counter["n"])
        if start is not None:
            data["scheduled_start"] = start
            data["scheduled_end"] = start + timedelta(minutes=data["duration"] or 60)
        return Task(**data)

    return _make


@pytest.fixture
def test_user(test_user_id):
    """Create a test user object."""
    from slotwise.models.user import User
    created = datetime.utcnow()
    return User(
        id=test_user_id,
        email="test@example.com",
        name="Test User",
        created_at=created,
        updated_at=created,
    )


@pytest.fixture
def test_client(db_session: Session, test_user):
    """Create a FastAPI test client with overridden database dependency and authentication."""
    from slotwise.api.app import app
    from slotwise.database.database import get_db
    from slotwise.auth.dependencies import get_current_user
    
    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it
    
    # Override authentication to return test user
    def override_get_current_user():
        return test_user
    
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user
    
    with TestClient(app) as client:
        yield client
    
    # Clean up dependency overrides
    app.dependency_overrides.clear()
