"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for:
- Database sessions (in-memory SQLite for fast tests)
- FastAPI test client with a recording reset notifier
- In-memory repositories sharing one store
- Test data factories
"""

import os

# Settings are read at import time; configure before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CELERY_ALWAYS_EAGER", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Generator, List, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Import app and models
from catalog.main import app
from catalog.core.dependencies import get_password_reset_notifier
from catalog.core.security import create_access_token, get_password_hash
from catalog.domain.entities.attraction import Attraction
from catalog.domain.entities.category import Category
from catalog.domain.entities.image import Image
from catalog.domain.entities.metro_station import MetroStation
from catalog.domain.entities.user import User, UserRole
from catalog.infrastructure.persistence import models
from catalog.infrastructure.persistence.db import Base, get_db
from catalog.infrastructure.persistence.repositories.in_memory_attraction_repository import (
    InMemoryAttractionRepository,
)
from catalog.infrastructure.persistence.repositories.in_memory_category_repository import (
    InMemoryCategoryRepository,
)
from catalog.infrastructure.persistence.repositories.in_memory_metro_station_repository import (
    InMemoryMetroStationRepository,
)
from catalog.infrastructure.persistence.repositories.in_memory_store import InMemoryStore
from catalog.infrastructure.persistence.repositories.in_memory_user_repository import (
    InMemoryUserRepository,
)
from catalog.infrastructure.persistence.repositories.sqlalchemy_attraction_repository import (
    SQLAlchemyAttractionRepository,
)
from catalog.infrastructure.persistence.repositories.sqlalchemy_category_repository import (
    SQLAlchemyCategoryRepository,
)
from catalog.infrastructure.persistence.repositories.sqlalchemy_metro_station_repository import (
    SQLAlchemyMetroStationRepository,
)
from catalog.infrastructure.persistence.repositories.sqlalchemy_user_repository import (
    SQLAlchemyUserRepository,
)

DEFAULT_PASSWORD = "Secret123"
LONG_TEXT = "A long description of the place that easily passes the fifty character minimum."


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database for testing."""
    from sqlalchemy import Integer

    # Use in-memory SQLite for fast tests
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign key support for SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Monkey-patch BigInteger columns to use Integer for SQLite autoincrement
    for table in Base.metadata.tables.values():
        for column in table.columns:
            if str(column.type) == 'BIGINT' and column.primary_key:
                column.type = Integer()

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Drop all tables after test
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine
    )

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.rollback()
        session.close()


# ==============================================================================
# NOTIFIER
# ==============================================================================

class RecordingNotifier:
    """PasswordResetNotifier that keeps sent links in memory."""

    def __init__(self, fail: bool = False):
        self.sent: List[Tuple[str, str]] = []
        self.fail = fail

    def send_reset_link(self, email: str, reset_url: str) -> None:
        if self.fail:
            raise ConnectionError("broker unavailable")
        self.sent.append((email, reset_url))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture(scope="function")
def client(test_db_session, notifier) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with test database."""

    def override_get_db():
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_reset_notifier] = lambda: notifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==============================================================================
# CLOCK
# ==============================================================================

class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ==============================================================================
# REPOSITORY FIXTURES
# ==============================================================================

@dataclass
class Repositories:
    """One set of repositories over a single backing store."""
    attractions: object
    categories: object
    metro_stations: object
    users: object
    add_image: object
    add_station: object


def _in_memory_repositories() -> Repositories:
    store = InMemoryStore()
    attractions = InMemoryAttractionRepository(store)
    metro_stations = InMemoryMetroStationRepository(store)

    def add_image(attraction_id: int, filename: str, is_primary: bool = False) -> Image:
        return attractions.add_image(Image(
            id=None,
            attraction_id=attraction_id,
            filename=filename,
            path=f"/uploads/{filename}",
            is_primary=is_primary,
        ))

    def add_station(name: str, line_color: str = "blue") -> MetroStation:
        return metro_stations.add(MetroStation(id=None, name=name, line_color=line_color, line_name="Line"))

    return Repositories(
        attractions=attractions,
        categories=InMemoryCategoryRepository(store),
        metro_stations=metro_stations,
        users=InMemoryUserRepository(store),
        add_image=add_image,
        add_station=add_station,
    )


def _sqlalchemy_repositories(session: Session) -> Repositories:
    def add_image(attraction_id: int, filename: str, is_primary: bool = False) -> Image:
        row = models.Image(
            attraction_id=attraction_id,
            filename=filename,
            original_name=filename,
            path=f"/uploads/{filename}",
            size=1024,
            mime_type="image/jpeg",
            is_primary=is_primary,
        )
        session.add(row)
        session.commit()
        return Image(id=row.id, attraction_id=attraction_id, filename=filename,
                     path=row.path, is_primary=is_primary)

    def add_station(name: str, line_color: str = "blue") -> MetroStation:
        row = models.MetroStation(name=name, line_color=line_color, line_name="Line")
        session.add(row)
        session.commit()
        return MetroStation(id=row.id, name=name, line_color=line_color, line_name="Line")

    return Repositories(
        attractions=SQLAlchemyAttractionRepository(session),
        categories=SQLAlchemyCategoryRepository(session),
        metro_stations=SQLAlchemyMetroStationRepository(session),
        users=SQLAlchemyUserRepository(session),
        add_image=add_image,
        add_station=add_station,
    )


@pytest.fixture(params=["in_memory", "sqlalchemy"])
def repos(request) -> Repositories:
    """Run a test against both repository implementations."""
    if request.param == "in_memory":
        return _in_memory_repositories()
    session = request.getfixturevalue("test_db_session")
    return _sqlalchemy_repositories(session)


@pytest.fixture
def memory_repos() -> Repositories:
    return _in_memory_repositories()


# ==============================================================================
# TEST DATA FACTORIES
# ==============================================================================

def make_attraction(name: str, category_id: int, created_by: int, **overrides) -> Attraction:
    """Build an unsaved attraction with valid defaults."""
    fields = dict(
        id=None,
        name=name,
        slug=overrides.pop("slug", name.lower().replace(" ", "-")),
        short_description=f"Short description of {name}",
        full_description=LONG_TEXT,
        address="Nevsky prospekt, 1",
        category_id=category_id,
        created_by=created_by,
    )
    fields.update(overrides)
    return Attraction(**fields)


async def create_user(users, email: str = "user@example.com", role: UserRole = UserRole.USER,
                      password: str = DEFAULT_PASSWORD, is_active: bool = True) -> User:
    return await users.create(User(
        id=None,
        email=email,
        password_hash=get_password_hash(password),
        role=role,
        is_active=is_active,
    ))


async def create_category(categories, name: str, color: str = "#3B82F6") -> Category:
    return await categories.create(Category(id=None, name=name, slug=name.lower().replace(" ", "-"), color=color))


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role.value)}"}


@pytest.fixture
def db_repos(test_db_session) -> Repositories:
    """SQLAlchemy repositories over the same session the API client uses."""
    return _sqlalchemy_repositories(test_db_session)


@pytest.fixture
async def admin_user(db_repos) -> User:
    return await create_user(db_repos.users, email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
async def regular_user(db_repos) -> User:
    return await create_user(db_repos.users, email="user@example.com")


@pytest.fixture
def admin_headers(admin_user) -> dict:
    """Bearer token headers for an administrator."""
    return auth_headers(admin_user)


@pytest.fixture
def user_headers(regular_user) -> dict:
    return auth_headers(regular_user)
