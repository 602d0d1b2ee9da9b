"""Root conftest — shared test configuration, database and seed fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Seeding uses test_db; assertions about persisted state use a fresh session
      (fresh_session) so nothing is answered from a stale identity map

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for transaction semantics
      (PostgreSQL-specific features not exercised here)
"""

import os
import uuid

# Ensure tests never talk to real services
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_KEY", "test-jwt-key")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-key")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from lessonmap.db.base import Base  # noqa: E402
from lessonmap.models.user import User  # noqa: E402
import lessonmap.models  # noqa: E402,F401

from tests.fakes import FakeGeocoder, RecordingFileStore, make_lesson  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fresh_session(test_session_factory):
    """Factory for throwaway sessions used to read back persisted state."""
    return test_session_factory


@pytest.fixture
async def owner(test_db):
    """User U1 with no lessons."""
    user = User(id=uuid.uuid4(), name="Ana", email="ana@example.com")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def other_user(test_db):
    """User U2 with no lessons."""
    user = User(id=uuid.uuid4(), name="Ben", email="ben@example.com")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def owned_lesson(test_db):
    """Lesson L1 linked both ways to its own creator."""
    user = User(id=uuid.uuid4(), name="Cleo", email="cleo@example.com")
    lesson = make_lesson(user)
    user.lessons = {lesson}
    test_db.add_all([user, lesson])
    await test_db.commit()
    return lesson


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def file_store():
    return RecordingFileStore()
