"""Service test fixtures — store, coordinator and service over one working session.

Invariants:
    - The service under test gets its own session (work_session), separate from
      the seeding session and from the read-back sessions
"""

import pytest

from lessonmap.infrastructure.entity_store import SqlEntityStore
from lessonmap.services.lesson_consistency import LessonConsistencyCoordinator
from lessonmap.services.lesson_service import LessonService


@pytest.fixture
async def work_session(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(work_session):
    return SqlEntityStore(work_session)


@pytest.fixture
def coordinator(store, file_store):
    return LessonConsistencyCoordinator(store, file_store)


@pytest.fixture
def service(store, coordinator, geocoder, file_store):
    return LessonService(store, coordinator, geocoder, file_store)
