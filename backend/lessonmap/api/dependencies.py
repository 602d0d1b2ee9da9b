"""Request Dependencies — wires per-request services from app-scoped collaborators.

Invariants:
    - One SqlEntityStore per request, bound to that request's AsyncSession
    - Geocoder and file store are app-scoped (created in lifespan, stored on app.state)

Design Decisions:
    - Collaborators resolved through Depends: tests swap them via dependency_overrides
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from lessonmap.infrastructure.database import get_db
from lessonmap.infrastructure.entity_store import SqlEntityStore
from lessonmap.infrastructure.file_store import LocalFileStore
from lessonmap.infrastructure.geocoding import GoogleGeocoder
from lessonmap.services.lesson_consistency import LessonConsistencyCoordinator
from lessonmap.services.lesson_service import LessonService


def get_geocoder(request: Request) -> GoogleGeocoder:
    return request.app.state.geocoder


def get_file_store(request: Request) -> LocalFileStore:
    return request.app.state.file_store


def get_lesson_service(
    db: AsyncSession = Depends(get_db),
    geocoder: GoogleGeocoder = Depends(get_geocoder),
    files: LocalFileStore = Depends(get_file_store),
) -> LessonService:
    store = SqlEntityStore(db)
    coordinator = LessonConsistencyCoordinator(store, files)
    return LessonService(store, coordinator, geocoder, files)
