"""Boundary Protocols — contracts between the services and their collaborators.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - add_lesson / remove_lesson / save_user are only legal inside EntityStore.atomic()

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - LessonLike/UserLike instead of ORM imports: services stay testable with any
      object carrying the same attributes
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol
from uuid import UUID

from lessonmap.core.domain_types import Coordinates, LessonId, UserId


class LessonLike(Protocol):
    """Structural contract for Lesson entities."""
    id: UUID
    title: str
    description: str
    address: str
    latitude: float
    longitude: float
    image: str
    creator_id: UUID


class UserLike(Protocol):
    """Structural contract for User entities. lessons is the back-reference set."""
    id: UUID
    lessons: set


class EntityStore(Protocol):
    """Contract for Users/Lessons persistence: implemented by shell."""
    async def find_lesson(self, lesson_id: LessonId) -> LessonLike | None: ...
    async def find_user(
        self, user_id: UserId, expand_lessons: bool = False,
    ) -> UserLike | None: ...
    async def find_lesson_with_creator(
        self, lesson_id: LessonId,
    ) -> LessonLike | None: ...
    async def add_lesson(self, lesson: LessonLike) -> None: ...
    async def remove_lesson(self, lesson: LessonLike) -> None: ...
    async def save_user(self, user: UserLike) -> None: ...
    async def save_lesson(self, lesson: LessonLike) -> None: ...
    def atomic(self) -> AbstractAsyncContextManager[None]: ...


class Geocoder(Protocol):
    """Contract for address resolution: raises GeocodeError on failure."""
    async def resolve(self, address: str) -> Coordinates: ...


class FileStore(Protocol):
    """Contract for image release. Best effort: must not raise."""
    async def release(self, path: str) -> None: ...
