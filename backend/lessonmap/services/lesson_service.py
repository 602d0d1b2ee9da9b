"""Lesson Service — the five public lesson operations.

Invariants:
    - Reads and single-row updates go straight to the store; create/delete go through
      LessonConsistencyCoordinator (never a hand-rolled two-step write here)
    - Geocoding happens before any write: a geocode failure leaves the store untouched
    - A failed create releases the already-accepted image before re-raising
    - Every failure leaves as a LessonMapError subclass

Design Decisions:
    - A user with zero lessons is reported as not found, same as a missing user
      (ADR: observable behaviour of the existing clients, kept on purpose)
    - update checks creator_id directly: no relation expansion needed for a single-row write
"""

import logging

from lessonmap.core.domain_types import LessonDraft, LessonId, UserId
from lessonmap.core.errors import (
    CreateFailedError,
    ErrorContext,
    LessonMapError,
    ResourceNotFoundError,
    StoreError,
    UnauthorizedError,
)
from lessonmap.core.repository_protocols import EntityStore, FileStore, Geocoder
from lessonmap.models.lesson import Lesson
from lessonmap.schemas.lesson import LessonCreate
from lessonmap.services.lesson_consistency import LessonConsistencyCoordinator

logger = logging.getLogger(__name__)


class LessonService:
    """Public contract for lessons: get, list-by-user, create, update, delete."""

    def __init__(
        self,
        store: EntityStore,
        coordinator: LessonConsistencyCoordinator,
        geocoder: Geocoder,
        files: FileStore,
    ):
        self._store = store
        self._coordinator = coordinator
        self._geocoder = geocoder
        self._files = files

    async def get_lesson_by_id(self, lesson_id: LessonId) -> Lesson:
        lesson = await self._store.find_lesson(lesson_id)
        if lesson is None:
            raise ResourceNotFoundError(
                "Lesson", str(lesson_id),
                message="Could not find lesson for the provided id.",
                context=ErrorContext(lesson_id=str(lesson_id)),
            )
        return lesson

    async def get_lessons_by_user(self, user_id: UserId) -> list[Lesson]:
        user = await self._store.find_user(user_id, expand_lessons=True)
        if user is None or not user.lessons:
            raise ResourceNotFoundError(
                "User", str(user_id),
                message="Could not find lessons for the provided user id.",
                context=ErrorContext(user_id=str(user_id)),
            )
        return sorted(user.lessons, key=lambda lesson: lesson.created_at)

    async def create_lesson(
        self, requester_id: UserId, body: LessonCreate, image: str,
    ) -> Lesson:
        """Geocode, resolve the requester, then create through the coordinator.

        `image` is the path of an upload the file store has already accepted;
        it is released again if creation fails.
        """
        try:
            return await self._create(requester_id, body, image)
        except LessonMapError:
            await self._files.release(image)
            raise

    async def _create(
        self, requester_id: UserId, body: LessonCreate, image: str,
    ) -> Lesson:
        location = await self._geocoder.resolve(body.address)
        draft = LessonDraft(
            title=body.title,
            description=body.description,
            address=body.address,
            location=location,
            image=image,
        )

        context = ErrorContext(user_id=str(requester_id))
        try:
            user = await self._store.find_user(requester_id, expand_lessons=True)
        except StoreError as e:
            raise CreateFailedError(context=context) from e
        if user is None:
            raise ResourceNotFoundError(
                "User", str(requester_id),
                message="Could not find user for provided id.",
                context=context,
            )
        return await self._coordinator.create_lesson_for(user, draft)

    async def update_lesson(
        self,
        requester_id: UserId,
        lesson_id: LessonId,
        title: str,
        description: str,
    ) -> Lesson:
        lesson = await self.get_lesson_by_id(lesson_id)
        if lesson.creator_id != requester_id:
            raise UnauthorizedError(
                "edit",
                context=ErrorContext(
                    lesson_id=str(lesson_id), user_id=str(requester_id),
                ),
            )
        lesson.title = title
        lesson.description = description
        await self._store.save_lesson(lesson)
        logger.info(
            "Lesson updated",
            extra={"lesson_id": str(lesson_id), "user_id": str(requester_id)},
        )
        return lesson

    async def delete_lesson(
        self, requester_id: UserId, lesson_id: LessonId,
    ) -> None:
        await self._coordinator.delete_lesson(lesson_id, requester_id)
