"""Lesson Consistency Coordinator — the only writer that touches both users and lessons.

Invariants:
    - lesson.creator_id == user.id  ⇔  lesson ∈ user.lessons, before and after every call
    - Both sides of the link are written inside one EntityStore.atomic() scope: never two commits
    - Any store failure inside the scope → full rollback + one coarse error (CreateFailed/DeleteFailed)
    - Image release happens strictly after commit and can never fail the deletion

Design Decisions:
    - Ownership is plain id equality (requester_id == creator.id), no permission model
    - Image captured before the transaction: the lesson row is gone once it commits
    - Release outside the transaction: no transaction held open across filesystem IO
"""

import logging

from lessonmap.core.domain_types import LessonDraft, LessonId, UserId
from lessonmap.core.errors import (
    CreateFailedError,
    DeleteFailedError,
    ErrorContext,
    ResourceNotFoundError,
    StoreError,
    UnauthorizedError,
)
from lessonmap.core.repository_protocols import EntityStore, FileStore
from lessonmap.models.lesson import Lesson
from lessonmap.models.user import User

logger = logging.getLogger(__name__)


class LessonConsistencyCoordinator:
    """Creates and deletes lessons while keeping the user back-reference in sync."""

    def __init__(self, store: EntityStore, files: FileStore):
        self._store = store
        self._files = files

    async def create_lesson_for(self, user: User, draft: LessonDraft) -> Lesson:
        """Persist a new lesson and link it to its creator, atomically.

        `user` must come from the same store with its lessons expanded.
        """
        # Captured up front: a rollback expires every instance in the session
        user_id = str(user.id)
        lesson = Lesson(
            title=draft.title,
            description=draft.description,
            address=draft.address,
            latitude=draft.location.lat,
            longitude=draft.location.lng,
            image=draft.image,
            creator_id=user.id,
        )
        try:
            async with self._store.atomic():
                await self._store.add_lesson(lesson)
                user.lessons.add(lesson)
                await self._store.save_user(user)
        except StoreError as e:
            logger.error(
                f"Lesson creation rolled back at {e.operation}",
                extra={"user_id": user_id, "operation": e.operation},
            )
            raise CreateFailedError(
                context=ErrorContext(user_id=user_id),
            ) from e

        logger.info(
            "Lesson created",
            extra={"lesson_id": str(lesson.id), "user_id": user_id},
        )
        return lesson

    async def delete_lesson(
        self, lesson_id: LessonId, requester_id: UserId,
    ) -> None:
        """Remove a lesson and its back-reference, then release its image."""
        context = ErrorContext(lesson_id=str(lesson_id), user_id=str(requester_id))
        try:
            lesson = await self._store.find_lesson_with_creator(lesson_id)
        except StoreError as e:
            raise DeleteFailedError(context=context) from e

        if lesson is None:
            raise ResourceNotFoundError(
                "Lesson", str(lesson_id),
                message="Could not find lesson for this id.",
                context=context,
            )
        owner = lesson.creator
        if owner.id != requester_id:
            raise UnauthorizedError("delete", context=context)

        image_path = lesson.image

        try:
            async with self._store.atomic():
                # Back-reference first: the link row must go before the lesson row
                owner.lessons.discard(lesson)
                await self._store.remove_lesson(lesson)
                await self._store.save_user(owner)
        except StoreError as e:
            logger.error(
                f"Lesson deletion rolled back at {e.operation}",
                extra={
                    "lesson_id": str(lesson_id),
                    "user_id": str(requester_id),
                    "operation": e.operation,
                },
            )
            raise DeleteFailedError(context=context) from e

        logger.info(
            "Lesson deleted",
            extra={"lesson_id": str(lesson_id), "user_id": str(requester_id)},
        )
        await self._release_image(image_path)

    async def _release_image(self, image_path: str) -> None:
        try:
            await self._files.release(image_path)
        except Exception as e:
            # Deletion is already committed; an orphaned file is acceptable
            logger.error(
                f"Image release failed: {e}",
                extra={"image_path": image_path},
            )
