"""Entity Store — SQLAlchemy implementation of the EntityStore protocol.

Invariants:
    - One store per AsyncSession (per request); never shared across requests
    - Every SQLAlchemyError leaves this module as StoreError(operation): driver text is logged only
    - atomic() commits on clean exit and rolls back on ANY exception, then re-raises
    - add_lesson / remove_lesson / save_user flush but never commit: only atomic() commits

Design Decisions:
    - Flush inside each staged write: constraint violations surface at the step that caused
      them, while the surrounding transaction still decides commit vs rollback
    - Relation expansion via selectinload: async sessions cannot lazy-load on attribute access
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lessonmap.core.domain_types import LessonId, UserId
from lessonmap.core.errors import StoreError
from lessonmap.models.lesson import Lesson
from lessonmap.models.user import User

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _store_errors(operation: str) -> AsyncGenerator[None, None]:
    """Map SQLAlchemy failures to an opaque StoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            f"Entity store {operation} failed: {e}",
            extra={"operation": operation},
        )
        raise StoreError(operation) from e


class SqlEntityStore:
    """Users/Lessons persistence over a single AsyncSession."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # ─── Reads ──────────────────────────────────────────────────

    async def find_lesson(self, lesson_id: LessonId) -> Lesson | None:
        async with _store_errors("find_lesson"):
            return await self._session.get(Lesson, lesson_id)

    async def find_user(
        self, user_id: UserId, expand_lessons: bool = False,
    ) -> User | None:
        query = select(User).where(User.id == user_id)
        if expand_lessons:
            query = query.options(selectinload(User.lessons))
        async with _store_errors("find_user"):
            result = await self._session.execute(query)
            return result.scalar_one_or_none()

    async def find_lesson_with_creator(
        self, lesson_id: LessonId,
    ) -> Lesson | None:
        """Lesson plus its creator and the creator's lesson set."""
        query = (
            select(Lesson)
            .where(Lesson.id == lesson_id)
            .options(
                selectinload(Lesson.creator).selectinload(User.lessons),
            )
        )
        async with _store_errors("find_lesson_with_creator"):
            result = await self._session.execute(query)
            return result.scalar_one_or_none()

    # ─── Staged writes (inside atomic() only) ───────────────────

    async def add_lesson(self, lesson: Lesson) -> None:
        async with _store_errors("add_lesson"):
            self._session.add(lesson)
            await self._session.flush()

    async def remove_lesson(self, lesson: Lesson) -> None:
        async with _store_errors("remove_lesson"):
            await self._session.delete(lesson)
            await self._session.flush()

    async def save_user(self, user: User) -> None:
        async with _store_errors("save_user"):
            self._session.add(user)
            await self._session.flush()

    # ─── Single-row write ───────────────────────────────────────

    async def save_lesson(self, lesson: Lesson) -> None:
        """Persist one lesson on its own: no cross-entity effects."""
        try:
            async with _store_errors("save_lesson"):
                self._session.add(lesson)
                await self._session.commit()
        except StoreError:
            await self._session.rollback()
            raise

    # ─── Transaction scope ──────────────────────────────────────

    @asynccontextmanager
    async def atomic(self) -> AsyncGenerator[None, None]:
        """All-or-nothing scope: commit on clean exit, rollback on any exception."""
        try:
            yield
            async with _store_errors("commit"):
                await self._session.commit()
        except BaseException:
            await self._session.rollback()
            raise
