"""Test doubles and read-back helpers shared across test packages."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lessonmap.core.domain_types import Coordinates
from lessonmap.core.errors import GeocodeError
from lessonmap.models.lesson import Lesson
from lessonmap.models.user import User


class FakeGeocoder:
    """Geocoder returning fixed coordinates, or raising a configured error."""

    def __init__(self, coordinates=Coordinates(lat=1.0, lng=1.0)):
        self.coordinates = coordinates
        self.error: GeocodeError | None = None
        self.calls: list[str] = []

    async def resolve(self, address):
        self.calls.append(address)
        if self.error:
            raise self.error
        return self.coordinates


class RecordingFileStore:
    """File store that only records releases. fail=True makes release raise."""

    def __init__(self, fail: bool = False):
        self.released: list[str] = []
        self.fail = fail

    async def release(self, path):
        self.released.append(path)
        if self.fail:
            raise OSError("disk unavailable")


def make_lesson(creator: User, title: str = "Pottery basics") -> Lesson:
    return Lesson(
        title=title,
        description="Hands-on wheel throwing",
        address="12 Clay Lane",
        latitude=40.7,
        longitude=-74.0,
        image=f"uploads/images/{uuid.uuid4()}.png",
        creator_id=creator.id,
        creator=creator,
    )


async def load_user_lesson_ids(session: AsyncSession, user_id) -> set:
    result = await session.execute(
        select(User).where(User.id == user_id)
        .options(selectinload(User.lessons)),
    )
    user = result.scalar_one()
    return {lesson.id for lesson in user.lessons}


async def count_rows(session: AsyncSession, table) -> int:
    result = await session.execute(select(func.count()).select_from(table))
    return result.scalar_one()


async def lesson_exists(session: AsyncSession, lesson_id) -> bool:
    return await session.get(Lesson, lesson_id) is not None
