"""Lesson Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - title: non-empty; description: at least 5 chars; address: non-empty
    - LessonUpdate carries only title/description: address, location and image are immutable
    - Responses wrap a single lesson as {"lesson": ...} and a list as {"lessons": [...]}
"""

from uuid import UUID

from pydantic import BaseModel, Field

from lessonmap.models.lesson import Lesson


class LessonCreate(BaseModel):
    """Lesson creation fields (multipart form; the image travels separately)."""
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=5)
    address: str = Field(min_length=1, max_length=500)


class LessonUpdate(BaseModel):
    """Lesson update: only the text fields are editable."""
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=5)


class Location(BaseModel):
    lat: float
    lng: float


class LessonResponse(BaseModel):
    """Lesson response: public-facing lesson data."""
    id: UUID
    title: str
    description: str
    address: str
    location: Location
    image: str
    creator: UUID

    @classmethod
    def from_model(cls, lesson: Lesson) -> "LessonResponse":
        return cls(
            id=lesson.id,
            title=lesson.title,
            description=lesson.description,
            address=lesson.address,
            location=Location(lat=lesson.latitude, lng=lesson.longitude),
            image=lesson.image,
            creator=lesson.creator_id,
        )


class LessonEnvelope(BaseModel):
    lesson: LessonResponse


class LessonsEnvelope(BaseModel):
    lessons: list[LessonResponse]


class MessageResponse(BaseModel):
    message: str
