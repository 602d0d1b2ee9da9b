"""Lesson Routes — HTTP surface for the lesson service.

Invariants:
    - GET routes are public; POST/PATCH/DELETE require a verified bearer token
    - Input shape validated by FastAPI before the service runs (422 on failure)
    - The uploaded image is accepted by the file store before the service is called

Design Decisions:
    - Multipart form for create (image + text fields), JSON body for update
    - Response envelopes {"lesson": ...} / {"lessons": [...]} match the existing web client
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from lessonmap.api.dependencies import get_file_store, get_lesson_service
from lessonmap.core.domain_types import LessonId, UserId
from lessonmap.infrastructure.auth import get_requester_id
from lessonmap.infrastructure.file_store import LocalFileStore
from lessonmap.schemas.lesson import (
    LessonCreate,
    LessonEnvelope,
    LessonResponse,
    LessonsEnvelope,
    LessonUpdate,
    MessageResponse,
)
from lessonmap.services.lesson_service import LessonService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/lessons", tags=["lessons"])


@router.get("/user/{user_id}", response_model=LessonsEnvelope)
async def get_lessons_by_user(
    user_id: UUID, service: LessonService = Depends(get_lesson_service),
):
    """All lessons owned by a user (404 when there are none)."""
    lessons = await service.get_lessons_by_user(UserId(user_id))
    return LessonsEnvelope(
        lessons=[LessonResponse.from_model(lesson) for lesson in lessons],
    )


@router.get("/{lesson_id}", response_model=LessonEnvelope)
async def get_lesson(
    lesson_id: UUID, service: LessonService = Depends(get_lesson_service),
):
    lesson = await service.get_lesson_by_id(LessonId(lesson_id))
    return LessonEnvelope(lesson=LessonResponse.from_model(lesson))


@router.post(
    "", response_model=LessonEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_lesson(
    title: str = Form(min_length=1, max_length=200),
    description: str = Form(min_length=5),
    address: str = Form(min_length=1, max_length=500),
    image: UploadFile = File(...),
    requester_id: UserId = Depends(get_requester_id),
    files: LocalFileStore = Depends(get_file_store),
    service: LessonService = Depends(get_lesson_service),
):
    """Create a lesson for the authenticated user."""
    body = LessonCreate(title=title, description=description, address=address)
    image_path = await files.accept(image)
    lesson = await service.create_lesson(requester_id, body, image_path)
    return LessonEnvelope(lesson=LessonResponse.from_model(lesson))


@router.patch("/{lesson_id}", response_model=LessonEnvelope)
async def update_lesson(
    lesson_id: UUID,
    body: LessonUpdate,
    requester_id: UserId = Depends(get_requester_id),
    service: LessonService = Depends(get_lesson_service),
):
    """Edit title/description. Creator only."""
    lesson = await service.update_lesson(
        requester_id, LessonId(lesson_id), body.title, body.description,
    )
    return LessonEnvelope(lesson=LessonResponse.from_model(lesson))


@router.delete("/{lesson_id}", response_model=MessageResponse)
async def delete_lesson(
    lesson_id: UUID,
    requester_id: UserId = Depends(get_requester_id),
    service: LessonService = Depends(get_lesson_service),
):
    """Delete a lesson and release its image. Creator only."""
    await service.delete_lesson(requester_id, LessonId(lesson_id))
    return MessageResponse(message="Deleted lesson.")
