"""User→Lesson back-reference table — the user's owned-lesson set.

Invariants:
    - (user_id, lesson_id) is unique: a lesson appears at most once per user
    - A row exists iff lessons.creator_id == user_id for that lesson

Design Decisions:
    - Separate table instead of deriving the set from lessons.creator_id: the set is
      its own write, so create/delete must keep both sides in one transaction
    - No ON DELETE CASCADE: a dangling row must fail loudly, not be cleaned silently
"""

from sqlalchemy import Column, ForeignKey, Table
from sqlalchemy.dialects.postgresql import UUID

from lessonmap.db.base import Base


user_lessons = Table(
    "user_lessons",
    Base.metadata,
    Column(
        "user_id", UUID(as_uuid=True), ForeignKey("users.id"),
        primary_key=True,
    ),
    Column(
        "lesson_id", UUID(as_uuid=True), ForeignKey("lessons.id"),
        primary_key=True,
    ),
)
