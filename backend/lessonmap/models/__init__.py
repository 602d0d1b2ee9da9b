"""ORM Models — SQLAlchemy declarative models for users and lessons.

Invariants:
    - All models inherit from Base (db/base.py)
    - Lesson.creator_id and the user_lessons row for the same pair are written together

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from lessonmap.models.user_lesson import user_lessons  # noqa: F401
from lessonmap.models.user import User  # noqa: F401
from lessonmap.models.lesson import Lesson  # noqa: F401
