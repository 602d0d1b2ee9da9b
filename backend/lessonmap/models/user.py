"""User ORM — lesson owner. Created by the users service, never deleted here.

Invariants:
    - id is UUID primary key
    - email is unique
    - lessons is a set: unique, no implied order

Design Decisions:
    - lessons loads lazily by default; the store opts into selectinload where the
      set is read or mutated (async sessions cannot lazy-load on attribute access)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from lessonmap.db.base import Base


class User(Base):
    """Lesson owner: holds the back-reference set."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    lessons: Mapped[set["Lesson"]] = relationship(
        "Lesson", secondary="user_lessons", collection_class=set,
    )
