"""Domain Types — identity and value types shared by the service and its collaborators.

Invariants:
    - UserId, LessonId wrap UUIDs: never compare a bare string against an id
    - Coordinates are a (lat, lng) pair of floats, produced only by a Geocoder
    - LessonDraft carries everything needed to build a Lesson, already validated

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - Frozen dataclasses for values: a draft cannot be mutated between geocoding and persistence
"""

from dataclasses import dataclass
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
LessonId = NewType("LessonId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Coordinates:
    """Geocoded location of an address."""
    lat: float
    lng: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class LessonDraft:
    """Input for a new Lesson: validated upstream, geocoded, image already accepted."""
    title: str
    description: str
    address: str
    location: Coordinates
    image: str
