"""Shared types, enums, and base models used across Zawia domain models."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


# --- Reusable annotated types ---

UUIDv7 = Annotated[UUID, Field(description="Time-sortable UUID v7.")]
UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]
UserId = Annotated[
    str,
    Field(min_length=1, max_length=128, description="Opaque identity-provider user id."),
]


# --- Shared enums ---


class Platform(StrEnum):
    """Publishing channels a post can target."""

    INSTAGRAM = "instagram"
    X = "x"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    THREADS = "threads"
    TIKTOK = "tiktok"
    SNAPCHAT = "snapchat"
    EMAIL = "email"


class PostStatus(StrEnum):
    """Lightweight post workflow: draft -> ready -> published."""

    DRAFT = "draft"
    READY = "ready"
    PUBLISHED = "published"


class ContentType(StrEnum):
    """The five fixed content-mix categories."""

    EDUCATIONAL = "educational"
    ENTERTAINMENT = "entertainment"
    INSPIRATIONAL = "inspirational"
    INTERACTIVE = "interactive"
    PROMOTIONAL = "promotional"


CONTENT_TYPE_LABELS: dict[ContentType, str] = {
    ContentType.EDUCATIONAL: "تعليمي",
    ContentType.ENTERTAINMENT: "ترفيهي",
    ContentType.INSPIRATIONAL: "ملهم",
    ContentType.INTERACTIVE: "تفاعلي",
    ContentType.PROMOTIONAL: "ترويجي",
}


# --- Base model ---


class ZawiaBase(BaseModel):
    """Base model with common configuration for all Zawia Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "ser_json_timedelta": "iso8601",
        "protected_namespaces": (),
    }
