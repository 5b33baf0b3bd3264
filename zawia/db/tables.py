"""SQLAlchemy ORM table models for Zawia.

Uses FlexJSON (JSONB on Postgres, JSON on SQLite) for nested documents:
the team roster, the compass, activity logs and post field values.

Categories:
- IDENTITY: UserProfile
- WORKSPACE: Space, SpaceMember (membership index)
- CONTENT: Post, Idea
- DELIVERY: Notification
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from zawia.db.session import Base

# JSONB on PostgreSQL, plain JSON on SQLite (for tests)
FlexJSON = JSONB().with_variant(JSON(), "sqlite")


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class UserProfileRow(Base):
    __tablename__ = "user_profiles"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str] = mapped_column(String(1000), default="")
    avatar_color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    avatar_text: Mapped[str | None] = mapped_column(String(10), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------


class SpaceRow(Base):
    """Workspace document.

    invite_token is UNIQUE; NULL means no open invite (NULLs never collide).
    version is bumped by every membership/token write and guards them.
    """

    __tablename__ = "spaces"

    space_id: Mapped[UUID] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    team = mapped_column(FlexJSON, nullable=False)
    member_ids = mapped_column(FlexJSON, nullable=False)
    invite_token: Mapped[str | None] = mapped_column(
        String(8), unique=True, nullable=True, index=True,
    )
    compass = mapped_column(FlexJSON, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_by: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SpaceMemberRow(Base):
    """Membership index: one row per (space, user), for "my spaces" queries."""

    __tablename__ = "space_members"

    space_id: Mapped[UUID] = mapped_column(
        ForeignKey("spaces.space_id", ondelete="CASCADE"), primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(128), primary_key=True, index=True)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class PostRow(Base):
    __tablename__ = "posts"

    post_id: Mapped[UUID] = mapped_column(primary_key=True)
    space_id: Mapped[UUID] = mapped_column(
        ForeignKey("spaces.space_id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="")
    platform: Mapped[str] = mapped_column(String(50), nullable=False)
    post_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    content_type: Mapped[str] = mapped_column(String(50), nullable=False)
    pillar = mapped_column(FlexJSON, nullable=True)
    field_values = mapped_column(FlexJSON, nullable=False, default=dict)
    scheduled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_by = mapped_column(FlexJSON, nullable=False)
    last_modified_by = mapped_column(FlexJSON, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    activity_log = mapped_column(FlexJSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class IdeaRow(Base):
    __tablename__ = "ideas"

    idea_id: Mapped[UUID] = mapped_column(primary_key=True)
    space_id: Mapped[UUID] = mapped_column(
        ForeignKey("spaces.space_id", ondelete="CASCADE"), nullable=False, index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    content_type: Mapped[str] = mapped_column(String(50), nullable=False)
    pillar = mapped_column(FlexJSON, nullable=True)
    created_by = mapped_column(FlexJSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------


class NotificationRow(Base):
    __tablename__ = "notifications"

    notification_id: Mapped[UUID] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    link: Mapped[str] = mapped_column(String(500), nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
