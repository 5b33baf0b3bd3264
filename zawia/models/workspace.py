"""Space (workspace) model — a named collaboration unit.

A space owns its team, posts, ideas and an optional compass. The team and
``member_ids`` lists are parallel: ``member_ids[i] == team[i].id``.
"""

from datetime import datetime

from pydantic import Field, model_validator

from zawia.models.common import (
    ContentType,
    Platform,
    PostStatus,
    UserId,
    UTCTimestamp,
    UUIDv7,
    ZawiaBase,
    new_uuid7,
    utc_now,
)
from zawia.models.compass import Compass, PillarRef

MAX_TEAM_SIZE = 3
INVITE_TOKEN_LENGTH = 8


class Member(ZawiaBase):
    """Display identity of a team member, as stored on spaces and posts."""

    id: UserId
    name: str = ""
    avatar_url: str = ""


class UserProfile(ZawiaBase):
    """Profile record for an identity-provider user."""

    user_id: UserId
    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    avatar_url: str = ""
    avatar_color: str | None = None
    avatar_text: str | None = None

    def as_member(self) -> Member:
        return Member(id=self.user_id, name=self.name, avatar_url=self.avatar_url)


class ActivityLog(ZawiaBase):
    user: Member
    action: str
    date: UTCTimestamp = Field(default_factory=utc_now)


class Post(ZawiaBase):
    post_id: UUIDv7 = Field(default_factory=new_uuid7)
    space_id: UUIDv7
    title: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    platform: Platform
    post_type: str | None = None
    status: PostStatus = PostStatus.DRAFT
    content_type: ContentType
    pillar: PillarRef | None = None
    field_values: dict[str, str] = Field(default_factory=dict)
    scheduled_at: datetime
    created_by: Member
    last_modified_by: Member
    image_url: str | None = None
    activity_log: list[ActivityLog] = Field(default_factory=list)


class Idea(ZawiaBase):
    idea_id: UUIDv7 = Field(default_factory=new_uuid7)
    space_id: UUIDv7
    content: str = Field(..., min_length=1)
    content_type: ContentType
    pillar: PillarRef | None = None
    created_by: Member
    created_at: UTCTimestamp = Field(default_factory=utc_now)


class Notification(ZawiaBase):
    notification_id: UUIDv7 = Field(default_factory=new_uuid7)
    user_id: UserId
    message: str
    link: str
    read: bool = False
    created_at: UTCTimestamp = Field(default_factory=utc_now)


class Space(ZawiaBase):
    """Workspace aggregate.

    ``invite_token`` is either None (no open invite) or an 8-character
    code. ``version`` increments on every membership or token change and is
    the optimistic-concurrency key for those writes.
    """

    space_id: UUIDv7 = Field(default_factory=new_uuid7)
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    team: list[Member] = Field(default_factory=list)
    member_ids: list[UserId] = Field(default_factory=list)
    invite_token: str | None = Field(
        default=None, min_length=INVITE_TOKEN_LENGTH, max_length=INVITE_TOKEN_LENGTH,
    )
    compass: Compass | None = None
    version: int = Field(default=1, ge=1)
    posts: list[Post] = Field(default_factory=list)
    ideas: list[Idea] = Field(default_factory=list)
    created_by: UserId
    created_at: UTCTimestamp = Field(default_factory=utc_now)
    updated_at: UTCTimestamp = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _team_matches_roster(self) -> "Space":
        if len(self.team) != len(self.member_ids):
            raise ValueError("team and member_ids must have the same length.")
        if [m.id for m in self.team] != self.member_ids:
            raise ValueError("team and member_ids must list the same users in order.")
        if len(self.member_ids) > MAX_TEAM_SIZE:
            raise ValueError(f"A space holds at most {MAX_TEAM_SIZE} members.")
        return self

    @property
    def owner(self) -> Member | None:
        return self.team[0] if self.team else None

    @property
    def is_full(self) -> bool:
        return len(self.member_ids) >= MAX_TEAM_SIZE

    def has_member(self, user_id: str) -> bool:
        return user_id in self.member_ids


class InviteTokenCheck(ZawiaBase):
    """Outcome of a read-only invite token validation."""

    valid: bool
    space_name: str | None = None
    owner_name: str | None = None
    error: str | None = None
