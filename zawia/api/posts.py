"""FastAPI post endpoints — workspace-scoped content calendar.

POST   /v1/spaces/{space_id}/posts              — create post
GET    /v1/spaces/{space_id}/posts              — list (optional start/end)
GET    /v1/spaces/{space_id}/posts/{post_id}    — get post
PATCH  /v1/spaces/{space_id}/posts/{post_id}    — partial update
DELETE /v1/spaces/{space_id}/posts/{post_id}    — delete post

Every write records an activity log entry for the acting member.
"""

from datetime import datetime
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from zawia.api.dependencies import (
    get_current_user_id,
    get_membership_manager,
    get_post_repo,
)
from zawia.membership.manager import MembershipManager
from zawia.models.common import ContentType, Platform, PostStatus, new_uuid7
from zawia.models.compass import PillarRef
from zawia.models.errors import ValidationError
from zawia.models.post_types import get_post_type
from zawia.models.workspace import ActivityLog, Member, Post, Space
from zawia.repositories.content import PostRepository
from zawia.repositories.mappers import post_from_row

router = APIRouter(prefix="/v1/spaces", tags=["posts"])

logger: structlog.stdlib.BoundLogger = structlog.get_logger()

# Fields a PATCH may clear with an explicit null.
_NULLABLE_FIELDS = frozenset({"post_type", "pillar", "image_url"})


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreatePostRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    platform: Platform
    post_type: str | None = None
    status: PostStatus = PostStatus.DRAFT
    content_type: ContentType
    pillar: PillarRef | None = None
    field_values: dict[str, str] = Field(default_factory=dict)
    scheduled_at: datetime
    image_url: str | None = Field(default=None, max_length=1000)


class UpdatePostRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = None
    platform: Platform | None = None
    post_type: str | None = None
    status: PostStatus | None = None
    content_type: ContentType | None = None
    pillar: PillarRef | None = None
    field_values: dict[str, str] | None = None
    scheduled_at: datetime | None = None
    image_url: str | None = Field(default=None, max_length=1000)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def acting_member(space: Space, user_id: str) -> Member:
    for member in space.team:
        if member.id == user_id:
            return member
    return Member(id=user_id)


def _check_post_type(platform: Platform, post_type: str | None) -> None:
    if post_type and get_post_type(platform, post_type) is None:
        raise ValidationError(f"Unknown post type {post_type!r} for {platform.value}.")


def _log_entry(member: Member, action: str) -> dict:
    return ActivityLog(user=member, action=action).model_dump(mode="json")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/{space_id}/posts", status_code=201, response_model=Post)
async def create_post(
    space_id: UUID,
    body: CreatePostRequest,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: PostRepository = Depends(get_post_repo),
) -> Post:
    space = await manager.require_member(space_id, user_id)
    _check_post_type(body.platform, body.post_type)
    member = acting_member(space, user_id)

    row = await repo.create(
        post_id=new_uuid7(),
        space_id=space_id,
        title=body.title,
        content=body.content,
        platform=body.platform.value,
        post_type=body.post_type,
        status=body.status.value,
        content_type=body.content_type.value,
        pillar=body.pillar.model_dump(mode="json") if body.pillar else None,
        field_values=body.field_values,
        scheduled_at=body.scheduled_at,
        created_by=member.model_dump(mode="json"),
        image_url=body.image_url,
        activity_log=[_log_entry(member, "created")],
    )
    logger.info("post_created", space_id=str(space_id), post_id=str(row.post_id))
    return post_from_row(row)


@router.get("/{space_id}/posts", response_model=list[Post])
async def list_posts(
    space_id: UUID,
    start: datetime | None = Query(default=None),
    end: datetime | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: PostRepository = Depends(get_post_repo),
) -> list[Post]:
    await manager.require_member(space_id, user_id)
    rows = await repo.list_for_space(space_id, start=start, end=end)
    return [post_from_row(r) for r in rows]


@router.get("/{space_id}/posts/{post_id}", response_model=Post)
async def get_post(
    space_id: UUID,
    post_id: UUID,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: PostRepository = Depends(get_post_repo),
) -> Post:
    await manager.require_member(space_id, user_id)
    row = await repo.get(space_id, post_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Post {post_id} not found")
    return post_from_row(row)


@router.patch("/{space_id}/posts/{post_id}", response_model=Post)
async def update_post(
    space_id: UUID,
    post_id: UUID,
    body: UpdatePostRequest,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: PostRepository = Depends(get_post_repo),
) -> Post:
    space = await manager.require_member(space_id, user_id)
    row = await repo.get(space_id, post_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Post {post_id} not found")

    changes = {
        key: value
        for key, value in body.model_dump(mode="json", exclude_unset=True).items()
        if value is not None or key in _NULLABLE_FIELDS
    }
    _check_post_type(
        Platform(changes.get("platform", row.platform)),
        changes.get("post_type", row.post_type),
    )
    if "scheduled_at" in changes:
        changes["scheduled_at"] = body.scheduled_at

    member = acting_member(space, user_id)
    new_status = changes.get("status")
    if new_status is not None and new_status != row.status:
        action = f"marked as {new_status}"
    else:
        action = "updated"
    changes["last_modified_by"] = member.model_dump(mode="json")
    changes["activity_log"] = [*(row.activity_log or []), _log_entry(member, action)]

    row = await repo.update(row, changes)
    logger.info("post_updated", space_id=str(space_id), post_id=str(post_id), action=action)
    return post_from_row(row)


@router.delete("/{space_id}/posts/{post_id}", status_code=204)
async def delete_post(
    space_id: UUID,
    post_id: UUID,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: PostRepository = Depends(get_post_repo),
) -> None:
    await manager.require_member(space_id, user_id)
    if not await repo.delete(space_id, post_id):
        raise HTTPException(status_code=404, detail=f"Post {post_id} not found")
    logger.info("post_deleted", space_id=str(space_id), post_id=str(post_id))
