"""FastAPI idea endpoints — the workspace idea bank.

POST   /v1/spaces/{space_id}/ideas              — add idea (notifies team)
GET    /v1/spaces/{space_id}/ideas              — list, newest first
PATCH  /v1/spaces/{space_id}/ideas/{idea_id}    — partial update
DELETE /v1/spaces/{space_id}/ideas/{idea_id}    — delete idea
"""

from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from zawia.api.dependencies import (
    get_current_user_id,
    get_idea_repo,
    get_membership_manager,
    get_notification_repo,
)
from zawia.api.posts import acting_member
from zawia.membership.manager import MembershipManager
from zawia.models.common import ContentType, new_uuid7
from zawia.models.compass import PillarRef
from zawia.models.workspace import Idea
from zawia.repositories.content import IdeaRepository
from zawia.repositories.mappers import idea_from_row
from zawia.repositories.notifications import NotificationRepository

router = APIRouter(prefix="/v1/spaces", tags=["ideas"])

logger: structlog.stdlib.BoundLogger = structlog.get_logger()


class CreateIdeaRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    content_type: ContentType
    pillar: PillarRef | None = None


class UpdateIdeaRequest(BaseModel):
    content: str | None = Field(default=None, min_length=1, max_length=5000)
    content_type: ContentType | None = None
    pillar: PillarRef | None = None


def new_idea_message(author_name: str, space_name: str) -> str:
    return f'{author_name} added a new idea in "{space_name}"'


@router.post("/{space_id}/ideas", status_code=201, response_model=Idea)
async def create_idea(
    space_id: UUID,
    body: CreateIdeaRequest,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: IdeaRepository = Depends(get_idea_repo),
    notifications: NotificationRepository = Depends(get_notification_repo),
) -> Idea:
    space = await manager.require_member(space_id, user_id)
    member = acting_member(space, user_id)

    row = await repo.create(
        idea_id=new_uuid7(),
        space_id=space_id,
        content=body.content,
        content_type=body.content_type.value,
        pillar=body.pillar.model_dump(mode="json") if body.pillar else None,
        created_by=member.model_dump(mode="json"),
    )

    recipients = [mid for mid in space.member_ids if mid != user_id]
    if recipients:
        await notifications.create_many(
            user_ids=recipients,
            message=new_idea_message(member.name or user_id, space.name),
            link=f"/spaces/{space_id}",
        )
    logger.info(
        "idea_created", space_id=str(space_id), idea_id=str(row.idea_id),
        notified=len(recipients),
    )
    return idea_from_row(row)


@router.get("/{space_id}/ideas", response_model=list[Idea])
async def list_ideas(
    space_id: UUID,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: IdeaRepository = Depends(get_idea_repo),
) -> list[Idea]:
    await manager.require_member(space_id, user_id)
    return [idea_from_row(r) for r in await repo.list_for_space(space_id)]


@router.patch("/{space_id}/ideas/{idea_id}", response_model=Idea)
async def update_idea(
    space_id: UUID,
    idea_id: UUID,
    body: UpdateIdeaRequest,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: IdeaRepository = Depends(get_idea_repo),
) -> Idea:
    await manager.require_member(space_id, user_id)
    row = await repo.get(space_id, idea_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Idea {idea_id} not found")
    changes = {
        key: value
        for key, value in body.model_dump(mode="json", exclude_unset=True).items()
        if value is not None or key == "pillar"
    }
    row = await repo.update(row, changes)
    return idea_from_row(row)


@router.delete("/{space_id}/ideas/{idea_id}", status_code=204)
async def delete_idea(
    space_id: UUID,
    idea_id: UUID,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: IdeaRepository = Depends(get_idea_repo),
) -> None:
    await manager.require_member(space_id, user_id)
    if not await repo.delete(space_id, idea_id):
        raise HTTPException(status_code=404, detail=f"Idea {idea_id} not found")
