"""FastAPI workspace and invite endpoints.

POST /v1/spaces                                 — create workspace
GET  /v1/spaces                                 — caller's workspaces
GET  /v1/spaces/{space_id}                      — one workspace (members only)
POST /v1/spaces/{space_id}/invite-token         — open a fresh invite
POST /v1/invites/validate                       — read-only token check
POST /v1/invites/join                           — redeem a token

Domain errors propagate to the handlers in ``zawia.api.errors``.
"""

from uuid import UUID

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from zawia.api.dependencies import get_current_user_id, get_membership_manager
from zawia.membership.manager import MembershipManager
from zawia.models.errors import ZawiaError
from zawia.models.workspace import InviteTokenCheck, Space

router = APIRouter(prefix="/v1", tags=["spaces"])

logger: structlog.stdlib.BoundLogger = structlog.get_logger()


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateSpaceRequest(BaseModel):
    name: str = Field(..., max_length=255)
    description: str = Field(default="", max_length=2000)


class InviteTokenRequest(BaseModel):
    token: str = Field(..., max_length=64)


# ---------------------------------------------------------------------------
# Spaces
# ---------------------------------------------------------------------------


@router.post("/spaces", status_code=201, response_model=Space)
async def create_space(
    body: CreateSpaceRequest,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
) -> Space:
    space = await manager.create_workspace(
        name=body.name, creator_id=user_id, description=body.description,
    )
    logger.info("space_created", space_id=str(space.space_id), user_id=user_id)
    return space


@router.get("/spaces", response_model=list[Space])
async def list_spaces(
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
) -> list[Space]:
    return await manager.list_spaces(user_id)


@router.get("/spaces/{space_id}", response_model=Space)
async def get_space(
    space_id: UUID,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
) -> Space:
    return await manager.get_space(space_id, user_id)


@router.post("/spaces/{space_id}/invite-token", response_model=Space)
async def regenerate_invite_token(
    space_id: UUID,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
) -> Space:
    space = await manager.regenerate_invite_token(space_id, user_id)
    logger.info("invite_token_regenerated", space_id=str(space_id), user_id=user_id)
    return space


# ---------------------------------------------------------------------------
# Invites
# ---------------------------------------------------------------------------


@router.post("/invites/validate", response_model=InviteTokenCheck)
async def validate_invite(
    body: InviteTokenRequest,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
) -> InviteTokenCheck:
    return await manager.validate_invite_token(body.token, user_id)


@router.post("/invites/join", response_model=Space)
async def join_space(
    body: InviteTokenRequest,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
) -> Space:
    try:
        space = await manager.join_space_with_token(body.token, user_id)
    except ZawiaError as exc:
        logger.info("join_rejected", user_id=user_id, reason=type(exc).__name__)
        raise
    logger.info("space_joined", space_id=str(space.space_id), user_id=user_id)
    return space
