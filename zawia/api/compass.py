"""FastAPI content compass and generation endpoints.

POST /v1/spaces/{space_id}/compass              — initialize (overwrites)
GET  /v1/spaces/{space_id}/compass              — current compass or null
PUT  /v1/spaces/{space_id}/compass/{section}    — replace one section
POST /v1/spaces/{space_id}/prompt               — rendered post prompt
POST /v1/spaces/{space_id}/ideas/expand         — expand an idea into a post
"""

from typing import Any
from uuid import UUID

import structlog
from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field

from zawia.agents.idea_expander import ExpandedPost, IdeaExpansionAgent
from zawia.agents.prompts.post_prompt import render_prompt
from zawia.api.dependencies import (
    get_current_user_id,
    get_idea_expander,
    get_membership_manager,
    get_space_repo,
)
from zawia.compass.editor import SECTION_UPDATERS, initialize_compass
from zawia.membership.manager import MembershipManager
from zawia.models.common import ContentType, Platform
from zawia.models.compass import Compass
from zawia.models.errors import CompassNotInitializedError, SpaceNotFoundError, ValidationError
from zawia.models.workspace import Space
from zawia.repositories.spaces import SpaceRepository

router = APIRouter(prefix="/v1/spaces", tags=["compass"])

logger: structlog.stdlib.BoundLogger = structlog.get_logger()


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class PromptRequest(BaseModel):
    idea_text: str = ""
    content_type: ContentType | None = None
    pillar_id: str | None = None
    platform: Platform | None = None
    post_type_id: str | None = None
    field_values: dict[str, str] = Field(default_factory=dict)


class PromptResponse(BaseModel):
    prompt: str


class ExpandIdeaRequest(PromptRequest):
    idea: str = Field(..., min_length=1, max_length=5000)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _save(repo: SpaceRepository, space_id: UUID, compass: Compass) -> Compass:
    if not await repo.update_compass(space_id, compass.model_dump(mode="json")):
        raise SpaceNotFoundError(f"Space {space_id} not found.")
    return compass


def _prompt_for(space: Space, body: PromptRequest, idea_text: str) -> str:
    pillar = space.compass.pillar_by_id(body.pillar_id) if space.compass and body.pillar_id else None
    return render_prompt(
        idea_text,
        body.content_type,
        pillar,
        body.platform,
        body.post_type_id,
        body.field_values,
        space.compass,
    )


# ---------------------------------------------------------------------------
# Compass
# ---------------------------------------------------------------------------


@router.post("/{space_id}/compass", status_code=201, response_model=Compass)
async def init_compass(
    space_id: UUID,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: SpaceRepository = Depends(get_space_repo),
) -> Compass:
    await manager.require_member(space_id, user_id)
    return await _save(repo, space_id, initialize_compass())


@router.get("/{space_id}/compass", response_model=Compass | None)
async def get_compass(
    space_id: UUID,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
) -> Compass | None:
    space = await manager.require_member(space_id, user_id)
    return space.compass


@router.put("/{space_id}/compass/{section}", response_model=Compass)
async def update_compass_section(
    space_id: UUID,
    section: str,
    patch: Any = Body(...),
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    repo: SpaceRepository = Depends(get_space_repo),
) -> Compass:
    updater = SECTION_UPDATERS.get(section)
    if updater is None:
        raise ValidationError(
            f"Unknown compass section {section!r}; expected one of "
            f"{', '.join(SECTION_UPDATERS)}."
        )
    space = await manager.require_member(space_id, user_id)
    if space.compass is None:
        raise CompassNotInitializedError("Initialize the compass before editing its sections.")
    compass = updater(space.compass, patch)
    logger.info("compass_updated", space_id=str(space_id), section=section)
    return await _save(repo, space_id, compass)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


@router.post("/{space_id}/prompt", response_model=PromptResponse)
async def preview_prompt(
    space_id: UUID,
    body: PromptRequest,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
) -> PromptResponse:
    space = await manager.require_member(space_id, user_id)
    return PromptResponse(prompt=_prompt_for(space, body, body.idea_text))


@router.post("/{space_id}/ideas/expand", response_model=ExpandedPost)
async def expand_idea(
    space_id: UUID,
    body: ExpandIdeaRequest,
    user_id: str = Depends(get_current_user_id),
    manager: MembershipManager = Depends(get_membership_manager),
    agent: IdeaExpansionAgent = Depends(get_idea_expander),
) -> ExpandedPost:
    space = await manager.require_member(space_id, user_id)
    prompt = _prompt_for(space, body, body.idea) or None
    result = await agent.expand(body.idea, prompt=prompt)
    logger.info(
        "idea_expanded", space_id=str(space_id), user_id=user_id,
        compass_prompt=prompt is not None,
    )
    return result
