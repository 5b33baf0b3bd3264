"""FastAPI profile endpoints for the calling user.

PUT    /v1/profile    — create or update
GET    /v1/profile    — fetch
DELETE /v1/profile    — delete; the body must echo the profile email
"""

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from zawia.api.dependencies import get_current_user_id, get_profile_repo
from zawia.models.errors import ProfileNotFoundError, ValidationError
from zawia.models.workspace import UserProfile
from zawia.repositories.mappers import profile_from_row
from zawia.repositories.profiles import ProfileRepository

router = APIRouter(prefix="/v1/profile", tags=["profiles"])

logger: structlog.stdlib.BoundLogger = structlog.get_logger()


class UpsertProfileRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    avatar_url: str = Field(default="", max_length=1000)
    avatar_color: str | None = Field(default=None, max_length=50)
    avatar_text: str | None = Field(default=None, max_length=10)


class DeleteProfileRequest(BaseModel):
    confirmation: str = ""


@router.put("", response_model=UserProfile)
async def upsert_profile(
    body: UpsertProfileRequest,
    user_id: str = Depends(get_current_user_id),
    repo: ProfileRepository = Depends(get_profile_repo),
) -> UserProfile:
    row = await repo.upsert(user_id=user_id, **body.model_dump())
    return profile_from_row(row)


@router.get("", response_model=UserProfile)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    repo: ProfileRepository = Depends(get_profile_repo),
) -> UserProfile:
    row = await repo.get(user_id)
    if row is None:
        raise ProfileNotFoundError("User profile not found.")
    return profile_from_row(row)


@router.delete("", status_code=204)
async def delete_profile(
    body: DeleteProfileRequest,
    user_id: str = Depends(get_current_user_id),
    repo: ProfileRepository = Depends(get_profile_repo),
) -> None:
    row = await repo.get(user_id)
    if row is None:
        raise ProfileNotFoundError("User profile not found.")
    expected = row.email or row.name
    if body.confirmation.strip() != expected:
        raise ValidationError("Confirmation text does not match your email.")
    await repo.delete(user_id)
    logger.info("profile_deleted", user_id=user_id)
