"""FastAPI notification endpoints — scoped to the calling user.

GET  /v1/notifications          — caller's notifications, newest first
POST /v1/notifications/read     — mark the given ids read
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from zawia.api.dependencies import get_current_user_id, get_notification_repo
from zawia.models.workspace import Notification
from zawia.repositories.mappers import notification_from_row
from zawia.repositories.notifications import NotificationRepository

router = APIRouter(prefix="/v1/notifications", tags=["notifications"])


class MarkReadRequest(BaseModel):
    notification_ids: list[UUID] = Field(default_factory=list)


class MarkReadResponse(BaseModel):
    updated: int


@router.get("", response_model=list[Notification])
async def list_notifications(
    user_id: str = Depends(get_current_user_id),
    repo: NotificationRepository = Depends(get_notification_repo),
) -> list[Notification]:
    return [notification_from_row(r) for r in await repo.list_for_user(user_id)]


@router.post("/read", response_model=MarkReadResponse)
async def mark_notifications_read(
    body: MarkReadRequest,
    user_id: str = Depends(get_current_user_id),
    repo: NotificationRepository = Depends(get_notification_repo),
) -> MarkReadResponse:
    updated = await repo.mark_read(user_id=user_id, notification_ids=body.notification_ids)
    return MarkReadResponse(updated=updated)
