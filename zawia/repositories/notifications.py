"""Notification repository."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from zawia.db.tables import NotificationRow
from zawia.models.common import new_uuid7, utc_now


class NotificationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_many(self, *, user_ids: list[str], message: str,
                          link: str) -> list[NotificationRow]:
        now = utc_now()
        rows = [
            NotificationRow(
                notification_id=new_uuid7(), user_id=user_id, message=message,
                link=link, read=False, created_at=now,
            )
            for user_id in user_ids
        ]
        self._session.add_all(rows)
        await self._session.flush()
        return rows

    async def list_for_user(self, user_id: str) -> list[NotificationRow]:
        result = await self._session.execute(
            select(NotificationRow)
            .where(NotificationRow.user_id == user_id)
            .order_by(NotificationRow.created_at.desc())
        )
        return list(result.scalars().all())

    async def mark_read(self, *, user_id: str, notification_ids: list[UUID]) -> int:
        """Mark the caller's notifications read. Ids owned by others are ignored."""
        if not notification_ids:
            return 0
        result = await self._session.execute(
            update(NotificationRow)
            .where(
                NotificationRow.user_id == user_id,
                NotificationRow.notification_id.in_(notification_ids),
            )
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
