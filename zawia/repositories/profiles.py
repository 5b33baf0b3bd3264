"""User profile repository."""

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from zawia.db.tables import UserProfileRow
from zawia.models.common import utc_now


class ProfileRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str) -> UserProfileRow | None:
        return await self._session.get(UserProfileRow, user_id)

    async def upsert(self, *, user_id: str, name: str, email: str | None = None,
                     avatar_url: str = "", avatar_color: str | None = None,
                     avatar_text: str | None = None) -> UserProfileRow:
        now = utc_now()
        row = await self.get(user_id)
        if row is None:
            row = UserProfileRow(user_id=user_id, created_at=now)
            self._session.add(row)
        row.name = name
        row.email = email
        row.avatar_url = avatar_url
        row.avatar_color = avatar_color
        row.avatar_text = avatar_text
        row.updated_at = now
        await self._session.flush()
        await self._session.refresh(row)
        return row

    async def delete(self, user_id: str) -> bool:
        result = await self._session.execute(
            delete(UserProfileRow).where(UserProfileRow.user_id == user_id)
        )
        return result.rowcount == 1
