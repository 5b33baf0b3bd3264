"""Space repositories — workspace documents and the membership index.

Membership and invite-token writes are conditional UPDATEs keyed on the
row's ``version`` (compare-and-set). They return False when the row moved
on since the caller read it; the caller decides whether to retry.
"""

from contextlib import AbstractAsyncContextManager
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from zawia.db.tables import SpaceMemberRow, SpaceRow
from zawia.models.common import utc_now


class SpaceRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def atomic(self) -> AbstractAsyncContextManager[AsyncSessionTransaction]:
        """SAVEPOINT scope: every write inside commits together or not at all."""
        return self._session.begin_nested()

    async def create(self, *, space_id: UUID, name: str, description: str,
                     team: list[dict], member_ids: list[str],
                     invite_token: str | None, created_by: str) -> SpaceRow:
        now = utc_now()
        row = SpaceRow(
            space_id=space_id, name=name, description=description,
            team=team, member_ids=member_ids, invite_token=invite_token,
            compass=None, version=1, created_by=created_by,
            created_at=now, updated_at=now,
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def get(self, space_id: UUID) -> SpaceRow | None:
        return await self._session.get(SpaceRow, space_id, populate_existing=True)

    async def get_by_invite_token(self, token: str) -> SpaceRow | None:
        result = await self._session.execute(
            select(SpaceRow)
            .where(SpaceRow.invite_token == token)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def token_in_use(self, token: str) -> bool:
        result = await self._session.execute(
            select(SpaceRow.space_id).where(SpaceRow.invite_token == token)
        )
        return result.first() is not None

    async def list_for_member(self, user_id: str) -> list[SpaceRow]:
        result = await self._session.execute(
            select(SpaceRow)
            .join(SpaceMemberRow, SpaceMemberRow.space_id == SpaceRow.space_id)
            .where(SpaceMemberRow.user_id == user_id)
            .order_by(SpaceRow.created_at.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def append_member(self, *, space_id: UUID, expected_token: str,
                            expected_version: int, team: list[dict],
                            member_ids: list[str]) -> bool:
        """Write the grown roster and clear the invite token in one statement.

        Applies only while the row still holds ``expected_token`` at
        ``expected_version``.
        """
        result = await self._session.execute(
            update(SpaceRow)
            .where(
                SpaceRow.space_id == space_id,
                SpaceRow.invite_token == expected_token,
                SpaceRow.version == expected_version,
            )
            .values(
                team=team,
                member_ids=member_ids,
                invite_token=None,
                version=expected_version + 1,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def set_invite_token(self, *, space_id: UUID, expected_version: int,
                               token: str | None) -> bool:
        result = await self._session.execute(
            update(SpaceRow)
            .where(SpaceRow.space_id == space_id, SpaceRow.version == expected_version)
            .values(invite_token=token, version=expected_version + 1, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def update_compass(self, space_id: UUID, compass: dict | None) -> bool:
        result = await self._session.execute(
            update(SpaceRow)
            .where(SpaceRow.space_id == space_id)
            .values(compass=compass, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


class SpaceMembershipRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, *, space_id: UUID, user_id: str) -> SpaceMemberRow:
        row = SpaceMemberRow(space_id=space_id, user_id=user_id, joined_at=utc_now())
        self._session.add(row)
        await self._session.flush()
        return row
