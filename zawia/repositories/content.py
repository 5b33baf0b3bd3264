"""Post and idea repositories — content owned by exactly one space."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from zawia.db.tables import IdeaRow, PostRow
from zawia.models.common import utc_now


class PostRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, post_id: UUID, space_id: UUID, title: str,
                     content: str, platform: str, post_type: str | None,
                     status: str, content_type: str, pillar: dict | None,
                     field_values: dict, scheduled_at: datetime,
                     created_by: dict, image_url: str | None,
                     activity_log: list[dict]) -> PostRow:
        now = utc_now()
        row = PostRow(
            post_id=post_id, space_id=space_id, title=title, content=content,
            platform=platform, post_type=post_type, status=status,
            content_type=content_type, pillar=pillar, field_values=field_values,
            scheduled_at=scheduled_at, created_by=created_by,
            last_modified_by=created_by, image_url=image_url,
            activity_log=activity_log, created_at=now, updated_at=now,
        )
        self._session.add(row)
        await self._session.flush()
        await self._session.refresh(row)
        return row

    async def get(self, space_id: UUID, post_id: UUID) -> PostRow | None:
        result = await self._session.execute(
            select(PostRow).where(PostRow.space_id == space_id, PostRow.post_id == post_id)
        )
        return result.scalar_one_or_none()

    async def list_for_space(self, space_id: UUID, *,
                             start: datetime | None = None,
                             end: datetime | None = None) -> list[PostRow]:
        stmt = select(PostRow).where(PostRow.space_id == space_id)
        if start is not None:
            stmt = stmt.where(PostRow.scheduled_at >= start)
        if end is not None:
            stmt = stmt.where(PostRow.scheduled_at < end)
        result = await self._session.execute(stmt.order_by(PostRow.scheduled_at.asc()))
        return list(result.scalars().all())

    async def update(self, row: PostRow, changes: dict) -> PostRow:
        for key, value in changes.items():
            setattr(row, key, value)
        row.updated_at = utc_now()
        await self._session.flush()
        await self._session.refresh(row)
        return row

    async def delete(self, space_id: UUID, post_id: UUID) -> bool:
        result = await self._session.execute(
            delete(PostRow).where(PostRow.space_id == space_id, PostRow.post_id == post_id)
        )
        return result.rowcount == 1


class IdeaRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, idea_id: UUID, space_id: UUID, content: str,
                     content_type: str, pillar: dict | None,
                     created_by: dict) -> IdeaRow:
        row = IdeaRow(
            idea_id=idea_id, space_id=space_id, content=content,
            content_type=content_type, pillar=pillar, created_by=created_by,
            created_at=utc_now(),
        )
        self._session.add(row)
        await self._session.flush()
        await self._session.refresh(row)
        return row

    async def get(self, space_id: UUID, idea_id: UUID) -> IdeaRow | None:
        result = await self._session.execute(
            select(IdeaRow).where(IdeaRow.space_id == space_id, IdeaRow.idea_id == idea_id)
        )
        return result.scalar_one_or_none()

    async def list_for_space(self, space_id: UUID) -> list[IdeaRow]:
        result = await self._session.execute(
            select(IdeaRow)
            .where(IdeaRow.space_id == space_id)
            .order_by(IdeaRow.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, row: IdeaRow, changes: dict) -> IdeaRow:
        for key, value in changes.items():
            setattr(row, key, value)
        await self._session.flush()
        await self._session.refresh(row)
        return row

    async def delete(self, space_id: UUID, idea_id: UUID) -> bool:
        result = await self._session.execute(
            delete(IdeaRow).where(IdeaRow.space_id == space_id, IdeaRow.idea_id == idea_id)
        )
        return result.rowcount == 1
