"""Tests for PostRepository, IdeaRepository and NotificationRepository."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from zawia.repositories.content import IdeaRepository, PostRepository
from zawia.repositories.mappers import idea_from_row, notification_from_row, post_from_row
from zawia.repositories.notifications import NotificationRepository
from zawia.repositories.spaces import SpaceRepository

ALEX = {"id": "alex", "name": "Alex", "avatar_url": ""}
JAN_1 = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
async def space_id(db_session: AsyncSession):
    row = await SpaceRepository(db_session).create(
        space_id=uuid7(), name="Azure", description="", team=[ALEX],
        member_ids=["alex"], invite_token=None, created_by="alex",
    )
    return row.space_id


async def _post(repo: PostRepository, space_id, when: datetime, **overrides):
    values = dict(
        post_id=uuid7(), space_id=space_id, title="Launch", content="",
        platform="instagram", post_type="instagram-reel", status="draft",
        content_type="promotional", pillar=None,
        field_values={"hook": "Wait for it"}, scheduled_at=when,
        created_by=ALEX, image_url=None,
        activity_log=[{"user": ALEX, "action": "created", "date": when.isoformat()}],
    )
    values.update(overrides)
    return await repo.create(**values)


class TestPostRepository:
    @pytest.mark.anyio
    async def test_create_and_get(self, db_session: AsyncSession, space_id) -> None:
        repo = PostRepository(db_session)
        row = await _post(repo, space_id, JAN_1)

        fetched = await repo.get(space_id, row.post_id)
        post = post_from_row(fetched)
        assert post.title == "Launch"
        assert post.field_values == {"hook": "Wait for it"}
        assert post.last_modified_by.id == "alex"
        assert post.activity_log[0].action == "created"

    @pytest.mark.anyio
    async def test_get_scoped_to_space(self, db_session: AsyncSession, space_id) -> None:
        repo = PostRepository(db_session)
        row = await _post(repo, space_id, JAN_1)
        assert await repo.get(uuid7(), row.post_id) is None

    @pytest.mark.anyio
    async def test_list_date_range(self, db_session: AsyncSession, space_id) -> None:
        repo = PostRepository(db_session)
        for days in (10, 0, 40):
            await _post(repo, space_id, JAN_1 + timedelta(days=days), title=f"day {days}")

        everything = await repo.list_for_space(space_id)
        assert [p.title for p in everything] == ["day 0", "day 10", "day 40"]

        january = await repo.list_for_space(
            space_id, start=JAN_1, end=JAN_1 + timedelta(days=31),
        )
        assert [p.title for p in january] == ["day 0", "day 10"]

    @pytest.mark.anyio
    async def test_update_and_delete(self, db_session: AsyncSession, space_id) -> None:
        repo = PostRepository(db_session)
        row = await _post(repo, space_id, JAN_1)

        updated = await repo.update(row, {"status": "ready", "title": "Launch v2"})
        assert updated.status == "ready"
        assert updated.title == "Launch v2"

        assert await repo.delete(space_id, row.post_id)
        assert not await repo.delete(space_id, row.post_id)


class TestIdeaRepository:
    @pytest.mark.anyio
    async def test_crud(self, db_session: AsyncSession, space_id) -> None:
        repo = IdeaRepository(db_session)
        row = await repo.create(
            idea_id=uuid7(), space_id=space_id, content="Behind the scenes",
            content_type="entertainment", pillar={"id": "p1", "name": "Culture", "color": "#123456"},
            created_by=ALEX,
        )
        idea = idea_from_row(await repo.get(space_id, row.idea_id))
        assert idea.pillar.name == "Culture"

        await repo.update(row, {"content": "Office tour"})
        assert (await repo.get(space_id, row.idea_id)).content == "Office tour"

        assert len(await repo.list_for_space(space_id)) == 1
        assert await repo.delete(space_id, row.idea_id)
        assert await repo.list_for_space(space_id) == []


class TestNotificationRepository:
    @pytest.mark.anyio
    async def test_create_list_and_mark_read(self, db_session: AsyncSession) -> None:
        repo = NotificationRepository(db_session)
        rows = await repo.create_many(
            user_ids=["sarah", "chris"], message='Alex added a new idea in "Azure"',
            link="/spaces/x",
        )
        assert len(rows) == 2

        sarah = [notification_from_row(r) for r in await repo.list_for_user("sarah")]
        assert len(sarah) == 1
        assert not sarah[0].read

        chris_id = rows[1].notification_id
        # Sarah cannot mark Chris's notification.
        assert await repo.mark_read(user_id="sarah", notification_ids=[chris_id]) == 0
        assert await repo.mark_read(user_id="sarah", notification_ids=[sarah[0].notification_id]) == 1
        assert await repo.mark_read(user_id="sarah", notification_ids=[]) == 0

        refreshed = await repo.list_for_user("sarah")
        await db_session.refresh(refreshed[0])
        assert refreshed[0].read
