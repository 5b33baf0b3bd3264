"""Seed script — load a demo team and workspaces into the Zawia database.

Creates:
1. Three profiles (Alex Doe, Sarah Khan, Chris Lee)
2. "Azure Fashion Store" owned by Alex, joined by Sarah through its invite
   token, with a filled-in compass and one idea
3. "Innovatech SaaS" owned by Alex with an open invite token

Idempotent: a second run skips once the demo space exists.

Usage:
    python -m scripts.seed                 # against DATABASE_URL from .env
    pytest tests/scripts/test_seed_demo.py  # against aiosqlite in-memory
"""

import asyncio
import sys

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from zawia.compass.editor import initialize_compass, update_goals, update_pillars, update_tone
from zawia.db.tables import SpaceRow
from zawia.membership.manager import MembershipManager
from zawia.models.common import ContentType, new_uuid7
from zawia.repositories.content import IdeaRepository, PostRepository
from zawia.repositories.profiles import ProfileRepository
from zawia.repositories.spaces import SpaceMembershipRepository, SpaceRepository

DEMO_SPACE_NAME = "Azure Fashion Store"
SECOND_SPACE_NAME = "Innovatech SaaS"

DEMO_PROFILES = [
    {"user_id": "user-alex", "name": "Alex Doe", "email": "alex@example.com"},
    {"user_id": "user-sarah", "name": "Sarah Khan", "email": "sarah@example.com"},
    {"user_id": "user-chris", "name": "Chris Lee", "email": "chris@example.com"},
]

OWNER_ID = "user-alex"
JOINER_ID = "user-sarah"


async def seed_profiles(session: AsyncSession) -> int:
    repo = ProfileRepository(session)
    for profile in DEMO_PROFILES:
        await repo.upsert(
            **profile,
            avatar_url=f"https://i.pravatar.cc/150?u={profile['user_id']}",
        )
    return len(DEMO_PROFILES)


def _manager(session: AsyncSession) -> MembershipManager:
    return MembershipManager(
        spaces=SpaceRepository(session),
        memberships=SpaceMembershipRepository(session),
        profiles=ProfileRepository(session),
        posts=PostRepository(session),
        ideas=IdeaRepository(session),
    )


def _demo_compass() -> dict:
    compass = initialize_compass()
    compass = update_goals(compass, {
        "objective": "Grow online sales of the summer collection",
        "kpis": [{"metric": "Conversion rate", "target": "3%"}],
    })
    compass = update_pillars(compass, [
        {"name": "Style Tips", "description": "How to wear the collection", "color": "#3B82F6"},
        {"name": "Behind the Seams", "description": "How our pieces are made", "color": "#F59E0B"},
    ])
    compass = update_tone(compass, {
        "description": "Warm and confident",
        "dos": ["Use short sentences"],
        "donts": ["Avoid slang"],
    })
    return compass.model_dump(mode="json")


async def seed_demo(session: AsyncSession) -> dict:
    """Idempotent demo seed: profiles + two spaces + compass + idea.

    Returns dict with keys: created (bool), space_id, second_space_id.
    If the demo space already exists, returns created=False and skips.
    """
    result = await session.execute(
        select(SpaceRow).where(SpaceRow.name == DEMO_SPACE_NAME),
    )
    existing = result.scalars().first()
    if existing is not None:
        return {"created": False, "space_id": existing.space_id, "second_space_id": None}

    profile_count = await seed_profiles(session)
    manager = _manager(session)

    demo = await manager.create_workspace(
        name=DEMO_SPACE_NAME,
        creator_id=OWNER_ID,
        description="Seasonal fashion brand selling online.",
    )
    await manager.join_space_with_token(demo.invite_token, JOINER_ID)

    spaces = SpaceRepository(session)
    compass = _demo_compass()
    await spaces.update_compass(demo.space_id, compass)

    owner = demo.owner
    await IdeaRepository(session).create(
        idea_id=new_uuid7(),
        space_id=demo.space_id,
        content="Five ways to style one linen shirt",
        content_type=ContentType.EDUCATIONAL.value,
        pillar={k: compass["pillars"][0][k] for k in ("id", "name", "color")},
        created_by=owner.model_dump(),
    )

    second = await manager.create_workspace(name=SECOND_SPACE_NAME, creator_id=OWNER_ID)

    return {
        "created": True,
        "space_id": demo.space_id,
        "second_space_id": second.space_id,
        "second_invite_token": second.invite_token,
        "profile_count": profile_count,
    }


# ---------------------------------------------------------------------------
# CLI entry point: python -m scripts.seed
# ---------------------------------------------------------------------------


async def _run_seed() -> None:
    """Run the seed against the real database (idempotent)."""
    from zawia.db.session import async_session_factory

    async with async_session_factory() as session:
        result = await seed_demo(session)

        if not result["created"]:
            print(f"Demo data already seeded ({DEMO_SPACE_NAME} exists). Skipping.")
            print(f"  Space: {result['space_id']}")
            return

        await session.commit()

        print("Seed complete.")
        print(f"  Profiles:     {result['profile_count']}")
        print(f"  {DEMO_SPACE_NAME}: {result['space_id']}")
        print(f"  {SECOND_SPACE_NAME}:     {result['second_space_id']}"
              f" (invite {result['second_invite_token']})")


if __name__ == "__main__":
    asyncio.run(_run_seed())


def __getattr__(name: str):  # type: ignore[misc]
    """Allow `python -m scripts.seed` to work."""
    if name == "__main__":
        asyncio.run(_run_seed())
        sys.exit(0)
    raise AttributeError(name)
