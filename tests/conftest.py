"""Shared pytest fixtures for the Zawia test suite.

Provides:
- db_engine: in-memory SQLite async engine with all tables
- db_session: SAVEPOINT-isolated async session (app commits don't leak)
- manager: MembershipManager wired to db_session repositories
- make_profile: create a user profile row
- client: AsyncClient with dependency overrides for DB-backed testing
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

import zawia.db.tables  # noqa: F401 — register ORM models on Base.metadata
from zawia.db.session import Base, get_async_session
from zawia.membership.manager import MembershipManager
from zawia.repositories.content import IdeaRepository, PostRepository
from zawia.repositories.profiles import ProfileRepository
from zawia.repositories.spaces import SpaceMembershipRepository, SpaceRepository


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine with all tables."""
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Provide a SAVEPOINT-isolated session.

    The outer transaction is never committed; it rolls back at teardown.
    The session runs inside a connection SAVEPOINT, so savepoints opened by
    application code (``SpaceRepository.atomic``) nest underneath it.
    """
    async with db_engine.connect() as conn:
        trans = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)

        # Start a nested SAVEPOINT
        await conn.begin_nested()

        yield session

        await session.close()
        await trans.rollback()


@pytest.fixture
def manager(db_session: AsyncSession) -> MembershipManager:
    return MembershipManager(
        spaces=SpaceRepository(db_session),
        memberships=SpaceMembershipRepository(db_session),
        profiles=ProfileRepository(db_session),
        posts=PostRepository(db_session),
        ideas=IdeaRepository(db_session),
    )


@pytest.fixture
def make_profile(db_session: AsyncSession):
    """Factory: ``await make_profile("alex", "Alex Doe")``."""
    repo = ProfileRepository(db_session)

    async def _make(user_id: str, name: str | None = None, email: str | None = None):
        return await repo.upsert(
            user_id=user_id,
            name=name or user_id.title(),
            email=email or f"{user_id}@example.com",
            avatar_url=f"https://example.com/{user_id}.png",
        )

    return _make


@pytest.fixture
async def client(db_session):
    """AsyncClient with get_async_session overridden to use the test session."""
    from zawia.api.main import app

    async def _override_session():
        yield db_session

    app.dependency_overrides[get_async_session] = _override_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
