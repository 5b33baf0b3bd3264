"""Async engine, session factory and the per-request unit of work.

Every request runs in one transaction. Multi-write steps inside it (space
creation, joining through an invite) open a SAVEPOINT through
``SpaceRepository.atomic()``, so a failed step rolls back on its own while
the request transaction stays usable.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from zawia.config.settings import get_settings


class Base(DeclarativeBase):
    pass


_settings = get_settings()

engine = create_async_engine(
    _settings.DATABASE_URL,
    echo=(_settings.ENVIRONMENT == "dev"),
    pool_pre_ping=True,
)

# Rows stay readable after commit; the API maps them to models afterwards.
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: commit once on success, roll back on any error.

    Repositories never commit, so a request that raises leaves no partial
    writes behind.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
