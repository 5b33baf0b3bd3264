"""FastAPI dependency injection factories.

Each repository factory takes AsyncSession via Depends(get_async_session)
and returns a repository instance. The membership manager and agents are
assembled here from those repositories and the settings.
"""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from zawia.agents.idea_expander import IdeaExpansionAgent
from zawia.agents.llm_client import LLMClient
from zawia.config.settings import Settings, get_settings
from zawia.db.session import get_async_session
from zawia.membership.manager import MembershipManager
from zawia.repositories.content import IdeaRepository, PostRepository
from zawia.repositories.notifications import NotificationRepository
from zawia.repositories.profiles import ProfileRepository
from zawia.repositories.spaces import SpaceMembershipRepository, SpaceRepository

# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


async def get_current_user_id(
    x_user_id: str | None = Header(default=None, max_length=128),
) -> str:
    """Caller identity, resolved upstream by the identity provider."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header.")
    return x_user_id.strip()


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


async def get_space_repo(
    session: AsyncSession = Depends(get_async_session),
) -> SpaceRepository:
    return SpaceRepository(session)


async def get_membership_repo(
    session: AsyncSession = Depends(get_async_session),
) -> SpaceMembershipRepository:
    return SpaceMembershipRepository(session)


async def get_profile_repo(
    session: AsyncSession = Depends(get_async_session),
) -> ProfileRepository:
    return ProfileRepository(session)


async def get_post_repo(
    session: AsyncSession = Depends(get_async_session),
) -> PostRepository:
    return PostRepository(session)


async def get_idea_repo(
    session: AsyncSession = Depends(get_async_session),
) -> IdeaRepository:
    return IdeaRepository(session)


async def get_notification_repo(
    session: AsyncSession = Depends(get_async_session),
) -> NotificationRepository:
    return NotificationRepository(session)


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


async def get_membership_manager(
    spaces: SpaceRepository = Depends(get_space_repo),
    memberships: SpaceMembershipRepository = Depends(get_membership_repo),
    profiles: ProfileRepository = Depends(get_profile_repo),
    posts: PostRepository = Depends(get_post_repo),
    ideas: IdeaRepository = Depends(get_idea_repo),
    settings: Settings = Depends(get_settings),
) -> MembershipManager:
    return MembershipManager(
        spaces=spaces,
        memberships=memberships,
        profiles=profiles,
        posts=posts,
        ideas=ideas,
        token_max_attempts=settings.INVITE_TOKEN_MAX_ATTEMPTS,
        join_max_attempts=settings.JOIN_MAX_ATTEMPTS,
    )


async def get_llm_client(settings: Settings = Depends(get_settings)) -> LLMClient:
    return LLMClient.from_settings(settings)


async def get_idea_expander(
    client: LLMClient = Depends(get_llm_client),
) -> IdeaExpansionAgent:
    return IdeaExpansionAgent(client)
