"""Workspace membership manager.

Owns the invite token lifecycle (mint, validate, redeem, regenerate) and
the team roster. Membership writes are compare-and-set on the space row's
``version`` so two people redeeming one token can never both get in:

1. read the space holding the token and run every precondition;
2. conditionally UPDATE roster + token + version WHERE token and version
   are still what step 1 saw, then add the membership index row, both in
   one savepoint;
3. zero rows updated means someone else won; go back to step 1. The
   winner cleared the token, so the retry normally ends in InvalidToken.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from zawia.membership.tokens import is_well_formed, mint_invite_token, normalize_invite_token
from zawia.models.common import new_uuid7
from zawia.models.errors import (
    AlreadyMemberError,
    InvalidTokenError,
    InviteTokenFormatError,
    NotAMemberError,
    ProfileNotFoundError,
    SpaceNotFoundError,
    StoreError,
    ValidationError,
    WorkspaceFullError,
)
from zawia.models.workspace import (
    INVITE_TOKEN_LENGTH,
    InviteTokenCheck,
    Member,
    Space,
)
from zawia.repositories.content import IdeaRepository, PostRepository
from zawia.repositories.mappers import profile_from_row, space_from_row
from zawia.repositories.profiles import ProfileRepository
from zawia.repositories.spaces import SpaceMembershipRepository, SpaceRepository

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "مساحة تعاونية لإنشاء المحتوى."

MSG_TOKEN_LENGTH = f"Invite token must be exactly {INVITE_TOKEN_LENGTH} letters or digits."
MSG_TOKEN_NOT_FOUND = "Invalid invite token."
MSG_SPACE_FULL = "This workspace is already full."
MSG_ALREADY_MEMBER = "You are already a member of this workspace."
MSG_PROFILE_NOT_FOUND = "User profile not found."


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.warning("Store failure while %s: %s", action, exc)
        raise StoreError(f"Storage failure while {action}.") from exc


class MembershipManager:
    """Create workspaces and admit members through single-use invite tokens."""

    def __init__(
        self,
        *,
        spaces: SpaceRepository,
        memberships: SpaceMembershipRepository,
        profiles: ProfileRepository,
        posts: PostRepository,
        ideas: IdeaRepository,
        token_max_attempts: int = 5,
        join_max_attempts: int = 3,
    ) -> None:
        self._spaces = spaces
        self._memberships = memberships
        self._profiles = profiles
        self._posts = posts
        self._ideas = ideas
        self._token_max_attempts = token_max_attempts
        self._join_max_attempts = join_max_attempts

    # ----- Reads -----

    async def get_space(self, space_id: UUID, user_id: str) -> Space:
        """Full space (posts and ideas included) for one of its members."""
        await self.require_member(space_id, user_id)
        return await self._load_space(space_id)

    async def list_spaces(self, user_id: str) -> list[Space]:
        with _store_errors("listing spaces"):
            rows = await self._spaces.list_for_member(user_id)
            return [
                space_from_row(
                    row,
                    posts=await self._posts.list_for_space(row.space_id),
                    ideas=await self._ideas.list_for_space(row.space_id),
                )
                for row in rows
            ]

    async def require_member(self, space_id: UUID, user_id: str) -> Space:
        """Space snapshot without content; raises unless ``user_id`` belongs to it."""
        with _store_errors("loading the space"):
            row = await self._spaces.get(space_id)
        if row is None:
            raise SpaceNotFoundError(f"Space {space_id} not found.")
        space = space_from_row(row)
        if not space.has_member(user_id):
            raise NotAMemberError("You are not a member of this workspace.")
        return space

    # ----- Create -----

    async def create_workspace(
        self, *, name: str, creator_id: str, description: str = "",
    ) -> Space:
        name = name.strip()
        if not name:
            raise ValidationError("Space name must not be empty.")
        creator = await self._member_for(creator_id)
        token = await self._mint_unique_token(name)

        space_id = new_uuid7()
        with _store_errors("creating the space"):
            async with self._spaces.atomic():
                row = await self._spaces.create(
                    space_id=space_id,
                    name=name,
                    description=description.strip() or DEFAULT_DESCRIPTION,
                    team=[creator.model_dump()],
                    member_ids=[creator.id],
                    invite_token=token,
                    created_by=creator.id,
                )
                await self._memberships.add(space_id=space_id, user_id=creator.id)
        logger.info("Created space %s for %s", space_id, creator.id)
        return space_from_row(row)

    # ----- Invite tokens -----

    async def validate_invite_token(
        self, token: str, user_id: str | None = None,
    ) -> InviteTokenCheck:
        """Read-only check of a token. Malformed tokens never reach the store."""
        normalized = normalize_invite_token(token)
        if not is_well_formed(normalized):
            return InviteTokenCheck(valid=False, error=MSG_TOKEN_LENGTH)

        with _store_errors("validating the invite token"):
            row = await self._spaces.get_by_invite_token(normalized)
        if row is None:
            return InviteTokenCheck(valid=False, error=MSG_TOKEN_NOT_FOUND)
        space = space_from_row(row)
        if space.is_full:
            return InviteTokenCheck(valid=False, error=MSG_SPACE_FULL)
        if user_id is not None and space.has_member(user_id):
            return InviteTokenCheck(valid=False, error=MSG_ALREADY_MEMBER)
        return InviteTokenCheck(
            valid=True,
            space_name=space.name,
            owner_name=space.owner.name if space.owner else None,
        )

    async def join_space_with_token(self, token: str, user_id: str) -> Space:
        """Redeem a token: append the user to the team and clear the token.

        Preconditions, first failure wins: token resolves, space below
        capacity, user not yet a member, user has a profile.
        """
        normalized = normalize_invite_token(token)
        if not is_well_formed(normalized):
            raise InviteTokenFormatError(MSG_TOKEN_LENGTH)

        for attempt in range(1, self._join_max_attempts + 1):
            with _store_errors("looking up the invite token"):
                row = await self._spaces.get_by_invite_token(normalized)
            if row is None:
                raise InvalidTokenError(MSG_TOKEN_NOT_FOUND)
            space = space_from_row(row)
            if space.is_full:
                raise WorkspaceFullError(MSG_SPACE_FULL)
            if space.has_member(user_id):
                raise AlreadyMemberError(MSG_ALREADY_MEMBER)
            member = await self._member_for(user_id)

            with _store_errors("joining the space"):
                async with self._spaces.atomic():
                    applied = await self._spaces.append_member(
                        space_id=space.space_id,
                        expected_token=normalized,
                        expected_version=space.version,
                        team=[m.model_dump() for m in space.team] + [member.model_dump()],
                        member_ids=[*space.member_ids, user_id],
                    )
                    if applied:
                        await self._memberships.add(space_id=space.space_id, user_id=user_id)

            if applied:
                logger.info("User %s joined space %s", user_id, space.space_id)
                return await self._load_space(space.space_id)
            logger.info(
                "Join conflict on space %s (attempt %d/%d)",
                space.space_id, attempt, self._join_max_attempts,
            )

        raise StoreError("The workspace kept changing while joining; please retry.")

    async def regenerate_invite_token(self, space_id: UUID, user_id: str) -> Space:
        """Open a new invite on a space whose previous token was redeemed."""
        space = await self.require_member(space_id, user_id)
        if space.is_full:
            raise WorkspaceFullError(MSG_SPACE_FULL)
        token = await self._mint_unique_token(space.name)
        with _store_errors("regenerating the invite token"):
            applied = await self._spaces.set_invite_token(
                space_id=space_id, expected_version=space.version, token=token,
            )
        if not applied:
            raise StoreError("The workspace changed while regenerating the invite; please retry.")
        logger.info("Regenerated invite token for space %s", space_id)
        return await self._load_space(space_id)

    # ----- Internals -----

    async def _member_for(self, user_id: str) -> Member:
        with _store_errors("loading the profile"):
            row = await self._profiles.get(user_id)
        if row is None:
            raise ProfileNotFoundError(MSG_PROFILE_NOT_FOUND)
        return profile_from_row(row).as_member()

    async def _mint_unique_token(self, space_name: str) -> str:
        for _ in range(self._token_max_attempts):
            token = mint_invite_token(space_name)
            with _store_errors("checking invite token uniqueness"):
                taken = await self._spaces.token_in_use(token)
            if not taken:
                return token
            logger.warning("Invite token collision, regenerating")
        raise StoreError("Could not mint a unique invite token.")

    async def _load_space(self, space_id: UUID) -> Space:
        with _store_errors("loading the space"):
            row = await self._spaces.get(space_id)
            if row is None:
                raise SpaceNotFoundError(f"Space {space_id} not found.")
            return space_from_row(
                row,
                posts=await self._posts.list_for_space(space_id),
                ideas=await self._ideas.list_for_space(space_id),
            )
