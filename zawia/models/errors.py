"""Domain error taxonomy.

Raised by the membership manager, compass editor and agents. The API layer
maps each class to an HTTP status; nothing here knows about HTTP.
"""


class ZawiaError(Exception):
    """Base class for all Zawia domain errors."""


class ValidationError(ZawiaError, ValueError):
    """Bad input detected locally, before any store access."""


class InviteTokenFormatError(ValidationError):
    """Invite token is not 8 characters after normalization."""


class CompassNotInitializedError(ValidationError):
    """A compass section was edited before the compass was initialized."""


class InvalidTokenError(ZawiaError):
    """Invite token does not resolve to any workspace."""


class WorkspaceFullError(ZawiaError):
    """Workspace already holds the maximum number of members."""


class AlreadyMemberError(ZawiaError):
    """User already belongs to the target workspace."""


class ProfileNotFoundError(ZawiaError):
    """Identity resolves but has no profile record."""


class SpaceNotFoundError(ZawiaError):
    """No workspace exists with the given id."""


class NotAMemberError(ZawiaError):
    """Caller is not a member of the workspace it addresses."""


class StoreError(ZawiaError):
    """Persistence failure during a read or write."""


class ExternalServiceError(ZawiaError):
    """Failure from the generative text service."""
