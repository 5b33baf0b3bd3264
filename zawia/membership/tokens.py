"""Invite token minting and normalization.

A token is 8 characters from ``A-Z0-9``: a 4-character prefix taken from
the workspace name (so people can recognise whose invite they hold) and a
4-character random suffix. Names with fewer than 4 usable characters,
including non-Latin names, get random padding.
"""

import re
import secrets
import string

from zawia.models.workspace import INVITE_TOKEN_LENGTH

TOKEN_ALPHABET = string.ascii_uppercase + string.digits
PREFIX_LENGTH = 4

_OUTSIDE_ALPHABET = re.compile(r"[^A-Z0-9]")


def normalize_invite_token(raw: str) -> str:
    """Uppercase and drop every character outside the token alphabet.

    ``" azur-a4b1 "`` becomes ``"AZURA4B1"``.
    """
    return _OUTSIDE_ALPHABET.sub("", raw.upper())


def _random_chars(count: int) -> str:
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(count))


def name_prefix(space_name: str) -> str:
    """First 4 alphabet characters of the name, padded randomly."""
    usable = normalize_invite_token(space_name)[:PREFIX_LENGTH]
    return usable + _random_chars(PREFIX_LENGTH - len(usable))


def mint_invite_token(space_name: str) -> str:
    """Mint a fresh token. Uniqueness against the store is the caller's job."""
    return name_prefix(space_name) + _random_chars(INVITE_TOKEN_LENGTH - PREFIX_LENGTH)


def is_well_formed(token: str) -> bool:
    return len(token) == INVITE_TOKEN_LENGTH and not _OUTSIDE_ALPHABET.search(token)
