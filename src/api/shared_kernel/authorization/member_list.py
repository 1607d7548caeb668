"""Codec for the policy member list.

The authorization server stores a user policy's members as a single string
shaped like ``["<uuid>","<uuid>"]`` rather than as a JSON array. Decoding
splits on commas and trims ``[``, ``]`` and ``"`` from every token; encoding
produces the same shape so the server accepts it back unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from shared_kernel.authorization.exceptions import MalformedMemberListError

_TRIM_CHARS = '[]"'
_EMPTY_LISTS = ("", "[]")


def split_member_tokens(encoded: str | None) -> list[str]:
    """Split an encoded member list into trimmed tokens.

    An absent value, an empty string and ``[]`` all mean "no members".

    Args:
        encoded: The raw member list string from the policy config

    Returns:
        The trimmed tokens in their stored order
    """
    if encoded is None or encoded.strip() in _EMPTY_LISTS:
        return []
    return [token.strip(_TRIM_CHARS) for token in encoded.split(",")]


def parse_member_ids(encoded: str | None) -> list[UUID]:
    """Decode an encoded member list into identity UUIDs.

    A single bad token fails the whole list; callers treat the list as
    either well formed or absent.

    Args:
        encoded: The raw member list string from the policy config

    Returns:
        Identity UUIDs in their stored order (duplicates preserved)

    Raises:
        MalformedMemberListError: If any token is not a valid UUID
    """
    member_ids: list[UUID] = []
    for token in split_member_tokens(encoded):
        try:
            member_ids.append(UUID(token))
        except ValueError as e:
            raise MalformedMemberListError(token) from e
    return member_ids


def format_member_ids(member_ids: Iterable[UUID]) -> str:
    """Encode identity UUIDs into the member list wire format.

    Example:
        >>> format_member_ids([UUID("a1111111-1111-1111-1111-111111111111")])
        '["a1111111-1111-1111-1111-111111111111"]'
    """
    return "[" + ",".join(f'"{member_id}"' for member_id in member_ids) + "]"
