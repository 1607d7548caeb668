"""Identity aggregate for the collaboration context."""

from __future__ import annotations

from dataclasses import dataclass

from collaboration.domain.value_objects import IdentityId


@dataclass(frozen=True)
class UserProfile:
    """Profile of the person behind an identity."""

    full_name: str = ""
    email: str = ""
    company: str | None = None
    image_url: str | None = None
    bio: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class Identity:
    """An account that can be listed as a space collaborator.

    Identities are provisioned from the identity provider and are only
    read by this context.
    """

    id: IdentityId
    username: str
    provider_type: str
    registration_completed: bool = False
    user: UserProfile | None = None

    def __eq__(self, other: object) -> bool:
        """Identities are equal if they have the same ID."""
        if not isinstance(other, Identity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
