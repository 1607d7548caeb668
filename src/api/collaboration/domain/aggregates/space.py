"""Space aggregates for the collaboration context."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from collaboration.domain.value_objects import IdentityId, SpaceId


@dataclass(frozen=True)
class Space:
    """A container of work items owned by a single identity.

    The owner is fixed at creation and is always a collaborator.
    """

    id: SpaceId
    owner_id: IdentityId
    name: str = ""

    def is_owned_by(self, identity_id: UUID) -> bool:
        """Return whether the given identity owns this space."""
        return self.owner_id.value == identity_id


@dataclass(frozen=True)
class SpaceResource:
    """Binds a space to its protected resource on the authorization server.

    Attributes:
        id: Local record ID
        space: The space the resource protects
        resource_id: Resource ID on the authorization server
        policy_id: User policy listing the space's collaborators
        permission_id: Permission tying the policy to the resource
    """

    id: UUID
    space: Space
    resource_id: str
    policy_id: str
    permission_id: str
