"""Repository protocols (ports) for the collaboration bounded context.

Both repositories are read-only: spaces, their policy resources and
identities are owned by other parts of the platform.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from collaboration.domain.aggregates import Identity, SpaceResource
from collaboration.domain.value_objects import IdentityId, SpaceId


@runtime_checkable
class ISpaceResourceRepository(Protocol):
    """Repository for locating a space's protected resource."""

    async def get_by_space(self, space_id: SpaceId) -> SpaceResource | None:
        """Retrieve the resource protecting a space.

        Args:
            space_id: The space to look up

        Returns:
            The SpaceResource with its Space (and owner) loaded, or None if
            the space or its resource does not exist
        """
        ...


@runtime_checkable
class IIdentityRepository(Protocol):
    """Repository for resolving identities."""

    async def get_by_id(self, identity_id: IdentityId) -> Identity | None:
        """Retrieve an identity by its ID.

        Args:
            identity_id: The unique identifier of the identity

        Returns:
            The Identity with its user profile loaded, or None if not found
        """
        ...
