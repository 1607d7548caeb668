"""PostgreSQL implementation of ISpaceResourceRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from collaboration.domain.aggregates import Space, SpaceResource
from collaboration.domain.value_objects import IdentityId, SpaceId
from collaboration.infrastructure.models import SpaceResourceModel
from collaboration.infrastructure.observability import (
    DefaultSpaceResourceRepositoryProbe,
    SpaceResourceRepositoryProbe,
)
from collaboration.ports.repositories import ISpaceResourceRepository


class SpaceResourceRepository(ISpaceResourceRepository):
    """PostgreSQL-backed, read-only repository for space resources.

    The caller owns the transaction; this repository only issues queries.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: SpaceResourceRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultSpaceResourceRepositoryProbe()

    async def get_by_space(self, space_id: SpaceId) -> SpaceResource | None:
        """Retrieve the resource protecting a space, with its space loaded.

        Args:
            space_id: The space to look up

        Returns:
            The SpaceResource, or None if the space has no resource
        """
        stmt = (
            select(SpaceResourceModel)
            .options(joinedload(SpaceResourceModel.space))
            .where(SpaceResourceModel.space_id == space_id.value)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.space_resource_not_found(str(space_id))
            return None

        self._probe.space_resource_retrieved(str(space_id), model.policy_id)
        return SpaceResource(
            id=model.id,
            space=Space(
                id=SpaceId(value=model.space.id),
                owner_id=IdentityId(value=model.space.owner_id),
                name=model.space.name,
            ),
            resource_id=model.resource_id,
            policy_id=model.policy_id,
            permission_id=model.permission_id,
        )
