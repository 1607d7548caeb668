"""PostgreSQL implementation of IIdentityRepository.

Identities are provisioned by the identity provider; this repository only
reads them together with their user profile.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from collaboration.domain.aggregates import Identity, UserProfile
from collaboration.domain.value_objects import IdentityId
from collaboration.infrastructure.models import IdentityModel, UserModel
from collaboration.infrastructure.observability import (
    DefaultIdentityRepositoryProbe,
    IdentityRepositoryProbe,
)
from collaboration.ports.repositories import IIdentityRepository


class IdentityRepository(IIdentityRepository):
    """PostgreSQL-backed, read-only repository for Identity aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: IdentityRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultIdentityRepositoryProbe()

    async def get_by_id(self, identity_id: IdentityId) -> Identity | None:
        """Retrieve an identity by its ID.

        Args:
            identity_id: The unique identifier of the identity

        Returns:
            The Identity with its user profile, or None if not found
        """
        stmt = (
            select(IdentityModel)
            .options(joinedload(IdentityModel.user))
            .where(IdentityModel.id == identity_id.value)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.identity_not_found(str(identity_id))
            return None

        self._probe.identity_retrieved(str(identity_id))
        return Identity(
            id=IdentityId(value=model.id),
            username=model.username,
            provider_type=model.provider_type,
            registration_completed=model.registration_completed,
            user=_to_profile(model.user),
        )


def _to_profile(model: UserModel | None) -> UserProfile | None:
    if model is None:
        return None
    return UserProfile(
        full_name=model.full_name,
        email=model.email,
        company=model.company,
        image_url=model.image_url,
        bio=model.bio,
        url=model.url,
    )
