"""Request and response models for collaborator API endpoints.

Payloads follow the JSON:API document shape used by the platform's other
endpoints: a ``data`` member holding typed resources, plus ``links`` and
``meta`` on collections.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from collaboration.domain.aggregates import Identity

IDENTITIES_TYPE = "identities"


class UpdateUserId(BaseModel):
    """Reference to an identity in an add/remove batch.

    Attributes:
        id: Identity ID (UUID string; validated by the service)
        type: Resource type, always "identities"
    """

    id: str = Field(..., description="Identity ID", examples=["6f1b1e0e-..."])
    type: str = Field(default=IDENTITIES_TYPE, description="Resource type")


class UpdateUserIdsRequest(BaseModel):
    """Request body for adding or removing several collaborators.

    A missing or null ``data`` member is accepted and changes nothing.
    """

    data: list[UpdateUserId | None] | None = Field(
        default=None,
        description="Identities to add or remove",
    )

    def identity_ids(self) -> list[str | None] | None:
        """Return the raw identity IDs, keeping null entries in place."""
        if self.data is None:
            return None
        return [item.id if item is not None else None for item in self.data]


class IdentityAttributes(BaseModel):
    """Display attributes of a collaborator."""

    model_config = ConfigDict(populate_by_name=True)

    identity_id: str = Field(..., alias="identityID")
    username: str
    provider_type: str = Field(..., alias="providerType")
    registration_completed: bool = Field(..., alias="registrationCompleted")
    full_name: str | None = Field(default=None, alias="fullName")
    email: str | None = None
    company: str | None = None
    image_url: str | None = Field(default=None, alias="imageURL")
    bio: str | None = None
    url: str | None = None


class IdentityResource(BaseModel):
    """A collaborator rendered as an ``identities`` resource."""

    type: str = IDENTITIES_TYPE
    id: str
    attributes: IdentityAttributes

    @classmethod
    def from_domain(cls, identity: Identity) -> IdentityResource:
        """Convert a domain Identity to an API resource.

        Args:
            identity: Identity domain aggregate

        Returns:
            IdentityResource with profile attributes when a profile exists
        """
        profile = identity.user
        return cls(
            id=str(identity.id),
            attributes=IdentityAttributes(
                identity_id=str(identity.id),
                username=identity.username,
                provider_type=identity.provider_type,
                registration_completed=identity.registration_completed,
                full_name=profile.full_name if profile else None,
                email=profile.email if profile else None,
                company=profile.company if profile else None,
                image_url=profile.image_url if profile else None,
                bio=profile.bio if profile else None,
                url=profile.url if profile else None,
            ),
        )


class PagingLinks(BaseModel):
    """Links to neighbouring pages of a collection."""

    first: str | None = None
    prev: str | None = None
    next: str | None = None
    last: str | None = None


class CollaboratorListMeta(BaseModel):
    """Collection metadata."""

    model_config = ConfigDict(populate_by_name=True)

    total_count: int = Field(..., alias="totalCount")


class CollaboratorListResponse(BaseModel):
    """Response containing one page of a space's collaborators."""

    data: list[IdentityResource]
    links: PagingLinks
    meta: CollaboratorListMeta
