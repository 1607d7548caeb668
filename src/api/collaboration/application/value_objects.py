"""Application-layer value objects for the collaboration context.

These represent the request context of a caller and read-only views
returned by the collaborator service.
"""

from __future__ import annotations

from dataclasses import dataclass

from collaboration.domain.aggregates import Identity


@dataclass(frozen=True)
class RequestContext:
    """The caller of a collaborator operation.

    Attributes:
        access_token: Raw bearer token, forwarded to the entitlement check
        identity_id: Subject of the token, when it could be read
    """

    access_token: str
    identity_id: str | None = None


@dataclass(frozen=True)
class CollaboratorPage:
    """One page of a space's collaborators.

    ``total_count`` counts every entry in the policy regardless of paging;
    ``offset`` and ``limit`` are the effective values used for the slice.
    """

    items: list[Identity]
    total_count: int
    offset: int
    limit: int
