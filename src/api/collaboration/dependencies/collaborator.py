"""FastAPI dependency injection for collaborator repositories and service.

Provides repository and service instances for route handlers using
FastAPI's dependency injection system.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from collaboration.application.observability import (
    CollaboratorServiceProbe,
    DefaultCollaboratorServiceProbe,
)
from collaboration.application.services import CollaboratorService
from collaboration.infrastructure.identity_repository import IdentityRepository
from collaboration.infrastructure.space_resource_repository import (
    SpaceResourceRepository,
)
from infrastructure.authorization_dependencies import (
    get_authorization_check,
    get_policy_provider,
)
from infrastructure.database.dependencies import get_read_session
from shared_kernel.authorization.protocols import AuthorizationCheck, PolicyProvider


def get_collaborator_service_probe() -> CollaboratorServiceProbe:
    """Get CollaboratorServiceProbe instance.

    Returns:
        DefaultCollaboratorServiceProbe instance for observability
    """
    return DefaultCollaboratorServiceProbe()


def get_space_resource_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> SpaceResourceRepository:
    """Get SpaceResourceRepository instance.

    Args:
        session: Async database session

    Returns:
        SpaceResourceRepository instance
    """
    return SpaceResourceRepository(session=session)


def get_identity_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> IdentityRepository:
    """Get IdentityRepository instance.

    Args:
        session: Async database session

    Returns:
        IdentityRepository instance
    """
    return IdentityRepository(session=session)


def get_collaborator_service(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    space_resource_repo: Annotated[
        SpaceResourceRepository, Depends(get_space_resource_repository)
    ],
    identity_repo: Annotated[IdentityRepository, Depends(get_identity_repository)],
    policy_provider: Annotated[PolicyProvider, Depends(get_policy_provider)],
    authorization: Annotated[AuthorizationCheck, Depends(get_authorization_check)],
    probe: Annotated[
        CollaboratorServiceProbe, Depends(get_collaborator_service_probe)
    ],
) -> CollaboratorService:
    """Get CollaboratorService instance.

    The repositories and the service share the request's session so each
    service-level transaction covers the repository queries.

    Returns:
        CollaboratorService instance
    """
    return CollaboratorService(
        session=session,
        space_resource_repository=space_resource_repo,
        identity_repository=identity_repo,
        policy_provider=policy_provider,
        authorization=authorization,
        probe=probe,
    )
