"""Application services for the collaboration context."""

from collaboration.application.services.collaborator_service import (
    CollaboratorService,
)

__all__ = ["CollaboratorService"]
