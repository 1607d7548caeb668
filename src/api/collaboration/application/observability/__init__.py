"""Observability for collaboration application services."""

from collaboration.application.observability.collaborator_service_probe import (
    CollaboratorServiceProbe,
    DefaultCollaboratorServiceProbe,
)

__all__ = [
    "CollaboratorServiceProbe",
    "DefaultCollaboratorServiceProbe",
]
