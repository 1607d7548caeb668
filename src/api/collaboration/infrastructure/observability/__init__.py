"""Observability for collaboration repositories."""

from collaboration.infrastructure.observability.repository_probe import (
    DefaultIdentityRepositoryProbe,
    DefaultSpaceResourceRepositoryProbe,
    IdentityRepositoryProbe,
    SpaceResourceRepositoryProbe,
)

__all__ = [
    "DefaultIdentityRepositoryProbe",
    "DefaultSpaceResourceRepositoryProbe",
    "IdentityRepositoryProbe",
    "SpaceResourceRepositoryProbe",
]
