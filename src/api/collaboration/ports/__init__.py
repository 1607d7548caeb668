"""Ports (interfaces) for the collaboration bounded context.

Ports define the contracts for repositories without specifying
implementation details.
"""

from collaboration.ports.repositories import (
    IIdentityRepository,
    ISpaceResourceRepository,
)

__all__ = [
    "IIdentityRepository",
    "ISpaceResourceRepository",
]
