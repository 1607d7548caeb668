"""SQLAlchemy ORM models for the collaboration bounded context.

These models map to database tables and are used by repository
implementations. Collaborator membership itself lives on the
authorization server.
"""

from collaboration.infrastructure.models.identity import IdentityModel, UserModel
from collaboration.infrastructure.models.space import SpaceModel, SpaceResourceModel

__all__ = [
    "IdentityModel",
    "SpaceModel",
    "SpaceResourceModel",
    "UserModel",
]
