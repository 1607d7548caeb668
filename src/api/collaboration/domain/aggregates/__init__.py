"""Domain aggregates for the collaboration context."""

from collaboration.domain.aggregates.identity import Identity, UserProfile
from collaboration.domain.aggregates.space import Space, SpaceResource

__all__ = [
    "Identity",
    "Space",
    "SpaceResource",
    "UserProfile",
]
