"""Value objects for the collaboration domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class SpaceId:
    """Identifier for a Space aggregate."""

    value: UUID

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> SpaceId:
        """Create SpaceId from string value.

        Raises:
            ValueError: If value is not a valid UUID
        """
        try:
            return cls(value=UUID(value))
        except ValueError as e:
            raise ValueError(f"Invalid SpaceId: {value}") from e


@dataclass(frozen=True)
class IdentityId:
    """Identifier for an Identity aggregate."""

    value: UUID

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> IdentityId:
        """Create IdentityId from string value.

        Args:
            value: UUID string

        Returns:
            IdentityId instance

        Raises:
            ValueError: If value is not a valid UUID
        """
        try:
            return cls(value=UUID(value))
        except ValueError as e:
            raise ValueError(f"Invalid IdentityId: {value}") from e
