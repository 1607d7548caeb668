"""Domain probe for collaboration repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to space resource and identity lookups.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SpaceResourceRepositoryProbe(Protocol):
    """Domain probe for space resource repository operations."""

    def space_resource_retrieved(self, space_id: str, policy_id: str) -> None:
        """Record that a space resource was retrieved."""
        ...

    def space_resource_not_found(self, space_id: str) -> None:
        """Record that a space has no resource."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> SpaceResourceRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class IdentityRepositoryProbe(Protocol):
    """Domain probe for identity repository operations."""

    def identity_retrieved(self, identity_id: str) -> None:
        """Record that an identity was retrieved."""
        ...

    def identity_not_found(self, identity_id: str) -> None:
        """Record that an identity was not found."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSpaceResourceRepositoryProbe:
    """Default implementation of SpaceResourceRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultSpaceResourceRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultSpaceResourceRepositoryProbe(logger=self._logger, context=context)

    def space_resource_retrieved(self, space_id: str, policy_id: str) -> None:
        """Record that a space resource was retrieved."""
        self._logger.debug(
            "space_resource_retrieved",
            space_id=space_id,
            policy_id=policy_id,
            **self._get_context_kwargs(),
        )

    def space_resource_not_found(self, space_id: str) -> None:
        """Record that a space has no resource."""
        self._logger.debug(
            "space_resource_not_found",
            space_id=space_id,
            **self._get_context_kwargs(),
        )


class DefaultIdentityRepositoryProbe:
    """Default implementation of IdentityRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultIdentityRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityRepositoryProbe(logger=self._logger, context=context)

    def identity_retrieved(self, identity_id: str) -> None:
        """Record that an identity was retrieved."""
        self._logger.debug(
            "identity_retrieved",
            identity_id=identity_id,
            **self._get_context_kwargs(),
        )

    def identity_not_found(self, identity_id: str) -> None:
        """Record that an identity was not found."""
        self._logger.debug(
            "identity_not_found",
            identity_id=identity_id,
            **self._get_context_kwargs(),
        )
