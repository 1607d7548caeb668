"""Domain probe for authorization operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to entitlement checks and policy
reads and writes against the authorization server.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthorizationProbe(Protocol):
    """Domain probe for authorization operations."""

    def protection_token_obtained(self, client_id: str) -> None:
        """Record that a protection API token was issued to the service."""
        ...

    def policy_fetched(self, policy_id: str, member_count: int) -> None:
        """Record that a policy was read from the authorization server."""
        ...

    def policy_fetch_failed(self, policy_id: str, error: Exception) -> None:
        """Record that reading a policy failed."""
        ...

    def policy_updated(self, policy_id: str, member_count: int) -> None:
        """Record that a policy was written to the authorization server."""
        ...

    def policy_update_failed(self, policy_id: str, error: Exception) -> None:
        """Record that writing a policy failed."""
        ...

    def entitlement_checked(self, resource: str, granted: bool) -> None:
        """Record that an entitlement decision was made."""
        ...

    def entitlement_check_failed(self, resource: str, error: Exception) -> None:
        """Record that an entitlement decision could not be made."""
        ...

    def connection_failed(self, endpoint: str, error: Exception) -> None:
        """Record that connection to the authorization server failed."""
        ...

    def with_context(self, context: ObservationContext) -> AuthorizationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthorizationProbe:
    """Default implementation of AuthorizationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthorizationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthorizationProbe(logger=self._logger, context=context)

    def protection_token_obtained(self, client_id: str) -> None:
        """Record that a protection API token was issued to the service."""
        self._logger.debug(
            "authorization_protection_token_obtained",
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def policy_fetched(self, policy_id: str, member_count: int) -> None:
        """Record that a policy was read from the authorization server."""
        self._logger.debug(
            "authorization_policy_fetched",
            policy_id=policy_id,
            member_count=member_count,
            **self._get_context_kwargs(),
        )

    def policy_fetch_failed(self, policy_id: str, error: Exception) -> None:
        """Record that reading a policy failed."""
        self._logger.error(
            "authorization_policy_fetch_failed",
            policy_id=policy_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def policy_updated(self, policy_id: str, member_count: int) -> None:
        """Record that a policy was written to the authorization server."""
        self._logger.info(
            "authorization_policy_updated",
            policy_id=policy_id,
            member_count=member_count,
            **self._get_context_kwargs(),
        )

    def policy_update_failed(self, policy_id: str, error: Exception) -> None:
        """Record that writing a policy failed."""
        self._logger.error(
            "authorization_policy_update_failed",
            policy_id=policy_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def entitlement_checked(self, resource: str, granted: bool) -> None:
        """Record that an entitlement decision was made."""
        self._logger.debug(
            "authorization_entitlement_checked",
            resource=resource,
            granted=granted,
            **self._get_context_kwargs(),
        )

    def entitlement_check_failed(self, resource: str, error: Exception) -> None:
        """Record that an entitlement decision could not be made."""
        self._logger.error(
            "authorization_entitlement_check_failed",
            resource=resource,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def connection_failed(self, endpoint: str, error: Exception) -> None:
        """Record that connection to the authorization server failed."""
        self._logger.error(
            "authorization_connection_failed",
            endpoint=endpoint,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
