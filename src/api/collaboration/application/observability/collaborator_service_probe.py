"""Protocol for collaborator application service observability.

Defines the interface for domain probes that capture application-level
domain events for collaborator service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CollaboratorServiceProbe(Protocol):
    """Domain probe for collaborator application service operations."""

    def collaborators_listed(
        self,
        space_id: str,
        total_count: int,
        offset: int,
        limit: int,
    ) -> None:
        """Record that a page of collaborators was listed."""
        ...

    def collaborators_updated(
        self,
        space_id: str,
        operation: str,
        target_count: int,
    ) -> None:
        """Record that the space's policy was written back."""
        ...

    def collaborators_unchanged(
        self,
        space_id: str,
        operation: str,
        target_count: int,
    ) -> None:
        """Record that a batch changed nothing, so no write was made."""
        ...

    def authorization_denied(
        self,
        space_id: str,
        caller_id: str | None,
        reason: str,
    ) -> None:
        """Record that the caller may not manage the space's collaborators."""
        ...

    def space_resource_not_found(self, space_id: str) -> None:
        """Record that a space has no policy resource."""
        ...

    def owner_removal_rejected(self, space_id: str, owner_id: str) -> None:
        """Record that a removal batch named the space owner."""
        ...

    def invalid_identity_id(self, identity_id: str) -> None:
        """Record that a target identity ID was not a UUID."""
        ...

    def identity_not_found(self, identity_id: str) -> None:
        """Record that a target identity does not exist."""
        ...

    def orphaned_policy_member(self, space_id: str, identity_id: str) -> None:
        """Record that a policy member has no matching identity."""
        ...

    def malformed_member_list(self, space_id: str, token: str) -> None:
        """Record that the policy's member list could not be decoded."""
        ...

    def policy_operation_failed(
        self,
        space_id: str,
        operation: str,
        error: Exception,
    ) -> None:
        """Record that reading or writing the space's policy failed."""
        ...

    def with_context(self, context: ObservationContext) -> CollaboratorServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCollaboratorServiceProbe:
    """Default implementation of CollaboratorServiceProbe using structlog."""

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
    ) -> DefaultCollaboratorServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultCollaboratorServiceProbe(logger=self._logger, context=context)

    def collaborators_listed(
        self,
        space_id: str,
        total_count: int,
        offset: int,
        limit: int,
    ) -> None:
        """Record that a page of collaborators was listed."""
        self._logger.debug(
            "collaborators_listed",
            space_id=space_id,
            total_count=total_count,
            offset=offset,
            limit=limit,
            **self._get_context_kwargs(),
        )

    def collaborators_updated(
        self,
        space_id: str,
        operation: str,
        target_count: int,
    ) -> None:
        """Record that the space's policy was written back."""
        self._logger.info(
            "collaborators_updated",
            space_id=space_id,
            operation=operation,
            target_count=target_count,
            **self._get_context_kwargs(),
        )

    def collaborators_unchanged(
        self,
        space_id: str,
        operation: str,
        target_count: int,
    ) -> None:
        """Record that a batch changed nothing, so no write was made."""
        self._logger.info(
            "collaborators_unchanged",
            space_id=space_id,
            operation=operation,
            target_count=target_count,
            **self._get_context_kwargs(),
        )

    def authorization_denied(
        self,
        space_id: str,
        caller_id: str | None,
        reason: str,
    ) -> None:
        """Record that the caller may not manage the space's collaborators."""
        self._logger.warning(
            "collaborators_authorization_denied",
            space_id=space_id,
            caller_id=caller_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def space_resource_not_found(self, space_id: str) -> None:
        """Record that a space has no policy resource."""
        self._logger.warning(
            "space_resource_not_found",
            space_id=space_id,
            **self._get_context_kwargs(),
        )

    def owner_removal_rejected(self, space_id: str, owner_id: str) -> None:
        """Record that a removal batch named the space owner."""
        self._logger.warning(
            "space_owner_removal_rejected",
            space_id=space_id,
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )

    def invalid_identity_id(self, identity_id: str) -> None:
        """Record that a target identity ID was not a UUID."""
        self._logger.error(
            "collaborator_identity_id_invalid",
            identity_id=identity_id,
            **self._get_context_kwargs(),
        )

    def identity_not_found(self, identity_id: str) -> None:
        """Record that a target identity does not exist."""
        self._logger.error(
            "collaborator_identity_not_found",
            identity_id=identity_id,
            **self._get_context_kwargs(),
        )

    def orphaned_policy_member(self, space_id: str, identity_id: str) -> None:
        """Record that a policy member has no matching identity."""
        self._logger.error(
            "collaborator_policy_member_orphaned",
            space_id=space_id,
            identity_id=identity_id,
            **self._get_context_kwargs(),
        )

    def malformed_member_list(self, space_id: str, token: str) -> None:
        """Record that the policy's member list could not be decoded."""
        self._logger.error(
            "collaborator_member_list_malformed",
            space_id=space_id,
            token=token,
            **self._get_context_kwargs(),
        )

    def policy_operation_failed(
        self,
        space_id: str,
        operation: str,
        error: Exception,
    ) -> None:
        """Record that reading or writing the space's policy failed."""
        self._logger.error(
            "collaborator_policy_operation_failed",
            space_id=space_id,
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
