"""Collaborator application service for the collaboration bounded context.

Keeps a space's collaborator list in its user policy on the authorization
server. Local reads (space resource, identities) each run in their own
transaction that ends before any remote call; mutations are staged on the
fetched policy in memory and written back in a single update.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from collaboration.application.observability import (
    CollaboratorServiceProbe,
    DefaultCollaboratorServiceProbe,
)
from collaboration.application.paging import compute_paging_limits
from collaboration.application.value_objects import CollaboratorPage, RequestContext
from collaboration.domain.aggregates import Identity, SpaceResource
from collaboration.domain.value_objects import IdentityId, SpaceId
from collaboration.ports.exceptions import (
    IdentityNotFoundError,
    InvalidIdentityIdError,
    MalformedMemberListError,
    OrphanedPolicyMemberError,
    PolicyFetchError,
    PolicyUpdateError,
    SpaceOwnerRemovalError,
    SpaceResourceNotFoundError,
    UnauthorizedError,
)
from collaboration.ports.repositories import (
    IIdentityRepository,
    ISpaceResourceRepository,
)
from shared_kernel.authorization import exceptions as authz_exceptions
from shared_kernel.authorization.policy import UserPolicy
from shared_kernel.authorization.protocols import AuthorizationCheck, PolicyProvider

PolicyMutator = Callable[[UserPolicy, UUID], bool]


class CollaboratorService:
    """Application service for space collaborator management.

    Listing is public. Every mutation is authorized once against the space
    before the policy is fetched, and batches are all-or-nothing: the first
    failing target aborts the batch before anything is written.
    """

    def __init__(
        self,
        session: AsyncSession,
        space_resource_repository: ISpaceResourceRepository,
        identity_repository: IIdentityRepository,
        policy_provider: PolicyProvider,
        authorization: AuthorizationCheck,
        probe: CollaboratorServiceProbe | None = None,
    ):
        """Initialize CollaboratorService with dependencies.

        Args:
            session: Database session for transaction management
            space_resource_repository: Locates a space's policy resource
            identity_repository: Resolves identities
            policy_provider: Reads and writes user policies
            authorization: Decides whether a caller may manage a space
            probe: Optional domain probe for observability
        """
        self._session = session
        self._space_resource_repository = space_resource_repository
        self._identity_repository = identity_repository
        self._policy_provider = policy_provider
        self._authorization = authorization
        self._probe = probe or DefaultCollaboratorServiceProbe()

    async def list_collaborators(
        self,
        space_id: SpaceId,
        page_offset: int | None = None,
        page_limit: int | None = None,
    ) -> CollaboratorPage:
        """List one page of a space's collaborators.

        Args:
            space_id: The space to list
            page_offset: Requested offset (defaults to 0)
            page_limit: Requested page size (defaults to 20, capped at 100)

        Returns:
            The page of resolved identities with the total member count

        Raises:
            SpaceResourceNotFoundError: If the space has no policy resource
            PolicyFetchError: If the policy cannot be read
            MalformedMemberListError: If the member list has a non-UUID entry
            OrphanedPolicyMemberError: If a listed member has no identity
        """
        resource = await self._load_space_resource(space_id)
        policy, _ = await self._fetch_policy(space_id, resource)

        try:
            member_ids = policy.member_ids()
        except authz_exceptions.MalformedMemberListError as e:
            self._probe.malformed_member_list(space_id=str(space_id), token=e.token)
            raise MalformedMemberListError(str(e)) from e

        total_count = len(member_ids)
        offset, limit = compute_paging_limits(page_offset, page_limit)
        offset = min(offset, total_count)
        if offset + limit > total_count:
            limit = total_count

        items: list[Identity] = []
        for member_id in member_ids[offset : offset + limit]:
            identity = await self._get_identity(IdentityId(value=member_id))
            if identity is None:
                self._probe.orphaned_policy_member(
                    space_id=str(space_id),
                    identity_id=str(member_id),
                )
                raise OrphanedPolicyMemberError(str(member_id))
            items.append(identity)

        self._probe.collaborators_listed(
            space_id=str(space_id),
            total_count=total_count,
            offset=offset,
            limit=limit,
        )
        return CollaboratorPage(
            items=items,
            total_count=total_count,
            offset=offset,
            limit=limit,
        )

    async def add_collaborator(
        self,
        context: RequestContext,
        space_id: SpaceId,
        identity_id: str,
    ) -> None:
        """Add a single identity to the space's collaborators."""
        await self._update_policy(
            context, space_id, [identity_id], UserPolicy.add_user, "add"
        )

    async def add_collaborators(
        self,
        context: RequestContext,
        space_id: SpaceId,
        identity_ids: Sequence[str | None] | None,
    ) -> None:
        """Add a batch of identities to the space's collaborators.

        ``None`` entries are skipped, and a ``None`` batch is a no-op.
        Identities that are already members do not count as a change.
        """
        if identity_ids is None:
            return
        await self._update_policy(
            context, space_id, identity_ids, UserPolicy.add_user, "add"
        )

    async def remove_collaborator(
        self,
        context: RequestContext,
        space_id: SpaceId,
        identity_id: str,
    ) -> None:
        """Remove a single identity from the space's collaborators.

        Raises:
            SpaceOwnerRemovalError: If the identity owns the space
        """
        await self._reject_owner_removal(space_id, [identity_id])
        await self._update_policy(
            context, space_id, [identity_id], UserPolicy.remove_user, "remove"
        )

    async def remove_collaborators(
        self,
        context: RequestContext,
        space_id: SpaceId,
        identity_ids: Sequence[str | None] | None,
    ) -> None:
        """Remove a batch of identities from the space's collaborators.

        The whole batch is checked for the space owner before the caller is
        authorized or the policy is fetched.

        Raises:
            SpaceOwnerRemovalError: If any identity in the batch owns the space
        """
        if identity_ids is None:
            return
        await self._reject_owner_removal(space_id, identity_ids)
        await self._update_policy(
            context, space_id, identity_ids, UserPolicy.remove_user, "remove"
        )

    async def _update_policy(
        self,
        context: RequestContext,
        space_id: SpaceId,
        identity_ids: Sequence[str | None],
        mutator: PolicyMutator,
        operation: str,
    ) -> None:
        """Apply a membership change for each target and persist it once.

        Raises:
            UnauthorizedError: If the caller is denied or the check fails
            SpaceResourceNotFoundError: If the space has no policy resource
            PolicyFetchError: If the policy cannot be read
            InvalidIdentityIdError: If a target is not a UUID
            IdentityNotFoundError: If a target identity does not exist
            MalformedMemberListError: If the stored member list is corrupt
            PolicyUpdateError: If the policy cannot be written back
        """
        await self._authorize(context, space_id)

        resource = await self._load_space_resource(space_id)
        policy, protection_token = await self._fetch_policy(space_id, resource)

        updated = False
        target_count = 0
        for raw_id in identity_ids:
            if raw_id is None:
                continue
            target_count += 1
            identity = await self._resolve_target(raw_id)
            try:
                changed = mutator(policy, identity.id.value)
            except authz_exceptions.MalformedMemberListError as e:
                self._probe.malformed_member_list(
                    space_id=str(space_id), token=e.token
                )
                raise MalformedMemberListError(str(e)) from e
            updated = updated or changed

        if not updated:
            self._probe.collaborators_unchanged(
                space_id=str(space_id),
                operation=operation,
                target_count=target_count,
            )
            return

        try:
            await self._policy_provider.update_policy(policy, protection_token)
        except authz_exceptions.AuthorizationError as e:
            self._probe.policy_operation_failed(
                space_id=str(space_id), operation="update", error=e
            )
            raise PolicyUpdateError(str(e)) from e

        self._probe.collaborators_updated(
            space_id=str(space_id),
            operation=operation,
            target_count=target_count,
        )

    async def _authorize(self, context: RequestContext, space_id: SpaceId) -> None:
        if not context.access_token:
            self._probe.authorization_denied(
                space_id=str(space_id),
                caller_id=context.identity_id,
                reason="missing access token",
            )
            raise UnauthorizedError("Missing access token")

        try:
            authorized = await self._authorization.is_authorized(
                context.access_token, str(space_id)
            )
        except authz_exceptions.AuthorizationError as e:
            self._probe.authorization_denied(
                space_id=str(space_id),
                caller_id=context.identity_id,
                reason=str(e),
            )
            raise UnauthorizedError(str(e)) from e

        if not authorized:
            self._probe.authorization_denied(
                space_id=str(space_id),
                caller_id=context.identity_id,
                reason="not a space collaborator",
            )
            raise UnauthorizedError("User not among space collaborators")

    async def _reject_owner_removal(
        self,
        space_id: SpaceId,
        identity_ids: Sequence[str | None],
    ) -> None:
        """Fail if any target is the space owner.

        Targets that are not UUIDs cannot be the owner; they are left for the
        update engine to reject.
        """
        resource = await self._load_space_resource(space_id)
        space = resource.space
        for raw_id in identity_ids:
            if raw_id is None:
                continue
            try:
                target = UUID(raw_id)
            except ValueError:
                continue
            if space.is_owned_by(target):
                self._probe.owner_removal_rejected(
                    space_id=str(space_id),
                    owner_id=str(space.owner_id),
                )
                raise SpaceOwnerRemovalError()

    async def _load_space_resource(self, space_id: SpaceId) -> SpaceResource:
        async with self._session.begin():
            resource = await self._space_resource_repository.get_by_space(space_id)
        if resource is None:
            self._probe.space_resource_not_found(space_id=str(space_id))
            raise SpaceResourceNotFoundError(str(space_id))
        return resource

    async def _fetch_policy(
        self,
        space_id: SpaceId,
        resource: SpaceResource,
    ) -> tuple[UserPolicy, str]:
        try:
            return await self._policy_provider.get_policy(resource.policy_id)
        except authz_exceptions.AuthorizationError as e:
            self._probe.policy_operation_failed(
                space_id=str(space_id), operation="fetch", error=e
            )
            raise PolicyFetchError(str(e)) from e

    async def _get_identity(self, identity_id: IdentityId) -> Identity | None:
        async with self._session.begin():
            return await self._identity_repository.get_by_id(identity_id)

    async def _resolve_target(self, raw_id: str) -> Identity:
        try:
            identity_id = IdentityId.from_string(raw_id)
        except ValueError as e:
            self._probe.invalid_identity_id(identity_id=raw_id)
            raise InvalidIdentityIdError(raw_id) from e

        identity = await self._get_identity(identity_id)
        if identity is None:
            self._probe.identity_not_found(identity_id=raw_id)
            raise IdentityNotFoundError(raw_id)
        return identity
