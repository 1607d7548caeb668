"""Authorization protocols for the policy server abstraction.

Defines the interfaces the collaboration context depends on, allowing for
swappable implementations (Keycloak, in-memory fakes in tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from shared_kernel.authorization.policy import UserPolicy


class PolicyProvider(Protocol):
    """Protocol for reading and writing user policies.

    A fetch hands back the protection API token it used so that the
    follow-up update of the same policy runs under the same grant.
    """

    async def get_policy(self, policy_id: str) -> tuple[UserPolicy, str]:
        """Fetch a user policy.

        Args:
            policy_id: Identifier of the policy on the authorization server

        Returns:
            Tuple of (policy, protection API token)

        Raises:
            PolicyServiceError: If the policy cannot be read
        """
        ...

    async def update_policy(self, policy: UserPolicy, protection_token: str) -> None:
        """Replace a user policy with the given document.

        Args:
            policy: The full policy document to store
            protection_token: Token returned by the matching get_policy call

        Raises:
            PolicyServiceError: If the write fails or the token is rejected
        """
        ...


class AuthorizationCheck(Protocol):
    """Protocol for deciding whether a caller may manage a space."""

    async def is_authorized(self, access_token: str, resource_name: str) -> bool:
        """Check whether the token's bearer holds a permission on the resource.

        Args:
            access_token: The caller's bearer token
            resource_name: Name of the protected resource (the space ID)

        Returns:
            True if the caller is entitled, False otherwise

        Raises:
            EntitlementError: If the decision cannot be evaluated
        """
        ...
