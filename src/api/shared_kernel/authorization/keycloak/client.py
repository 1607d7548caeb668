"""Keycloak policy client implementation.

Reads and replaces user policies through the Keycloak authorization
(protection) API with httpx. Every fetch obtains a fresh protection API
token with the client credentials grant and returns it alongside the
policy so the caller can write the policy back under the same grant.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from shared_kernel.authorization.exceptions import PolicyServiceError
from shared_kernel.authorization.member_list import split_member_tokens
from shared_kernel.authorization.observability import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)
from shared_kernel.authorization.policy import UserPolicy


class KeycloakPolicyClient:
    """Keycloak implementation of the PolicyProvider protocol."""

    def __init__(
        self,
        token_endpoint: str,
        clients_endpoint: str,
        client_id: str,
        client_secret: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
        probe: AuthorizationProbe | None = None,
    ):
        """Initialize the policy client.

        Args:
            token_endpoint: OpenID Connect token endpoint of the realm
            clients_endpoint: Admin endpoint listing the realm's clients
            client_id: Public ID of the confidential client owning the policies
            client_secret: Secret for the client credentials grant
            timeout: HTTP timeout in seconds
            http_client: Optional pre-built client (tests pass a mock transport)
            probe: Optional domain probe for observability
        """
        self._token_endpoint = token_endpoint
        self._clients_endpoint = clients_endpoint.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._client = http_client
        self._client_uuid: str | None = None
        self._probe = probe or DefaultAuthorizationProbe()

    def _ensure_client(self) -> httpx.AsyncClient:
        """Lazily create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_policy(self, policy_id: str) -> tuple[UserPolicy, str]:
        """Fetch a user policy together with the protection token used.

        Raises:
            PolicyServiceError: If the token, client lookup or policy read fails,
                or the server returns a document that is not a user policy
        """
        try:
            protection_token = await self._obtain_protection_token()
            response = await self._ensure_client().get(
                await self._policy_url(policy_id, protection_token),
                headers=_bearer(protection_token),
            )
            response.raise_for_status()
            policy = UserPolicy.model_validate(response.json())
        except (httpx.HTTPError, ValueError, KeyError, ValidationError) as e:
            self._probe.policy_fetch_failed(policy_id=policy_id, error=e)
            raise PolicyServiceError(f"Failed to fetch policy {policy_id}: {e}") from e
        except PolicyServiceError as e:
            self._probe.policy_fetch_failed(policy_id=policy_id, error=e)
            raise

        self._probe.policy_fetched(
            policy_id=policy_id,
            member_count=_member_count(policy),
        )
        return policy, protection_token

    async def update_policy(self, policy: UserPolicy, protection_token: str) -> None:
        """Replace a user policy with the given document.

        Raises:
            PolicyServiceError: If the server rejects the write or the token
        """
        try:
            response = await self._ensure_client().put(
                await self._policy_url(policy.id, protection_token),
                headers=_bearer(protection_token),
                json=policy.to_payload(),
            )
            response.raise_for_status()
        except (httpx.HTTPError, ValueError, KeyError) as e:
            self._probe.policy_update_failed(policy_id=policy.id, error=e)
            raise PolicyServiceError(f"Failed to update policy {policy.id}: {e}") from e
        except PolicyServiceError as e:
            self._probe.policy_update_failed(policy_id=policy.id, error=e)
            raise

        self._probe.policy_updated(
            policy_id=policy.id,
            member_count=_member_count(policy),
        )

    async def _obtain_protection_token(self) -> str:
        """Obtain a protection API token with the client credentials grant."""
        try:
            response = await self._ensure_client().post(
                self._token_endpoint,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
            )
            response.raise_for_status()
            token = response.json().get("access_token")
        except httpx.TransportError as e:
            self._probe.connection_failed(endpoint=self._token_endpoint, error=e)
            raise
        if not token:
            raise PolicyServiceError("Token endpoint returned no access_token")

        self._probe.protection_token_obtained(client_id=self._client_id)
        return token

    async def _policy_url(self, policy_id: str, protection_token: str) -> str:
        client_uuid = await self._resolve_client_uuid(protection_token)
        return (
            f"{self._clients_endpoint}/{client_uuid}"
            f"/authz/resource-server/policy/{policy_id}"
        )

    async def _resolve_client_uuid(self, protection_token: str) -> str:
        """Look up the internal ID of the configured client.

        The ID is stable for the lifetime of the client registration, so it
        is cached after the first successful lookup.
        """
        if self._client_uuid is not None:
            return self._client_uuid

        response = await self._ensure_client().get(
            self._clients_endpoint,
            params={"clientId": self._client_id},
            headers=_bearer(protection_token),
        )
        response.raise_for_status()
        clients = response.json()
        if not clients:
            raise PolicyServiceError(f"Client {self._client_id} is not registered")

        self._client_uuid = clients[0]["id"]
        return self._client_uuid


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _member_count(policy: UserPolicy) -> int:
    return len(split_member_tokens(policy.config.user_ids))
