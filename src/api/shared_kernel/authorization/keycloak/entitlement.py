"""Keycloak entitlement checker.

Asks the realm's entitlement endpoint for a requesting party token (RPT)
scoped to a single resource and grants access when the returned token
carries a permission on that resource. Keycloak validates the caller's
token while evaluating the request, so an expired or forged token yields
a denial rather than a grant.
"""

from __future__ import annotations

from typing import Any

import httpx
from jose import JWTError, jwt

from shared_kernel.authorization.exceptions import EntitlementError
from shared_kernel.authorization.observability import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)

_DENIED_STATUSES = (401, 403)


class KeycloakEntitlementChecker:
    """Keycloak implementation of the AuthorizationCheck protocol."""

    def __init__(
        self,
        entitlement_endpoint: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
        probe: AuthorizationProbe | None = None,
    ):
        """Initialize the entitlement checker.

        Args:
            entitlement_endpoint: Entitlement endpoint for the resource server client
            timeout: HTTP timeout in seconds
            http_client: Optional pre-built client (tests pass a mock transport)
            probe: Optional domain probe for observability
        """
        self._entitlement_endpoint = entitlement_endpoint
        self._timeout = timeout
        self._client = http_client
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

    async def is_authorized(self, access_token: str, resource_name: str) -> bool:
        """Check whether the caller is entitled to the named resource.

        Args:
            access_token: The caller's bearer token
            resource_name: Name of the protected resource (the space ID)

        Returns:
            True if an RPT was issued and names the resource, False otherwise

        Raises:
            EntitlementError: If the endpoint is unreachable, answers with an
                unexpected status or returns an unreadable token
        """
        try:
            rpt = await self._request_rpt(access_token, resource_name)
            granted = rpt is not None and _grants(_claims(rpt), resource_name)
        except (httpx.HTTPError, ValueError, JWTError) as e:
            self._probe.entitlement_check_failed(resource=resource_name, error=e)
            raise EntitlementError(
                f"Failed to check entitlement for {resource_name}: {e}"
            ) from e
        except EntitlementError as e:
            self._probe.entitlement_check_failed(resource=resource_name, error=e)
            raise

        self._probe.entitlement_checked(resource=resource_name, granted=granted)
        return granted

    async def _request_rpt(self, access_token: str, resource_name: str) -> str | None:
        """Request an RPT for the resource; None means the server denied it."""
        try:
            response = await self._ensure_client().post(
                self._entitlement_endpoint,
                headers={"Authorization": f"Bearer {access_token}"},
                json={"permissions": [{"resource_set_name": resource_name}]},
            )
        except httpx.TransportError as e:
            self._probe.connection_failed(endpoint=self._entitlement_endpoint, error=e)
            raise

        if response.status_code in _DENIED_STATUSES:
            return None
        if response.status_code != 200:
            raise EntitlementError(
                f"Entitlement endpoint returned status {response.status_code}"
            )

        body = response.json()
        if not isinstance(body, dict):
            raise EntitlementError("Entitlement endpoint returned a non-object body")
        rpt = body.get("rpt")
        if not rpt or not isinstance(rpt, str):
            raise EntitlementError("Entitlement endpoint returned no rpt")
        return rpt


def _claims(token: str) -> dict[str, Any]:
    # The RPT comes straight from the authorization server.
    return jwt.get_unverified_claims(token)


def _grants(claims: dict[str, Any], resource_name: str) -> bool:
    """Return whether the token's permissions include the resource."""
    authorization = claims.get("authorization") or {}
    if not isinstance(authorization, dict):
        raise EntitlementError("RPT authorization claim is not an object")
    for permission in authorization.get("permissions") or []:
        if isinstance(permission, dict) and resource_name in (
            permission.get("resource_set_name"),
            permission.get("rsname"),
        ):
            return True
    return False
