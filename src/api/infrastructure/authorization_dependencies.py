"""Keycloak client dependency injection.

Provides the policy client and entitlement checker for FastAPI endpoints
and application services.

Each client owns one httpx AsyncClient with its own connection pool, so a
single cached instance is shared across requests and closed on shutdown.
"""

from __future__ import annotations

from functools import lru_cache

from infrastructure.settings import get_keycloak_settings
from shared_kernel.authorization.keycloak import (
    KeycloakEntitlementChecker,
    KeycloakPolicyClient,
)
from shared_kernel.authorization.protocols import AuthorizationCheck, PolicyProvider


@lru_cache
def _policy_client() -> KeycloakPolicyClient:
    settings = get_keycloak_settings()
    return KeycloakPolicyClient(
        token_endpoint=settings.token_endpoint,
        clients_endpoint=settings.clients_endpoint,
        client_id=settings.client_id,
        client_secret=settings.client_secret.get_secret_value(),
        timeout=settings.request_timeout,
    )


@lru_cache
def _entitlement_checker() -> KeycloakEntitlementChecker:
    settings = get_keycloak_settings()
    return KeycloakEntitlementChecker(
        entitlement_endpoint=settings.entitlement_endpoint,
        timeout=settings.request_timeout,
    )


def get_policy_provider() -> PolicyProvider:
    """Get the Keycloak policy client.

    Returns:
        Configured client implementing the PolicyProvider protocol
    """
    return _policy_client()


def get_authorization_check() -> AuthorizationCheck:
    """Get the Keycloak entitlement checker.

    Returns:
        Configured checker implementing the AuthorizationCheck protocol
    """
    return _entitlement_checker()


async def close_authorization_clients() -> None:
    """Close the cached Keycloak clients and forget them.

    Should be called during application shutdown.
    """
    if _policy_client.cache_info().currsize:
        await _policy_client().close()
        _policy_client.cache_clear()
    if _entitlement_checker.cache_info().currsize:
        await _entitlement_checker().close()
        _entitlement_checker.cache_clear()
