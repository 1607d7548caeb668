"""Keycloak implementations of the authorization protocols."""

from shared_kernel.authorization.keycloak.client import KeycloakPolicyClient
from shared_kernel.authorization.keycloak.entitlement import (
    KeycloakEntitlementChecker,
)

__all__ = [
    "KeycloakEntitlementChecker",
    "KeycloakPolicyClient",
]
