"""Authorization primitives for space collaboration.

This module provides the shared policy model, the member-list codec and the
protocols used across bounded contexts for authorization-server integration.
"""

from shared_kernel.authorization.exceptions import (
    AuthorizationError,
    EntitlementError,
    MalformedMemberListError,
    PolicyServiceError,
)
from shared_kernel.authorization.policy import PolicyConfig, UserPolicy
from shared_kernel.authorization.protocols import AuthorizationCheck, PolicyProvider

__all__ = [
    "AuthorizationCheck",
    "AuthorizationError",
    "EntitlementError",
    "MalformedMemberListError",
    "PolicyConfig",
    "PolicyProvider",
    "PolicyServiceError",
    "UserPolicy",
]
