"""Exceptions for authorization-server integration."""


class AuthorizationError(Exception):
    """Base exception for authorization errors."""

    pass


class PolicyServiceError(AuthorizationError):
    """Raised when reading or writing a policy on the authorization server fails.

    Covers transport errors, non-success responses (including a rejected
    protection token on update) and unparseable policy documents.
    """

    pass


class EntitlementError(AuthorizationError):
    """Raised when an entitlement decision cannot be evaluated."""

    pass


class MalformedMemberListError(AuthorizationError):
    """Raised when a policy's encoded member list contains a token that is not a UUID."""

    def __init__(self, token: str):
        super().__init__(f"Invalid identity ID in policy member list: {token!r}")
        self.token = token
