"""Exceptions for the collaboration bounded context.

Errors are grouped into four families that the presentation layer maps to
HTTP statuses: bad request, unauthorized, not found and internal.
"""


class CollaborationError(Exception):
    """Base exception for collaborator operations."""

    pass


class BadRequestError(CollaborationError):
    """Raised when the request itself is invalid."""

    pass


class InvalidIdentityIdError(BadRequestError):
    """Raised when a target identity ID is not a valid UUID."""

    def __init__(self, identity_id: str):
        super().__init__(f"Invalid identity ID: {identity_id!r}")
        self.identity_id = identity_id


class SpaceOwnerRemovalError(BadRequestError):
    """Raised when a removal batch names the space owner.

    The owner is always a collaborator, so the whole batch is rejected
    before any authorization check or policy fetch.
    """

    def __init__(self):
        super().__init__(
            "Space owner can't be removed from the list of the space collaborators"
        )


class UnauthorizedError(CollaborationError):
    """Raised when the caller may not manage the space's collaborators.

    Covers both an explicit denial and a check that could not be evaluated.
    """

    pass


class NotFoundError(CollaborationError):
    """Raised when a referenced entity does not exist."""

    pass


class SpaceResourceNotFoundError(NotFoundError):
    """Raised when a space, or its policy resource, cannot be found."""

    def __init__(self, space_id: str):
        super().__init__(f"Space resource not found for space {space_id}")
        self.space_id = space_id


class IdentityNotFoundError(NotFoundError):
    """Raised when a target identity does not exist locally."""

    def __init__(self, identity_id: str):
        super().__init__(f"Identity not found: {identity_id}")
        self.identity_id = identity_id


class InternalError(CollaborationError):
    """Raised on remote failures and data-integrity violations."""

    pass


class PolicyFetchError(InternalError):
    """Raised when the space's policy cannot be read."""

    pass


class PolicyUpdateError(InternalError):
    """Raised when the space's policy cannot be written back."""

    pass


class OrphanedPolicyMemberError(InternalError):
    """Raised when a policy lists an identity that does not exist locally."""

    def __init__(self, identity_id: str):
        super().__init__(f"Policy member has no matching identity: {identity_id}")
        self.identity_id = identity_id


class MalformedMemberListError(InternalError):
    """Raised when the policy's member list contains a non-UUID entry."""

    pass
