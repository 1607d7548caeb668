"""User policy document exchanged with the authorization server.

The document is read, mutated in memory and written back whole, so fields
this service does not interpret are preserved on the model and returned
unchanged on update.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shared_kernel.authorization.member_list import (
    format_member_ids,
    parse_member_ids,
)
from shared_kernel.authorization.types import (
    DecisionStrategy,
    PolicyLogic,
    PolicyType,
)


class PolicyConfig(BaseModel):
    """Policy configuration holding the encoded member list."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    user_ids: str = Field(default="", alias="users")


class UserPolicy(BaseModel):
    """A user policy whose members are the collaborators of one space."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str = ""
    type: str = PolicyType.USER
    logic: str = PolicyLogic.POSITIVE
    decision_strategy: str = Field(
        default=DecisionStrategy.UNANIMOUS,
        alias="decisionStrategy",
    )
    config: PolicyConfig = Field(default_factory=PolicyConfig)

    def member_ids(self) -> list[UUID]:
        """Decode the member list.

        Raises:
            MalformedMemberListError: If the stored list contains a non-UUID token
        """
        return parse_member_ids(self.config.user_ids)

    def add_user(self, identity_id: UUID) -> bool:
        """Add an identity to the member list.

        Returns:
            True if the list changed, False if the identity was already a member
        """
        members = self.member_ids()
        if identity_id in members:
            return False
        members.append(identity_id)
        self.config.user_ids = format_member_ids(members)
        return True

    def remove_user(self, identity_id: UUID) -> bool:
        """Remove an identity from the member list.

        Returns:
            True if the list changed, False if the identity was not a member
        """
        members = self.member_ids()
        if identity_id not in members:
            return False
        self.config.user_ids = format_member_ids(
            member for member in members if member != identity_id
        )
        return True

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the server's JSON shape, unknown fields included."""
        return self.model_dump(mode="json", by_alias=True)
