"""Authorization type definitions for the policy server.

Enumerates the fixed values a user policy document carries so the policy
model does not repeat hardcoded strings.
"""

from enum import StrEnum


class PolicyType(StrEnum):
    """Policy types understood by the authorization server."""

    USER = "user"


class PolicyLogic(StrEnum):
    """Whether a policy's decision is used as-is or inverted."""

    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"


class DecisionStrategy(StrEnum):
    """How the server combines the decisions of associated policies."""

    UNANIMOUS = "UNANIMOUS"
    AFFIRMATIVE = "AFFIRMATIVE"
    CONSENSUS = "CONSENSUS"
