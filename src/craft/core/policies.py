"""
Conflict resolution policies.

Merging and event correlation are order sensitive. Every place where two
declarations disagree is resolved by a named policy rather than by
whichever branch the code happens to take.
"""

from dataclasses import dataclass
from enum import Enum


class ConflictPolicy(str, Enum):
    """Which of two conflicting values survives."""

    FIRST_WINS = "first_wins"
    LAST_WINS = "last_wins"

    def pick(self, existing: str, incoming: str) -> str:
        """
        Resolve a scalar conflict.

        Empty values never win over non-empty ones.
        """
        if not existing:
            return incoming
        if not incoming:
            return existing
        return existing if self == ConflictPolicy.FIRST_WINS else incoming


DEFAULT_EXTERNAL_SENTINEL = "External"
DEFAULT_CHANNEL_SUFFIX = "_queue"


@dataclass(frozen=True)
class ResolutionPolicies:
    """
    Policies used while building an architecture model.

    Attributes:
        scalar_conflicts: Service ``language`` disagreements
        deployment_conflicts: Deployment strategies with different kinds
        event_publishers: Same event published by several domains
        external_sentinel: Target of a return with no caller on the stack
        channel_suffix: Suffix of a domain's notification channel name
    """

    scalar_conflicts: ConflictPolicy = ConflictPolicy.FIRST_WINS
    deployment_conflicts: ConflictPolicy = ConflictPolicy.FIRST_WINS
    # Last publisher wins; ambiguous publishers are logged, not rejected
    event_publishers: ConflictPolicy = ConflictPolicy.LAST_WINS
    external_sentinel: str = DEFAULT_EXTERNAL_SENTINEL
    channel_suffix: str = DEFAULT_CHANNEL_SUFFIX


DEFAULT_POLICIES = ResolutionPolicies()
