"""
Actor types for craft IR.

Actors are the participants that trigger use cases from outside the
system: people, external systems, or other services.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ActorKind(str, Enum):
    """Kinds of actor."""

    USER = "user"
    SYSTEM = "system"
    SERVICE = "service"


class ActorSpec(BaseModel):
    """
    A declared actor.

    Actors are never merged; two declarations with the same name produce
    two entries in declaration order.

    Attributes:
        name: Actor name as written in the source
        kind: Actor kind
    """

    name: str
    kind: ActorKind = ActorKind.USER

    model_config = ConfigDict(frozen=True)
