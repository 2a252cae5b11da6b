"""
Resolved flow edges for craft IR.

Edges are produced by scenario resolution and event correlation and are
what diagram renderers draw as arrows.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class EdgeKind(str, Enum):
    """Why an edge exists."""

    TRIGGER = "trigger"
    SYNC = "sync"
    RETURN = "return"
    ASYNC = "async"
    EVENT_LISTEN = "event_listen"


class FlowEdge(BaseModel):
    """
    A directed edge in a resolved scenario flow.

    Attributes:
        step: 1-based position within the scenario
        source: Source actor, domain or channel
        target: Target domain, caller, channel or external sentinel
        label: Arrow label
        kind: Edge kind
        use_case: Owning use case name
        scenario_id: Owning scenario id
        source_service: Service owning ``source``, if any
        target_service: Service owning ``target``, if any
    """

    step: int
    source: str
    target: str
    label: str = ""
    kind: EdgeKind
    use_case: str = ""
    scenario_id: str = ""
    source_service: str | None = None
    target_service: str | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"
