"""
Use case types for craft IR.

A use case groups scenarios. Each scenario starts with a trigger and
continues with an ordered list of actions::

    use_case "Place Order" {
        when Customer places an order
            Order asks Payment to charge card
            Payment returns confirmation
            Order notifies "Order Placed"
    }
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TriggerKind(str, Enum):
    """What starts a scenario."""

    EXTERNAL = "external"  # when Customer places an order
    EVENT = "event"  # when "Nightly Tick"
    DOMAIN_LISTEN = "domain_listen"  # when Inventory listens "Order Placed"


class ActionKind(str, Enum):
    """Kinds of scenario action."""

    SYNC = "sync"
    ASYNC = "async"
    INTERNAL = "internal"
    RETURN = "return"


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)


class SourceRange(BaseModel):
    """
    Where a block sits in its source file.

    Attributes:
        file: Source file path as given to the parser
        start_line: Line of the opening keyword (1-indexed)
        end_line: Line of the closing brace
    """

    file: str = ""
    start_line: int
    end_line: int

    model_config = ConfigDict(frozen=True)


class TriggerSpec(BaseModel):
    """
    A scenario trigger.

    Only the fields relevant to ``kind`` are populated.

    Attributes:
        kind: Trigger variant
        actor: Triggering actor (external)
        verb: Verb the actor performs (external)
        phrase: Remaining words (external)
        domain: Listening domain (domain_listen)
        event: Event name (event, domain_listen)
    """

    kind: TriggerKind
    actor: str = ""
    verb: str = ""
    phrase: str = ""
    domain: str = ""
    event: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def description(self) -> str:
        if self.kind == TriggerKind.EXTERNAL:
            return _join("when", self.actor, self.verb, self.phrase)
        if self.kind == TriggerKind.EVENT:
            return f'when "{self.event}"'
        return f'when {self.domain} listens "{self.event}"'


class ActionSpec(BaseModel):
    """
    One step of a scenario.

    Attributes:
        id: Program-wide action id (``action_N``)
        kind: Action variant
        domain: Domain performing the action
        verb: Verb (internal actions)
        target_domain: Callee (sync) or explicit return target; None when
            a return relies on the call stack
        event: Published event (async)
        connector: Connector word such as ``to`` or ``the``
        phrase: Remaining words
    """

    id: str = ""
    kind: ActionKind
    domain: str
    verb: str = ""
    target_domain: str | None = None
    event: str = ""
    connector: str = ""
    phrase: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def description(self) -> str:
        if self.kind == ActionKind.SYNC:
            return _join(self.domain, "asks", self.target_domain or "", self.connector, self.phrase)
        if self.kind == ActionKind.ASYNC:
            return f'{self.domain} notifies "{self.event}"'
        if self.kind == ActionKind.INTERNAL:
            return _join(self.domain, self.verb, self.connector, self.phrase)
        if self.target_domain:
            return _join(self.domain, "returns", self.phrase, "to", self.target_domain)
        return _join(self.domain, "returns", self.phrase)


class ScenarioSpec(BaseModel):
    """
    A trigger followed by its ordered actions.

    Attributes:
        id: Program-wide scenario id (``scenario_N``)
        trigger: What starts the scenario
        actions: Actions in declaration order
    """

    id: str = ""
    trigger: TriggerSpec
    actions: list[ActionSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class UseCaseSpec(BaseModel):
    """
    A named group of scenarios.

    Attributes:
        name: Use case name
        scenarios: Scenarios in declaration order
        source: Location of the ``use_case`` block, when parsed from text
    """

    name: str
    scenarios: list[ScenarioSpec] = Field(default_factory=list)
    source: SourceRange | None = None

    model_config = ConfigDict(frozen=True)
