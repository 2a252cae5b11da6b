"""
Scenario resolution.

Walks a scenario's actions in order and turns them into directed flow
edges. Implicit return targets are found with a call stack that lives
only for the duration of one scenario:

- external trigger: the actor is pushed first, and an edge runs from the
  actor to the first acting domain
- sync ``A asks B``: edge A -> B, push A
- ``B returns``: pop; edge B -> caller, or B -> external sentinel when
  nothing is left to pop
- ``B returns to C``: edge B -> C, the stack is left alone
- async ``A notifies "E"``: edge A -> A's channel
- internal: no edge

An explicit return does not pop, so the caller pushed by the matching
``asks`` stays on the stack. Later implicit returns in the same scenario
resolve against it.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from . import ir
from .merger import union_ordered
from .policies import DEFAULT_POLICIES, ResolutionPolicies

logger = logging.getLogger(__name__)


class CallStack:
    """LIFO of unmatched synchronous callers within one scenario."""

    def __init__(self, seed: str | None = None):
        self._frames: list[str] = [seed] if seed else []

    def push(self, caller: str) -> None:
        self._frames.append(caller)

    def pop(self) -> str | None:
        """Most recent unmatched caller, or None when empty."""
        if not self._frames:
            return None
        return self._frames.pop()

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[str]:
        # bottom to top
        return iter(list(self._frames))


@dataclass
class ScenarioFlow:
    """
    Resolution result for one scenario.

    Attributes:
        scenario_id: Scenario the edges belong to
        edges: Edges in emission order, steps numbered from 1
        visited: Every acting domain, in first-seen order
    """

    scenario_id: str
    edges: list[ir.FlowEdge] = field(default_factory=list)
    visited: list[str] = field(default_factory=list)


def channel_name(domain: str, suffix: str = DEFAULT_POLICIES.channel_suffix) -> str:
    """Name of the notification channel owned by `domain`."""
    return domain.replace(" ", "_").lower() + suffix


def build_service_index(services: Iterable[ir.ServiceSpec]) -> dict[str, str]:
    """Map each domain to the first service that owns it."""
    index: dict[str, str] = {}
    for service in services:
        for domain in service.domains:
            index.setdefault(domain, service.name)
    return index


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)


class _EdgeEmitter:
    def __init__(
        self, scenario_id: str, use_case: str, service_index: Mapping[str, str]
    ):
        self.scenario_id = scenario_id
        self.use_case = use_case
        self.service_index = service_index
        self.edges: list[ir.FlowEdge] = []

    def emit(self, source: str, target: str, label: str, kind: ir.EdgeKind) -> None:
        self.edges.append(
            ir.FlowEdge(
                step=len(self.edges) + 1,
                source=source,
                target=target,
                label=label,
                kind=kind,
                use_case=self.use_case,
                scenario_id=self.scenario_id,
                source_service=self.service_index.get(source),
                target_service=self.service_index.get(target),
            )
        )


def resolve_scenario(
    scenario: ir.ScenarioSpec,
    use_case: str = "",
    service_index: Mapping[str, str] | None = None,
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> ScenarioFlow:
    """
    Resolve one scenario into flow edges.

    Never raises: unbalanced call/return sequences degrade to the
    external sentinel, and callers left on the stack are discarded.

    Args:
        scenario: Scenario to resolve
        use_case: Owning use case name, copied onto each edge
        service_index: Domain to owning service, for edge annotations
        policies: Supplies the external sentinel and channel suffix

    Returns:
        ScenarioFlow with edges and visited domains
    """
    emitter = _EdgeEmitter(scenario.id, use_case, service_index or {})
    trigger = scenario.trigger
    visited: list[str] = []

    if trigger.kind == ir.TriggerKind.EXTERNAL:
        stack = CallStack(seed=trigger.actor)
        if scenario.actions:
            emitter.emit(
                trigger.actor,
                scenario.actions[0].domain,
                _join(trigger.verb, trigger.phrase),
                ir.EdgeKind.TRIGGER,
            )
    else:
        stack = CallStack()

    for action in scenario.actions:
        visited = union_ordered(visited, [action.domain])

        if action.kind == ir.ActionKind.SYNC:
            target = action.target_domain or policies.external_sentinel
            emitter.emit(
                action.domain, target, _join(action.connector, action.phrase), ir.EdgeKind.SYNC
            )
            stack.push(action.domain)

        elif action.kind == ir.ActionKind.RETURN:
            if action.target_domain:
                target = action.target_domain
            else:
                target = stack.pop() or policies.external_sentinel
            emitter.emit(action.domain, target, action.phrase, ir.EdgeKind.RETURN)

        elif action.kind == ir.ActionKind.ASYNC:
            emitter.emit(
                action.domain,
                channel_name(action.domain, policies.channel_suffix),
                action.event,
                ir.EdgeKind.ASYNC,
            )

        # Internal actions only mark the domain as visited

    if stack:
        logger.debug(
            "Scenario %s ends with unmatched callers %s", scenario.id, list(stack)
        )

    return ScenarioFlow(scenario_id=scenario.id, edges=emitter.edges, visited=visited)


def resolve_use_cases(
    use_cases: Iterable[ir.UseCaseSpec],
    services: Iterable[ir.ServiceSpec] = (),
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> list[ScenarioFlow]:
    """Resolve every scenario of every use case, in declaration order."""
    service_index = build_service_index(services)
    return [
        resolve_scenario(scenario, use_case.name, service_index, policies)
        for use_case in use_cases
        for scenario in use_case.scenarios
    ]
