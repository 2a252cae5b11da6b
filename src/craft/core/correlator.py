"""
Event correlation.

Wires ``when D listens "E"`` triggers to the domain that publishes ``E``.
A listen may appear before its publisher in the source, so correlation
runs in two whole-program passes:

1. collect ``event -> publishing domain`` from every async action
2. emit ``channel(publisher) -> listener`` for every listen trigger whose
   event has a publisher; listens without one produce no edge
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from . import ir
from .policies import DEFAULT_POLICIES, ConflictPolicy, ResolutionPolicies
from .resolver import build_service_index, channel_name

logger = logging.getLogger(__name__)


@dataclass
class Correlation:
    """
    Result of event correlation.

    Attributes:
        publishers: Event name to publishing domain
        edges: Scenario id to its inbound event_listen edge
        unmatched: Scenario ids whose listened event has no publisher
    """

    publishers: dict[str, str] = field(default_factory=dict)
    edges: dict[str, ir.FlowEdge] = field(default_factory=dict)
    unmatched: list[str] = field(default_factory=list)


def collect_publishers(
    use_cases: Iterable[ir.UseCaseSpec],
    policy: ConflictPolicy = DEFAULT_POLICIES.event_publishers,
) -> dict[str, str]:
    """
    Pass 1: map each event name to its publishing domain.

    Async actions are scanned in declaration order. When two domains
    publish the same event, `policy` decides which one is kept.
    """
    publishers: dict[str, str] = {}
    for use_case in use_cases:
        for scenario in use_case.scenarios:
            for action in scenario.actions:
                if action.kind != ir.ActionKind.ASYNC:
                    continue
                current = publishers.get(action.event)
                if current is None:
                    publishers[action.event] = action.domain
                elif current != action.domain:
                    publishers[action.event] = policy.pick(current, action.domain)
                    logger.debug(
                        "Event %r published by both %s and %s; keeping %s (%s)",
                        action.event,
                        current,
                        action.domain,
                        publishers[action.event],
                        policy.value,
                    )
    return publishers


def link_listeners(
    use_cases: Iterable[ir.UseCaseSpec],
    publishers: Mapping[str, str],
    service_index: Mapping[str, str] | None = None,
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> Correlation:
    """Pass 2: build an inbound edge for every resolvable listen trigger."""
    service_index = service_index or {}
    correlation = Correlation(publishers=dict(publishers))

    for use_case in use_cases:
        for scenario in use_case.scenarios:
            trigger = scenario.trigger
            if trigger.kind != ir.TriggerKind.DOMAIN_LISTEN:
                continue

            publisher = publishers.get(trigger.event)
            if publisher is None:
                correlation.unmatched.append(scenario.id)
                continue

            correlation.edges[scenario.id] = ir.FlowEdge(
                step=1,
                source=channel_name(publisher, policies.channel_suffix),
                target=trigger.domain,
                label=trigger.event,
                kind=ir.EdgeKind.EVENT_LISTEN,
                use_case=use_case.name,
                scenario_id=scenario.id,
                source_service=service_index.get(publisher),
                target_service=service_index.get(trigger.domain),
            )

    return correlation


def correlate_events(
    use_cases: Iterable[ir.UseCaseSpec],
    services: Iterable[ir.ServiceSpec] = (),
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> Correlation:
    """
    Correlate event publishers and listeners across all use cases.

    Args:
        use_cases: Every use case in the program, in declaration order
        services: Merged services, for edge annotations
        policies: Publisher conflict policy and channel naming

    Returns:
        Correlation with the publisher map and the listen edges
    """
    use_cases = list(use_cases)
    publishers = collect_publishers(use_cases, policies.event_publishers)
    correlation = link_listeners(
        use_cases, publishers, build_service_index(services), policies
    )
    if correlation.unmatched:
        logger.debug("Listen triggers without a publisher: %s", correlation.unmatched)
    return correlation
