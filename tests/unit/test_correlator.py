"""Tests for whole-program event correlation."""

import logging

from craft.core import ir
from craft.core.correlator import collect_publishers, correlate_events
from craft.core.policies import ConflictPolicy, ResolutionPolicies


def notify(domain: str, event: str) -> ir.ActionSpec:
    return ir.ActionSpec(kind=ir.ActionKind.ASYNC, domain=domain, event=event)


def listen(domain: str, event: str) -> ir.TriggerSpec:
    return ir.TriggerSpec(kind=ir.TriggerKind.DOMAIN_LISTEN, domain=domain, event=event)


TICK = ir.TriggerSpec(kind=ir.TriggerKind.EVENT, event="Tick")


def use_case(name: str, scenario_id: str, trigger: ir.TriggerSpec, *actions) -> ir.UseCaseSpec:
    return ir.UseCaseSpec(
        name=name,
        scenarios=[ir.ScenarioSpec(id=scenario_id, trigger=trigger, actions=list(actions))],
    )


class TestCollectPublishers:
    def test_maps_event_to_domain(self):
        publishers = collect_publishers([use_case("UC", "s1", TICK, notify("A", "Evt"))])
        assert publishers == {"Evt": "A"}

    def test_last_publisher_wins_by_default(self):
        use_cases = [
            use_case("One", "s1", TICK, notify("A", "Evt")),
            use_case("Two", "s2", TICK, notify("B", "Evt")),
        ]
        assert collect_publishers(use_cases) == {"Evt": "B"}

    def test_first_publisher_wins_when_configured(self):
        use_cases = [
            use_case("One", "s1", TICK, notify("A", "Evt")),
            use_case("Two", "s2", TICK, notify("B", "Evt")),
        ]
        assert collect_publishers(use_cases, ConflictPolicy.FIRST_WINS) == {"Evt": "A"}

    def test_ambiguous_publisher_is_logged(self, caplog):
        use_cases = [
            use_case("One", "s1", TICK, notify("A", "Evt"), notify("B", "Evt")),
        ]
        with caplog.at_level(logging.DEBUG, logger="craft.core.correlator"):
            collect_publishers(use_cases)
        assert "published by both A and B" in caplog.text


class TestCorrelateEvents:
    def test_listen_declared_before_publisher(self):
        use_cases = [
            use_case("Listener", "s1", listen("B", "Evt")),
            use_case("Publisher", "s2", TICK, notify("A", "Evt")),
        ]
        correlation = correlate_events(use_cases)
        edge = correlation.edges["s1"]
        assert (edge.source, edge.target) == ("a_queue", "B")
        assert edge.kind == ir.EdgeKind.EVENT_LISTEN
        assert edge.label == "Evt"
        assert edge.use_case == "Listener"

    def test_listener_follows_last_publisher(self):
        use_cases = [
            use_case("Listener", "s1", listen("C", "Evt")),
            use_case("First", "s2", TICK, notify("A", "Evt")),
            use_case("Second", "s3", TICK, notify("B", "Evt")),
        ]
        correlation = correlate_events(use_cases)
        assert correlation.edges["s1"].source == "b_queue"

    def test_publisher_policy_is_respected(self):
        use_cases = [
            use_case("Listener", "s1", listen("C", "Evt")),
            use_case("First", "s2", TICK, notify("A", "Evt")),
            use_case("Second", "s3", TICK, notify("B", "Evt")),
        ]
        policies = ResolutionPolicies(event_publishers=ConflictPolicy.FIRST_WINS)
        correlation = correlate_events(use_cases, policies=policies)
        assert correlation.edges["s1"].source == "a_queue"

    def test_unpublished_event_is_dropped(self):
        correlation = correlate_events([use_case("Listener", "s1", listen("B", "Nobody"))])
        assert correlation.edges == {}
        assert correlation.unmatched == ["s1"]

    def test_edges_carry_services(self):
        services = [
            ir.ServiceSpec(name="Pub", domains=["A"]),
            ir.ServiceSpec(name="Sub", domains=["B"]),
        ]
        use_cases = [
            use_case("Publisher", "s1", TICK, notify("A", "Evt")),
            use_case("Listener", "s2", listen("B", "Evt")),
        ]
        edge = correlate_events(use_cases, services).edges["s2"]
        assert (edge.source_service, edge.target_service) == ("Pub", "Sub")
