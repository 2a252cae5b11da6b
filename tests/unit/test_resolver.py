"""Tests for scenario resolution with the per-scenario call stack."""

from craft.core import ir
from craft.core.policies import ResolutionPolicies
from craft.core.resolver import (
    CallStack,
    build_service_index,
    channel_name,
    resolve_scenario,
    resolve_use_cases,
)


def sync(domain: str, target: str, phrase: str = "", connector: str = "") -> ir.ActionSpec:
    return ir.ActionSpec(
        kind=ir.ActionKind.SYNC,
        domain=domain,
        target_domain=target,
        connector=connector,
        phrase=phrase,
    )


def ret(domain: str, target: str | None = None, phrase: str = "") -> ir.ActionSpec:
    return ir.ActionSpec(
        kind=ir.ActionKind.RETURN, domain=domain, target_domain=target, phrase=phrase
    )


def notify(domain: str, event: str) -> ir.ActionSpec:
    return ir.ActionSpec(kind=ir.ActionKind.ASYNC, domain=domain, event=event)


def internal(domain: str, verb: str = "works") -> ir.ActionSpec:
    return ir.ActionSpec(kind=ir.ActionKind.INTERNAL, domain=domain, verb=verb)


def scenario(trigger: ir.TriggerSpec, *actions: ir.ActionSpec) -> ir.ScenarioSpec:
    return ir.ScenarioSpec(id="scenario_1", trigger=trigger, actions=list(actions))


EXTERNAL = ir.TriggerSpec(kind=ir.TriggerKind.EXTERNAL, actor="User", verb="triggers")
EVENT = ir.TriggerSpec(kind=ir.TriggerKind.EVENT, event="Tick")


def pairs(flow) -> list[tuple[str, str]]:
    return [(e.source, e.target) for e in flow.edges]


class TestCallStack:
    def test_lifo(self):
        stack = CallStack(seed="User")
        stack.push("A")
        stack.push("B")
        assert stack.pop() == "B"
        assert stack.pop() == "A"
        assert stack.pop() == "User"
        assert stack.pop() is None

    def test_empty_seed(self):
        assert len(CallStack()) == 0
        assert list(CallStack("X")) == ["X"]


class TestImplicitReturns:
    def test_return_goes_to_caller(self):
        flow = resolve_scenario(
            scenario(EXTERNAL, sync("A", "B", "X", "to"), ret("B", phrase="result"))
        )
        assert pairs(flow) == [("User", "A"), ("A", "B"), ("B", "A")]
        assert [e.kind for e in flow.edges] == [
            ir.EdgeKind.TRIGGER,
            ir.EdgeKind.SYNC,
            ir.EdgeKind.RETURN,
        ]
        assert [e.step for e in flow.edges] == [1, 2, 3]

    def test_nested_calls_unwind_in_order(self):
        flow = resolve_scenario(
            scenario(
                EXTERNAL,
                sync("A", "B"),
                sync("B", "C"),
                ret("C"),
                ret("B"),
                ret("A"),
            )
        )
        assert pairs(flow) == [
            ("User", "A"),
            ("A", "B"),
            ("B", "C"),
            ("C", "B"),
            ("B", "A"),
            ("A", "User"),
        ]

    def test_empty_stack_returns_to_sentinel(self):
        flow = resolve_scenario(scenario(EVENT, ret("B", phrase="done")))
        assert pairs(flow) == [("B", "External")]

    def test_sentinel_is_configurable(self):
        policies = ResolutionPolicies(external_sentinel="Outside")
        flow = resolve_scenario(scenario(EVENT, ret("B")), policies=policies)
        assert pairs(flow) == [("B", "Outside")]

    def test_seeded_actor_is_popped_after_callers(self):
        flow = resolve_scenario(scenario(EXTERNAL, ret("A"), ret("A")))
        assert pairs(flow) == [("User", "A"), ("A", "User"), ("A", "External")]


class TestExplicitReturns:
    def test_explicit_target_overrides_stack(self):
        flow = resolve_scenario(scenario(EXTERNAL, sync("A", "B"), ret("B", "C")))
        assert pairs(flow)[-1] == ("B", "C")

    def test_explicit_return_leaves_caller_stranded(self):
        flow = resolve_scenario(
            scenario(EXTERNAL, sync("A", "B"), ret("B", "C"), ret("C"))
        )
        # A was never popped by the explicit return, so C's implicit return reaches A
        assert pairs(flow)[-1] == ("C", "A")


class TestOtherActions:
    def test_async_goes_to_own_channel(self):
        flow = resolve_scenario(scenario(EVENT, notify("Order Service", "Placed")))
        edge = flow.edges[0]
        assert (edge.source, edge.target) == ("Order Service", "order_service_queue")
        assert edge.kind == ir.EdgeKind.ASYNC
        assert edge.label == "Placed"

    def test_async_does_not_touch_stack(self):
        flow = resolve_scenario(scenario(EXTERNAL, sync("A", "B"), notify("B", "E"), ret("B")))
        assert pairs(flow)[-1] == ("B", "A")

    def test_internal_only_marks_visited(self):
        flow = resolve_scenario(scenario(EVENT, internal("A"), internal("B"), internal("A")))
        assert flow.edges == []
        assert flow.visited == ["A", "B"]

    def test_no_trigger_edge_without_actions(self):
        assert resolve_scenario(scenario(EXTERNAL)).edges == []

    def test_trigger_edge_label(self):
        trigger = ir.TriggerSpec(
            kind=ir.TriggerKind.EXTERNAL, actor="Customer", verb="places", phrase="an order"
        )
        flow = resolve_scenario(scenario(trigger, internal("Order")))
        assert flow.edges[0].label == "places an order"
        assert (flow.edges[0].source, flow.edges[0].target) == ("Customer", "Order")

    def test_sync_label_joins_connector_and_phrase(self):
        flow = resolve_scenario(scenario(EVENT, sync("A", "B", "charge card", "to")))
        assert flow.edges[0].label == "to charge card"


class TestServiceAnnotations:
    def test_edges_carry_owning_services(self):
        services = [
            ir.ServiceSpec(name="Shop", domains=["A"]),
            ir.ServiceSpec(name="Pay", domains=["B", "A"]),
        ]
        index = build_service_index(services)
        assert index == {"A": "Shop", "B": "Pay"}

        flow = resolve_scenario(scenario(EXTERNAL, sync("A", "B")), "UC", index)
        trigger_edge, sync_edge = flow.edges
        assert trigger_edge.source_service is None
        assert trigger_edge.target_service == "Shop"
        assert (sync_edge.source_service, sync_edge.target_service) == ("Shop", "Pay")
        assert sync_edge.use_case == "UC"
        assert sync_edge.scenario_id == "scenario_1"

    def test_resolve_use_cases_in_order(self):
        use_cases = [
            ir.UseCaseSpec(
                name="One",
                scenarios=[
                    ir.ScenarioSpec(id="scenario_1", trigger=EVENT, actions=[ret("A")]),
                    ir.ScenarioSpec(id="scenario_3", trigger=EVENT, actions=[ret("B")]),
                ],
            ),
            ir.UseCaseSpec(
                name="Two",
                scenarios=[ir.ScenarioSpec(id="scenario_5", trigger=EVENT, actions=[ret("C")])],
            ),
        ]
        flows = resolve_use_cases(use_cases)
        assert [f.scenario_id for f in flows] == ["scenario_1", "scenario_3", "scenario_5"]
        # stacks are never shared between scenarios
        assert [f.edges[0].target for f in flows] == ["External"] * 3


def test_channel_name():
    assert channel_name("Order Service") == "order_service_queue"
    assert channel_name("Payment", "_topic") == "payment_topic"
