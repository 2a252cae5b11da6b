"""End-to-end tests for model assembly from DSL text."""

from craft.core import ir
from craft.core.assembler import build_model_from_declarations
from craft.core.policies import ConflictPolicy, ResolutionPolicies


def edges(model: ir.ArchitectureModel, use_case: str) -> list[tuple[str, str]]:
    return [(e.source, e.target) for e in model.flows_for(use_case)]


class TestShopFixture:
    def test_entities(self, shop_model: ir.ArchitectureModel):
        assert shop_model.name == "shop"
        assert [a.name for a in shop_model.actors] == [
            "Customer",
            "PaymentProvider",
            "Scheduler",
            "Support",
        ]
        assert shop_model.actors[3].kind == ir.ActorKind.USER
        assert [d.name for d in shop_model.domains] == ["Order", "Payment", "Inventory"]
        assert shop_model.get_domain("Payment").sub_domains == ["Billing", "Refunds"]

    def test_services_merged(self, shop_model: ir.ArchitectureModel):
        assert [s.name for s in shop_model.services] == ["Order Service", "payment-svc"]
        order = shop_model.get_service("Order Service")
        assert order.domains == ["Order", "Inventory"]
        assert order.data_stores == ["orders_db", "events"]
        assert order.language == "go"
        assert order.deployment.kind == "canary"
        assert len(order.deployment.rules) == 2

    def test_exposure_and_architecture(self, shop_model: ir.ArchitectureModel):
        assert shop_model.exposures[0].of == ["Order Service", "payment-svc"]
        assert shop_model.architectures[0].name == "Web"

    def test_listen_resolves_across_files(self, shop_model: ir.ArchitectureModel):
        restock = shop_model.flows_for("Restock")
        assert restock[0].kind == ir.EdgeKind.EVENT_LISTEN
        assert (restock[0].source, restock[0].target) == ("order_queue", "Inventory")
        assert restock[0].source_service == "Order Service"
        assert [e.step for e in restock] == [1, 2]
        assert (restock[1].source, restock[1].target) == ("Inventory", "inventory_queue")

    def test_place_order_flow(self, shop_model: ir.ArchitectureModel):
        assert edges(shop_model, "Place Order") == [
            ("Customer", "Order"),
            ("Order", "Payment"),
            ("Payment", "Order"),
            ("Order", "order_queue"),
            ("Inventory", "External"),
        ]

    def test_event_publishers(self, shop_model: ir.ArchitectureModel):
        assert shop_model.event_publishers == {
            "Stock Reserved": "Inventory",
            "Order Placed": "Order",
        }

    def test_metadata(self, shop_model: ir.ArchitectureModel):
        assert shop_model.metadata["modules"] == ["shop", "flows"]
        assert shop_model.metadata["scenarios"] == 3

    def test_scenario_domains(self, shop_model: ir.ArchitectureModel):
        assert list(shop_model.scenario_domains.values()) == [
            ["Inventory"],
            ["Order", "Payment"],
            ["Inventory"],
        ]

    def test_service_for_domain(self, shop_model: ir.ArchitectureModel):
        assert shop_model.service_for_domain("Inventory").name == "Order Service"
        assert shop_model.service_for_domain("Payment").name == "payment-svc"
        assert shop_model.service_for_domain("Shipping") is None


class TestProperties:
    def test_call_stack_resolution(self, build):
        model = build(
            """
use_case Flow {
    when User triggers
        A asks B to X
        B returns result
}
"""
        )
        assert edges(model, "Flow") == [("User", "A"), ("A", "B"), ("B", "A")]

    def test_explicit_return(self, build):
        model = build(
            """
use_case Flow {
    when User triggers
        A asks B to X
        B returns to C result
}
"""
        )
        assert edges(model, "Flow")[-1] == ("B", "C")

    def test_empty_stack_return(self, build):
        model = build('use_case Flow {\n    when "Tick"\n        B returns result\n}')
        assert edges(model, "Flow") == [("B", "External")]

    def test_correlation_listener_first(self, build):
        model = build(
            """
use_case Two {
    when B listens "Evt"
        B handles it
}
use_case One {
    when User acts
        A notifies "Evt"
}
"""
        )
        listen = model.flows_for("Two")[0]
        assert (listen.source, listen.target) == ("a_queue", "B")

    def test_last_publisher_wins(self, build):
        text = """
use_case L {
    when C listens "Evt"
        C handles it
}
use_case P1 {
    when "Tick"
        A notifies "Evt"
}
use_case P2 {
    when "Tock"
        B notifies "Evt"
}
"""
        assert build(text).flows_for("L")[0].source == "b_queue"

        first_wins = ResolutionPolicies(event_publishers=ConflictPolicy.FIRST_WINS)
        assert build(text, policies=first_wins).flows_for("L")[0].source == "a_queue"

    def test_domain_unique_after_merge(self, build):
        model = build(
            "\n".join(f"domain Payment {{ Sub{i} }}" for i in range(5))
            + "\ndomains { Payment { Sub0 } }"
        )
        assert [d.name for d in model.domains] == ["Payment"]
        assert model.domains[0].sub_domains == [f"Sub{i}" for i in range(5)]

    def test_canary_rule_dedup(self, build):
        model = build(
            "service A { deployment: canary(10% -> staging) }\n"
            "service A { deployment: canary(10% -> staging, 90% -> production) }"
        )
        assert len(model.services[0].deployment.rules) == 2

    def test_unmatched_listener_is_silent(self, build):
        model = build('use_case L {\n    when C listens "Nobody"\n        C waits\n}')
        assert model.flows == []
        assert model.metadata["unmatched_listeners"] == ["scenario_1"]

    def test_internal_only_scenario_records_visited_domains(self, build):
        model = build(
            """
use_case Chores {
    when "Tick"
        A cleans up
        B counts stock
        A rests
}
"""
        )
        assert model.flows == []
        assert model.scenario_domains == {"scenario_1": ["A", "B"]}

    def test_first_owning_service_wins(self, build):
        model = build("service A { domains: X }\nservice B { domains: Y, X }")
        assert model.service_for_domain("X").name == "A"
        assert model.service_for_domain("Y").name == "B"


def test_build_from_declarations():
    model = build_model_from_declarations(
        [
            ir.ActorDecl(kind="system", name="Billing"),
            ir.DomainDecl(name="Payment", sub_domains=["A"]),
            ir.DomainDecl(name="Payment", sub_domains=["B"]),
        ]
    )
    assert model.actors == [ir.ActorSpec(name="Billing", kind=ir.ActorKind.SYSTEM)]
    assert model.domains == [ir.DomainSpec(name="Payment", sub_domains=["A", "B"])]
