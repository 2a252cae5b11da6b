"""
Property-based tests for merging and scenario resolution.

Uses Hypothesis to generate declaration sequences and action lists.
"""

from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from craft.core import ir
from craft.core.merger import merge_domains, merge_services
from craft.core.resolver import resolve_scenario

# =============================================================================
# Strategy Definitions
# =============================================================================

names = st.sampled_from(["A", "B", "C", "D"])
words = st.lists(st.sampled_from(["x", "y", "z", "w"]), max_size=4, unique=True)

rules = st.lists(
    st.builds(
        ir.DeploymentRule,
        percentage=st.sampled_from(["10%", "50%", "90%"]),
        target=st.sampled_from(["staging", "production"]),
    ),
    max_size=3,
    unique_by=lambda rule: rule.key,
)

deployments = st.builds(
    ir.DeploymentStrategy, kind=st.sampled_from(["", "canary", "rolling"]), rules=rules
).map(lambda d: d if d.kind else ir.DeploymentStrategy())

services = st.builds(
    ir.ServiceSpec,
    name=names,
    domains=words,
    data_stores=words,
    language=st.sampled_from(["", "go", "python"]),
    deployment=deployments,
)

domains = st.builds(ir.DomainSpec, name=names, sub_domains=words)

actions = st.one_of(
    st.builds(
        ir.ActionSpec,
        kind=st.just(ir.ActionKind.SYNC),
        domain=names,
        target_domain=names,
    ),
    st.builds(
        ir.ActionSpec,
        kind=st.just(ir.ActionKind.RETURN),
        domain=names,
        target_domain=st.one_of(st.none(), names),
    ),
    st.builds(ir.ActionSpec, kind=st.just(ir.ActionKind.ASYNC), domain=names, event=names),
    st.builds(ir.ActionSpec, kind=st.just(ir.ActionKind.INTERNAL), domain=names, verb=names),
)


# =============================================================================
# Merging
# =============================================================================


@given(st.lists(services, max_size=8))
@settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
def test_service_merge_is_idempotent(values: list[ir.ServiceSpec]):
    merged = merge_services(values)
    assert merge_services(merged) == merged
    assert merge_services(merged + merged) == merged
    assert merge_services(values + values) == merged


@given(st.lists(services, max_size=8))
@settings(max_examples=100)
def test_merged_names_are_unique_and_lists_never_shrink(values: list[ir.ServiceSpec]):
    merged = merge_services(values)
    assert len({s.name for s in merged}) == len(merged)

    by_name = {s.name: s for s in merged}
    for value in values:
        result = by_name[value.name]
        assert set(value.domains) <= set(result.domains)
        assert set(value.data_stores) <= set(result.data_stores)
        assert len(set(result.domains)) == len(result.domains)


@given(st.lists(services, max_size=8))
@settings(max_examples=100)
def test_deployment_rules_never_repeat(values: list[ir.ServiceSpec]):
    for service in merge_services(values):
        keys = [rule.key for rule in service.deployment.rules]
        assert len(keys) == len(set(keys))


@given(st.lists(domains, min_size=1, max_size=8))
@settings(max_examples=100)
def test_domain_merge_keeps_first_seen_order(values: list[ir.DomainSpec]):
    merged = merge_domains(values)
    expected = list(dict.fromkeys(d.name for d in values))
    assert [d.name for d in merged] == expected


# =============================================================================
# Scenario resolution
# =============================================================================


@given(st.lists(actions, max_size=12), st.booleans())
@settings(max_examples=200)
def test_resolver_never_raises(action_list: list[ir.ActionSpec], external: bool):
    if external:
        trigger = ir.TriggerSpec(kind=ir.TriggerKind.EXTERNAL, actor="User", verb="starts")
    else:
        trigger = ir.TriggerSpec(kind=ir.TriggerKind.EVENT, event="Tick")
    scenario = ir.ScenarioSpec(id="scenario_1", trigger=trigger, actions=action_list)

    flow = resolve_scenario(scenario)

    emitting = [a for a in action_list if a.kind != ir.ActionKind.INTERNAL]
    expected = len(emitting) + (1 if external and action_list else 0)
    assert len(flow.edges) == expected
    assert [e.step for e in flow.edges] == list(range(1, expected + 1))
