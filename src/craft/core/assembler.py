import logging
from collections.abc import Iterable

from . import ir
from .correlator import correlate_events
from .merger import merge_domains, merge_services
from .normalizer import normalize_declarations
from .policies import DEFAULT_POLICIES, ResolutionPolicies
from .resolver import ScenarioFlow, resolve_use_cases

logger = logging.getLogger(__name__)


def build_model(
    modules: list[ir.ModuleIR],
    name: str = "",
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> ir.ArchitectureModel:
    """
    Build a complete ArchitectureModel from parsed modules.

    Performs:
    1. Declaration normalization (modules in the order given)
    2. Domain and service merging
    3. Scenario resolution with per-scenario call stacks
    4. Whole-program event correlation
    5. Flow sequencing

    No semantic errors are raised: every ambiguity is settled by `policies`.

    Args:
        modules: Parsed modules, in declaration order
        name: Project name recorded on the model
        policies: Conflict resolution policies

    Returns:
        Complete, resolved ArchitectureModel
    """
    declarations = [decl for module in modules for decl in module.declarations]
    model = build_model_from_declarations(declarations, name=name, policies=policies)
    return model.model_copy(
        update={"metadata": {**model.metadata, "modules": [m.name for m in modules]}}
    )


def build_model_from_declarations(
    declarations: Iterable[ir.Declaration],
    name: str = "",
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> ir.ArchitectureModel:
    """Build an ArchitectureModel from a flat declaration stream."""
    # 1. Normalize single and block forms into canonical entities
    normalized = normalize_declarations(declarations)
    logger.debug(
        "Normalized %d actors, %d domains, %d services, %d use cases",
        len(normalized.actors),
        len(normalized.domains),
        len(normalized.services),
        len(normalized.use_cases),
    )

    # 2. Merge same-named domains and services
    domains = merge_domains(normalized.domains, policies)
    services = merge_services(normalized.services, policies)

    # 3. Resolve each scenario against the merged services
    scenario_flows = resolve_use_cases(normalized.use_cases, services, policies)

    # 4. Correlate publishers and listeners across the whole program
    correlation = correlate_events(normalized.use_cases, services, policies)

    # 5. Put each scenario's inbound listen edge ahead of its own edges
    flows = _sequence_flows(scenario_flows, correlation.edges)

    return ir.ArchitectureModel(
        name=name,
        actors=normalized.actors,
        domains=domains,
        services=services,
        exposures=normalized.exposures,
        architectures=normalized.architectures,
        use_cases=normalized.use_cases,
        flows=flows,
        event_publishers=correlation.publishers,
        scenario_domains={flow.scenario_id: flow.visited for flow in scenario_flows},
        metadata={
            "scenarios": len(scenario_flows),
            "unmatched_listeners": correlation.unmatched,
        },
    )


def _sequence_flows(
    scenario_flows: list[ScenarioFlow], listen_edges: dict[str, ir.FlowEdge]
) -> list[ir.FlowEdge]:
    flows: list[ir.FlowEdge] = []
    for scenario_flow in scenario_flows:
        edges = list(scenario_flow.edges)
        inbound = listen_edges.get(scenario_flow.scenario_id)
        if inbound is not None:
            edges.insert(0, inbound)
        flows.extend(
            edge.model_copy(update={"step": step}) for step, edge in enumerate(edges, start=1)
        )
    return flows
