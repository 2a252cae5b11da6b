"""
Declaration normalization.

Turns the parser's raw declaration records into canonical IR entities.
Single and block forms are equivalent: ``actor user X`` and
``actors { user X }`` yield the same ActorSpec.
"""

import itertools
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from . import ir
from .merger import union_ordered, union_rules

logger = logging.getLogger(__name__)


@dataclass
class NormalizedDeclarations:
    """
    Canonical entities in declaration order, before merging.

    Domains and services may still contain several records with the same
    name; the merger collapses them.
    """

    actors: list[ir.ActorSpec] = field(default_factory=list)
    domains: list[ir.DomainSpec] = field(default_factory=list)
    services: list[ir.ServiceSpec] = field(default_factory=list)
    exposures: list[ir.ExposureSpec] = field(default_factory=list)
    architectures: list[ir.ArchitectureSpec] = field(default_factory=list)
    use_cases: list[ir.UseCaseSpec] = field(default_factory=list)


def normalize_actor_kind(token: str) -> ir.ActorKind:
    """Map an actor kind token to ActorKind; unknown tokens mean ``user``."""
    try:
        return ir.ActorKind(token)
    except ValueError:
        logger.debug("Unknown actor kind %r, defaulting to user", token)
        return ir.ActorKind.USER


def normalize_actor(decl: ir.ActorDecl) -> ir.ActorSpec:
    return ir.ActorSpec(name=decl.name, kind=normalize_actor_kind(decl.kind))


def normalize_domain(decl: ir.DomainDecl) -> ir.DomainSpec:
    return ir.DomainSpec(name=decl.name, sub_domains=union_ordered([], decl.sub_domains))


def normalize_service(decl: ir.ServiceDecl) -> ir.ServiceSpec:
    return ir.ServiceSpec(
        name=decl.name,
        domains=union_ordered([], decl.domains),
        data_stores=union_ordered([], decl.data_stores),
        language=decl.language,
        deployment=ir.DeploymentStrategy(
            kind=decl.deployment_kind,
            rules=union_rules([], decl.deployment_rules),
        ),
    )


def normalize_exposure(decl: ir.ExposureDecl) -> ir.ExposureSpec:
    return ir.ExposureSpec(name=decl.name, to=decl.to, of=decl.of, through=decl.through)


def normalize_architecture(decl: ir.ArchitectureDecl) -> ir.ArchitectureSpec:
    return ir.ArchitectureSpec(
        name=decl.name, presentation=decl.presentation, gateway=decl.gateway
    )


def normalize_use_case(decl: ir.UseCaseDecl, ids: Iterator[int]) -> ir.UseCaseSpec:
    """
    Convert a use case, numbering scenarios and actions.

    `ids` is shared across the whole program, so ``scenario_N`` and
    ``action_N`` never repeat.
    """
    scenarios = []
    for scenario in decl.scenarios:
        scenario_id = f"scenario_{next(ids)}"
        trigger = ir.TriggerSpec(**scenario.trigger.model_dump())
        actions = [
            ir.ActionSpec(id=f"action_{next(ids)}", **action.model_dump())
            for action in scenario.actions
        ]
        scenarios.append(ir.ScenarioSpec(id=scenario_id, trigger=trigger, actions=actions))
    return ir.UseCaseSpec(name=decl.name, scenarios=scenarios, source=decl.source)


def normalize_declarations(declarations: Iterable[ir.Declaration]) -> NormalizedDeclarations:
    """
    Normalize a declaration stream in a single pass.

    Args:
        declarations: Raw declarations in source order

    Returns:
        NormalizedDeclarations with every entity in source order
    """
    result = NormalizedDeclarations()
    ids = itertools.count(1)

    for decl in declarations:
        if isinstance(decl, ir.ActorDecl):
            result.actors.append(normalize_actor(decl))
        elif isinstance(decl, ir.ActorsBlock):
            result.actors.extend(normalize_actor(actor) for actor in decl.actors)
        elif isinstance(decl, ir.DomainDecl):
            result.domains.append(normalize_domain(decl))
        elif isinstance(decl, ir.DomainsBlock):
            result.domains.extend(normalize_domain(domain) for domain in decl.domains)
        elif isinstance(decl, ir.ServiceDecl):
            result.services.append(normalize_service(decl))
        elif isinstance(decl, ir.ServicesBlock):
            result.services.extend(normalize_service(service) for service in decl.services)
        elif isinstance(decl, ir.ExposureDecl):
            result.exposures.append(normalize_exposure(decl))
        elif isinstance(decl, ir.ArchitectureDecl):
            result.architectures.append(normalize_architecture(decl))
        elif isinstance(decl, ir.UseCaseDecl):
            result.use_cases.append(normalize_use_case(decl, ids))
        else:
            raise TypeError(f"Unsupported declaration: {type(decl).__name__}")

    return result
