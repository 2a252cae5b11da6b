"""
Entity merging.

Domains and services may be declared in several blocks. Merging folds the
declaration sequence into one value per name:

- first-seen value seeds the merged record
- list fields are unioned, keeping first-seen order
- scalar and deployment disagreements are settled by a ConflictPolicy

The fold is an explicit ``functools.reduce`` with a call-local accumulator,
so merging depends on nothing but the input order and the policies.
"""

import logging
from collections.abc import Iterable
from functools import partial, reduce
from typing import Callable, TypeVar

from . import ir
from .policies import DEFAULT_POLICIES, ConflictPolicy, ResolutionPolicies

logger = logging.getLogger(__name__)

T = TypeVar("T")
Named = TypeVar("Named", ir.DomainSpec, ir.ServiceSpec)


def union_ordered(existing: Iterable[T], incoming: Iterable[T]) -> list[T]:
    """Set union preserving first-seen order."""
    return list(dict.fromkeys((*existing, *incoming)))


def union_rules(
    existing: Iterable[ir.DeploymentRule], incoming: Iterable[ir.DeploymentRule]
) -> list[ir.DeploymentRule]:
    """Union deployment rules keyed by (percentage, target)."""
    merged: dict[str, ir.DeploymentRule] = {}
    for rule in (*existing, *incoming):
        merged.setdefault(rule.key, rule)
    return list(merged.values())


def merge_deployment(
    existing: ir.DeploymentStrategy,
    incoming: ir.DeploymentStrategy,
    policy: ConflictPolicy = ConflictPolicy.FIRST_WINS,
) -> ir.DeploymentStrategy:
    """
    Merge two deployment strategies.

    - no existing kind: adopt the incoming strategy
    - no incoming kind: keep the existing strategy
    - same kind: union the rules
    - different kinds: the policy picks one strategy whole; rules of the
      losing strategy are dropped, never merged
    """
    if not existing.is_set:
        return ir.DeploymentStrategy(kind=incoming.kind, rules=union_rules([], incoming.rules))
    if not incoming.is_set:
        return existing
    if existing.kind == incoming.kind:
        return ir.DeploymentStrategy(
            kind=existing.kind, rules=union_rules(existing.rules, incoming.rules)
        )
    if policy == ConflictPolicy.LAST_WINS:
        return incoming
    return existing


def merge_service(
    existing: ir.ServiceSpec,
    incoming: ir.ServiceSpec,
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> ir.ServiceSpec:
    """Merge `incoming` into `existing`; both carry the same name."""
    return ir.ServiceSpec(
        name=existing.name,
        domains=union_ordered(existing.domains, incoming.domains),
        data_stores=union_ordered(existing.data_stores, incoming.data_stores),
        language=policies.scalar_conflicts.pick(existing.language, incoming.language),
        deployment=merge_deployment(
            existing.deployment, incoming.deployment, policies.deployment_conflicts
        ),
    )


def merge_domain(
    existing: ir.DomainSpec,
    incoming: ir.DomainSpec,
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> ir.DomainSpec:
    """Merge `incoming` into `existing`; both carry the same name."""
    return ir.DomainSpec(
        name=existing.name,
        sub_domains=union_ordered(existing.sub_domains, incoming.sub_domains),
    )


def _fold_by_name(
    merge: Callable[[Named, Named], Named],
    acc: dict[str, Named],
    value: Named,
) -> dict[str, Named]:
    """Reducer step: seed a new name, or merge into the existing record."""
    current = acc.get(value.name)
    # dicts keep insertion order, so names stay in first-seen order
    acc[value.name] = value if current is None else merge(current, value)
    return acc


def merge_by_name(
    values: Iterable[Named],
    merge: Callable[[Named, Named], Named],
) -> list[Named]:
    """Fold `values` into one record per name, in first-seen order."""
    # the accumulator is created per call and never escapes
    folded = reduce(partial(_fold_by_name, merge), values, {})
    return list(folded.values())


def merge_services(
    services: Iterable[ir.ServiceSpec],
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> list[ir.ServiceSpec]:
    """
    Merge services sharing a name.

    Args:
        services: Service declarations in source order
        policies: Conflict policies for language and deployment

    Returns:
        One ServiceSpec per unique name, in first-seen order
    """
    services = list(services)
    merged = merge_by_name(services, partial(merge_service, policies=policies))
    if len(merged) != len(services):
        logger.debug("Merged %d service declarations into %d", len(services), len(merged))
    return merged


def merge_domains(
    domains: Iterable[ir.DomainSpec],
    policies: ResolutionPolicies = DEFAULT_POLICIES,
) -> list[ir.DomainSpec]:
    """
    Merge domains sharing a name.

    Args:
        domains: Domain declarations in source order
        policies: Conflict policies (domains have no scalar conflicts today)

    Returns:
        One DomainSpec per unique name, in first-seen order
    """
    domains = list(domains)
    merged = merge_by_name(domains, partial(merge_domain, policies=policies))
    if len(merged) != len(domains):
        logger.debug("Merged %d domain declarations into %d", len(domains), len(merged))
    return merged
