"""
Domain extraction.

Summarises which domains each use case touches, for editor tooling and
the ``craft domains`` command. Summaries keep the source range of their
``use_case`` block and are grouped by file.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from . import ir
from .merger import union_ordered

_ACTION_PREFIX = {
    ir.ActionKind.SYNC: "Sync",
    ir.ActionKind.ASYNC: "Async",
    ir.ActionKind.INTERNAL: "Internal",
    ir.ActionKind.RETURN: "Return",
}


class UseCaseDomains(BaseModel):
    """
    Domains touched by one use case.

    Attributes:
        name: Use case name
        entry_point: First domain encountered, or None for a use case
            with no domain at all
        domains: Every domain referenced, in first-seen order
        actions: One ``"<Kind>: <description>"`` line per action
        source: Location of the ``use_case`` block, if known
    """

    name: str
    entry_point: str | None = None
    domains: list[str] = Field(default_factory=list)
    actions: list[str] = Field(default_factory=list)
    source: ir.SourceRange | None = None

    model_config = ConfigDict(frozen=True)


class DomainExtraction(BaseModel):
    """
    Domain summary of a whole model.

    Attributes:
        domains: Sorted unique domain names used by any use case
        use_cases: Per use case summaries, in declaration order
        domain_use_cases: Domain to the use cases that touch it
        files: Source file to the summaries declared in it, in
            declaration order; use cases without a source are left out
    """

    domains: list[str] = Field(default_factory=list)
    use_cases: list[UseCaseDomains] = Field(default_factory=list)
    domain_use_cases: dict[str, list[str]] = Field(default_factory=dict)
    files: dict[str, list[UseCaseDomains]] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


def _scenario_domains(scenario: ir.ScenarioSpec) -> list[str]:
    domains: list[str] = []
    if scenario.trigger.kind == ir.TriggerKind.DOMAIN_LISTEN:
        domains.append(scenario.trigger.domain)
    for action in scenario.actions:
        domains.append(action.domain)
        if action.target_domain:
            domains.append(action.target_domain)
    return domains


def extract_use_case(use_case: ir.UseCaseSpec) -> UseCaseDomains:
    domains: list[str] = []
    actions: list[str] = []
    for scenario in use_case.scenarios:
        domains = union_ordered(domains, _scenario_domains(scenario))
        actions.extend(
            f"{_ACTION_PREFIX[action.kind]}: {action.description}" for action in scenario.actions
        )
    return UseCaseDomains(
        name=use_case.name,
        entry_point=domains[0] if domains else None,
        domains=domains,
        actions=actions,
        source=use_case.source,
    )


def extract_domains(model: ir.ArchitectureModel) -> DomainExtraction:
    """Build the domain summary of `model`."""
    use_cases = [extract_use_case(use_case) for use_case in model.use_cases]

    domain_use_cases: dict[str, list[str]] = {}
    files: dict[str, list[UseCaseDomains]] = {}
    for summary in use_cases:
        for domain in summary.domains:
            names = domain_use_cases.setdefault(domain, [])
            if summary.name not in names:
                names.append(summary.name)
        if summary.source is not None:
            files.setdefault(summary.source.file, []).append(summary)

    return DomainExtraction(
        domains=sorted(domain_use_cases),
        use_cases=use_cases,
        domain_use_cases=domain_use_cases,
        files=files,
    )
