"""
The resolved architecture model.

ArchitectureModel is the output of the assembler and the input to
diagram renderers.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .actors import ActorSpec
from .architectures import ArchitectureSpec
from .domains import DomainSpec
from .exposures import ExposureSpec
from .flows import FlowEdge
from .services import ServiceSpec
from .usecases import UseCaseSpec


class ArchitectureModel(BaseModel):
    """
    Complete, cross-referenced architecture.

    Attributes:
        name: Project name
        actors: Actors in declaration order (not merged)
        domains: Merged domains, one per name
        services: Merged services, one per name
        exposures: Exposures in declaration order
        architectures: Architecture blocks in declaration order
        use_cases: Use cases with numbered scenarios and actions
        flows: Resolved edges of every scenario, including event listens
        event_publishers: Event name to publishing domain
        scenario_domains: Scenario id to every acting domain, in first-seen
            order; internal actions show up only here
        metadata: Free-form build information
    """

    name: str = ""
    actors: list[ActorSpec] = Field(default_factory=list)
    domains: list[DomainSpec] = Field(default_factory=list)
    services: list[ServiceSpec] = Field(default_factory=list)
    exposures: list[ExposureSpec] = Field(default_factory=list)
    architectures: list[ArchitectureSpec] = Field(default_factory=list)
    use_cases: list[UseCaseSpec] = Field(default_factory=list)
    flows: list[FlowEdge] = Field(default_factory=list)
    event_publishers: dict[str, str] = Field(default_factory=dict)
    scenario_domains: dict[str, list[str]] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def get_domain(self, name: str) -> DomainSpec | None:
        """Get domain by name."""
        for domain in self.domains:
            if domain.name == name:
                return domain
        return None

    def get_service(self, name: str) -> ServiceSpec | None:
        """Get service by name."""
        for service in self.services:
            if service.name == name:
                return service
        return None

    def get_use_case(self, name: str) -> UseCaseSpec | None:
        """Get use case by name."""
        for use_case in self.use_cases:
            if use_case.name == name:
                return use_case
        return None

    def service_for_domain(self, domain: str) -> ServiceSpec | None:
        """First service that owns the given domain."""
        for service in self.services:
            if service.owns(domain):
                return service
        return None

    def flows_for(self, use_case: str) -> list[FlowEdge]:
        """Resolved edges belonging to one use case."""
        return [edge for edge in self.flows if edge.use_case == use_case]
