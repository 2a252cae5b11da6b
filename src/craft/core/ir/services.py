"""
Service types for craft IR.

This module contains deployable service specifications and their
deployment strategies.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DeploymentRule(BaseModel):
    """
    One traffic split of a deployment strategy, e.g. ``20% -> staging``.

    Attributes:
        percentage: Percentage as written (never type-checked)
        target: Target environment
    """

    percentage: str
    target: str

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        """Identity used when de-duplicating rules."""
        return f"{self.percentage}:{self.target}"


class DeploymentStrategy(BaseModel):
    """
    How a service is rolled out.

    Attributes:
        kind: Strategy name (canary, blue_green, rolling, ...); empty when unset
        rules: Traffic splits, unique by (percentage, target)
    """

    kind: str = ""
    rules: list[DeploymentRule] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_set(self) -> bool:
        return bool(self.kind)


class ServiceSpec(BaseModel):
    """
    A deployable unit owning domains and data stores.

    Attributes:
        name: Service name (the merge key)
        domains: Owned domain names, unique and in first-seen order
        data_stores: Data store names, unique and in first-seen order
        language: Implementation language; empty when unset
        deployment: Deployment strategy
    """

    name: str
    domains: list[str] = Field(default_factory=list)
    data_stores: list[str] = Field(default_factory=list)
    language: str = ""
    deployment: DeploymentStrategy = Field(default_factory=DeploymentStrategy)

    model_config = ConfigDict(frozen=True)

    def owns(self, domain: str) -> bool:
        return domain in self.domains
