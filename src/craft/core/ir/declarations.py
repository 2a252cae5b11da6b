"""
Raw declaration records produced by the parser.

These mirror the source text closely: single and block forms are kept
apart, actor kinds are raw tokens, and scenarios carry no ids yet. The
normalizer turns them into the canonical entity types.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from .architectures import ComponentSpec
from .services import DeploymentRule
from .usecases import ActionKind, SourceRange, TriggerKind


class ActorDecl(BaseModel):
    """``actor user Customer``; ``kind`` is the raw kind token."""

    kind: str
    name: str

    model_config = ConfigDict(frozen=True)


class ActorsBlock(BaseModel):
    """``actors { user Admin  system Billing }``"""

    actors: list[ActorDecl] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class DomainDecl(BaseModel):
    """``domain Payment { Billing Refunds }``"""

    name: str
    sub_domains: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class DomainsBlock(BaseModel):
    """``domains { Order { Cart } Payment { Billing } }``"""

    domains: list[DomainDecl] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ServiceDecl(BaseModel):
    """
    One service body as written.

    Attributes:
        name: Service name
        domains: ``domains:`` list
        data_stores: ``data-stores:`` list
        language: ``language:`` value
        deployment_kind: Strategy name from ``deployment: kind(...)``
        deployment_rules: Rules inside the parentheses
    """

    name: str
    domains: list[str] = Field(default_factory=list)
    data_stores: list[str] = Field(default_factory=list)
    language: str = ""
    deployment_kind: str = ""
    deployment_rules: list[DeploymentRule] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ServicesBlock(BaseModel):
    """``services { A { ... } "B C" { ... } }``"""

    services: list[ServiceDecl] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ExposureDecl(BaseModel):
    """``exposure PublicAPI { to: ...  of: ...  through: ... }``"""

    name: str
    to: list[str] = Field(default_factory=list)
    of: list[str] = Field(default_factory=list)
    through: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ArchitectureDecl(BaseModel):
    """``arch [Name] { presentation: ...  gateway: ... }``"""

    name: str = ""
    presentation: list[ComponentSpec] = Field(default_factory=list)
    gateway: list[ComponentSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class TriggerDecl(BaseModel):
    """A ``when ...`` line."""

    kind: TriggerKind
    actor: str = ""
    verb: str = ""
    phrase: str = ""
    domain: str = ""
    event: str = ""

    model_config = ConfigDict(frozen=True)


class ActionDecl(BaseModel):
    """An action line under a ``when``."""

    kind: ActionKind
    domain: str
    verb: str = ""
    target_domain: str | None = None
    event: str = ""
    connector: str = ""
    phrase: str = ""

    model_config = ConfigDict(frozen=True)


class ScenarioDecl(BaseModel):
    trigger: TriggerDecl
    actions: list[ActionDecl] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class UseCaseDecl(BaseModel):
    """``use_case "Name" { when ... }``"""

    name: str
    scenarios: list[ScenarioDecl] = Field(default_factory=list)
    source: SourceRange | None = None

    model_config = ConfigDict(frozen=True)


Declaration = Union[
    ActorDecl,
    ActorsBlock,
    DomainDecl,
    DomainsBlock,
    ServiceDecl,
    ServicesBlock,
    ExposureDecl,
    ArchitectureDecl,
    UseCaseDecl,
]
