"""
craft Intermediate Representation (IR) types.

Types are organized into submodules; all of them are re-exported here.
"""

from .actors import ActorKind, ActorSpec
from .architectures import (
    ArchitectureSpec,
    ComponentKind,
    ComponentModifier,
    ComponentSpec,
)
from .declarations import (
    ActionDecl,
    ActorDecl,
    ActorsBlock,
    ArchitectureDecl,
    Declaration,
    DomainDecl,
    DomainsBlock,
    ExposureDecl,
    ScenarioDecl,
    ServiceDecl,
    ServicesBlock,
    TriggerDecl,
    UseCaseDecl,
)
from .domains import DomainSpec
from .exposures import ExposureSpec
from .flows import EdgeKind, FlowEdge
from .model import ArchitectureModel
from .module import ModuleIR
from .services import DeploymentRule, DeploymentStrategy, ServiceSpec
from .usecases import (
    ActionKind,
    ActionSpec,
    ScenarioSpec,
    SourceRange,
    TriggerKind,
    TriggerSpec,
    UseCaseSpec,
)

__all__ = [
    # Actors
    "ActorKind",
    "ActorSpec",
    # Domains
    "DomainSpec",
    # Services
    "DeploymentRule",
    "DeploymentStrategy",
    "ServiceSpec",
    # Exposures
    "ExposureSpec",
    # Architectures
    "ArchitectureSpec",
    "ComponentKind",
    "ComponentModifier",
    "ComponentSpec",
    # Use cases
    "ActionKind",
    "ActionSpec",
    "ScenarioSpec",
    "SourceRange",
    "TriggerKind",
    "TriggerSpec",
    "UseCaseSpec",
    # Flows
    "EdgeKind",
    "FlowEdge",
    # Declarations
    "ActionDecl",
    "ActorDecl",
    "ActorsBlock",
    "ArchitectureDecl",
    "Declaration",
    "DomainDecl",
    "DomainsBlock",
    "ExposureDecl",
    "ScenarioDecl",
    "ServiceDecl",
    "ServicesBlock",
    "TriggerDecl",
    "UseCaseDecl",
    # Module / model
    "ModuleIR",
    "ArchitectureModel",
]
