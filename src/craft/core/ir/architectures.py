"""
Architecture layer types for craft IR.

An architecture block describes the presentation and gateway layers in
front of the services. Each layer is a list of components; a component
is either a single node or a chain of nodes joined by ``>``::

    arch Web {
        presentation: WebApp[spa] > CDN[cache:aggressive]
        gateway: APIGateway[auth:jwt] > LoadBalancer  Edge[ssl]
    }
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ComponentKind(str, Enum):
    """Shape of an architecture component."""

    SIMPLE = "simple"
    FLOW = "flow"


class ComponentModifier(BaseModel):
    """
    A ``key`` or ``key:value`` modifier attached to a component.

    Attributes:
        key: Modifier name
        value: Optional value; empty when the modifier is a bare flag
    """

    key: str
    value: str = ""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.key}:{self.value}" if self.value else self.key


class ComponentSpec(BaseModel):
    """
    An architecture component.

    Attributes:
        kind: SIMPLE for a single node, FLOW for a chain
        name: Node name (empty for flows)
        modifiers: Node modifiers (empty for flows)
        chain: Ordered nodes of a flow
    """

    kind: ComponentKind = ComponentKind.SIMPLE
    name: str = ""
    modifiers: list[ComponentModifier] = Field(default_factory=list)
    chain: list[ComponentSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.kind == ComponentKind.FLOW:
            return " > ".join(str(node) for node in self.chain)
        if self.modifiers:
            return f"{self.name}[{', '.join(str(m) for m in self.modifiers)}]"
        return self.name


class ArchitectureSpec(BaseModel):
    """
    Presentation and gateway layering.

    Attributes:
        name: Optional architecture name
        presentation: Presentation layer components
        gateway: Gateway layer components
    """

    name: str = ""
    presentation: list[ComponentSpec] = Field(default_factory=list)
    gateway: list[ComponentSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
