"""
Exposure types for craft IR.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ExposureSpec(BaseModel):
    """
    Describes who reaches which services through which gateways.

    Exposures are never merged; each declaration stands alone.

    Attributes:
        name: Exposure name
        to: Audiences (actors) the services are exposed to
        of: Exposed services
        through: Gateways the traffic passes through
    """

    name: str
    to: list[str] = Field(default_factory=list)
    of: list[str] = Field(default_factory=list)
    through: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
