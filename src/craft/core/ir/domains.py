"""
Domain types for craft IR.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DomainSpec(BaseModel):
    """
    A business capability grouping.

    Attributes:
        name: Domain name (the merge key)
        sub_domains: Sub-domain names, unique and in first-seen order
    """

    name: str
    sub_domains: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
