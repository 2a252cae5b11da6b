"""
Module-level IR types for craft.

A module is the parser output for a single ``.craft`` file.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .declarations import Declaration


class ModuleIR(BaseModel):
    """
    Parsed declarations of one source file, in source order.

    Attributes:
        name: Module name (file stem)
        file: Source file path
        declarations: Raw declarations in the order they appear
    """

    name: str
    file: Path
    declarations: list[Declaration] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
