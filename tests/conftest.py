"""Shared pytest fixtures for craft tests."""

from pathlib import Path

import pytest

from craft.core import ir
from craft.core.assembler import build_model
from craft.core.parser import parse_modules, parse_text


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def dsl_fixtures_dir(fixtures_dir: Path) -> Path:
    """Return path to DSL fixtures directory."""
    return fixtures_dir / "dsl"


@pytest.fixture
def shop_model(dsl_fixtures_dir: Path) -> ir.ArchitectureModel:
    """Model built from the shop and flows fixtures, in that order."""
    modules = parse_modules([dsl_fixtures_dir / "shop.craft", dsl_fixtures_dir / "flows.craft"])
    return build_model(modules, name="shop")


@pytest.fixture
def build():
    """Return a helper that builds a model straight from DSL text."""

    def _build(text: str, **kwargs) -> ir.ArchitectureModel:
        return build_model([parse_text(text)], **kwargs)

    return _build

