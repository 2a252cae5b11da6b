"""
craft - architecture-as-code compiler.

Compiles .craft architecture descriptions (actors, domains, services,
exposures, architecture layers and use case scenarios) into a resolved
ArchitectureModel.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import CraftError, ManifestError, ParseError


def _get_version() -> str:
    try:
        return _metadata_version("craft-arch")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "CraftError",
    "ManifestError",
    "ParseError",
]
