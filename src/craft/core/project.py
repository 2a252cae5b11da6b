"""
Project loading utilities.

Provides convenient functions for the common load → parse → build pipeline.
"""

from pathlib import Path

from . import ir
from .assembler import build_model
from .fileset import discover_craft_files
from .manifest import MANIFEST_FILENAME, ProjectManifest, load_manifest
from .parser import parse_modules


def load_project_with_manifest(
    project_dir: Path | str,
    manifest_path: Path | str | None = None,
) -> tuple[ir.ArchitectureModel, ProjectManifest]:
    """
    Load a craft project and return both the model and its manifest.

    Performs:
    1. Load manifest (craft.toml)
    2. Discover .craft files
    3. Parse modules
    4. Build the ArchitectureModel with the manifest's resolution policies

    Raises:
        ManifestError: If the manifest is missing or invalid
        ParseError: If DSL parsing fails
    """
    project_dir = Path(project_dir).resolve()

    if manifest_path is None:
        manifest_path = project_dir / MANIFEST_FILENAME
    else:
        manifest_path = Path(manifest_path).resolve()

    manifest = load_manifest(manifest_path)
    files = discover_craft_files(project_dir, manifest)
    modules = parse_modules(files)
    model = build_model(modules, name=manifest.name, policies=manifest.resolution.to_policies())
    return model, manifest


def load_project(
    project_dir: Path | str,
    manifest_path: Path | str | None = None,
) -> ir.ArchitectureModel:
    """
    Load a craft project and return its ArchitectureModel.

    Example:
        >>> from craft.core import load_project
        >>> model = load_project("./shop")
        >>> print(model.name, len(model.services))
    """
    model, _ = load_project_with_manifest(project_dir, manifest_path)
    return model
