from pathlib import Path

from .manifest import ProjectManifest

CRAFT_SUFFIX = ".craft"


def discover_craft_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    """
    Find every .craft file under the manifest's module paths.

    A module path may also name a single file. Results are sorted, which
    fixes the declaration order seen by merging and correlation.
    """
    files: list[Path] = []
    for rel in manifest.module_paths:
        base = (root / rel).resolve()
        if not base.exists():
            continue
        if base.is_file():
            if base.suffix == CRAFT_SUFFIX:
                files.append(base)
            continue
        for p in base.rglob(f"*{CRAFT_SUFFIX}"):
            files.append(p)
    return sorted(set(files))
