import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestError
from .policies import (
    DEFAULT_CHANNEL_SUFFIX,
    DEFAULT_EXTERNAL_SENTINEL,
    ConflictPolicy,
    ResolutionPolicies,
)

MANIFEST_FILENAME = "craft.toml"


@dataclass
class ResolutionConfig:
    """``[resolution]`` table: conflict policies for model assembly."""

    scalar_conflicts: ConflictPolicy = ConflictPolicy.FIRST_WINS
    deployment_conflicts: ConflictPolicy = ConflictPolicy.FIRST_WINS
    event_publishers: ConflictPolicy = ConflictPolicy.LAST_WINS
    external_sentinel: str = DEFAULT_EXTERNAL_SENTINEL
    channel_suffix: str = DEFAULT_CHANNEL_SUFFIX

    def to_policies(self) -> ResolutionPolicies:
        return ResolutionPolicies(
            scalar_conflicts=self.scalar_conflicts,
            deployment_conflicts=self.deployment_conflicts,
            event_publishers=self.event_publishers,
            external_sentinel=self.external_sentinel,
            channel_suffix=self.channel_suffix,
        )


@dataclass
class ProjectManifest:
    name: str
    version: str
    module_paths: list[str] = field(default_factory=lambda: ["./"])
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)


def _policy(table: dict, key: str, default: ConflictPolicy) -> ConflictPolicy:
    value = table.get(key, default.value)
    try:
        return ConflictPolicy(value)
    except ValueError:
        allowed = ", ".join(p.value for p in ConflictPolicy)
        raise ManifestError(
            f"Invalid [resolution] {key} = {value!r} (expected one of: {allowed})"
        ) from None


def _string(table: dict, key: str, default: str) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise ManifestError(f"Invalid [resolution] {key} = {value!r} (expected a string)")
    return value


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load a craft.toml manifest.

    Raises:
        ManifestError: If the file is missing, is not valid TOML, or names
            an unknown conflict policy or a non-string name setting
    """
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    project = data.get("project", {})
    modules = data.get("modules", {})
    resolution_data = data.get("resolution", {})

    defaults = ResolutionConfig()
    resolution = ResolutionConfig(
        scalar_conflicts=_policy(resolution_data, "scalar_conflicts", defaults.scalar_conflicts),
        deployment_conflicts=_policy(
            resolution_data, "deployment_conflicts", defaults.deployment_conflicts
        ),
        event_publishers=_policy(resolution_data, "event_publishers", defaults.event_publishers),
        external_sentinel=_string(
            resolution_data, "external_sentinel", defaults.external_sentinel
        ),
        channel_suffix=_string(resolution_data, "channel_suffix", defaults.channel_suffix),
    )

    return ProjectManifest(
        name=project.get("name", path.parent.name),
        version=project.get("version", "0.1.0"),
        module_paths=modules.get("paths", ["./"]),
        resolution=resolution,
    )
