"""Core craft functionality: IR, parser, normalization, merging, resolution, correlation."""

from . import ir
from .assembler import build_model, build_model_from_declarations
from .correlator import correlate_events
from .errors import CraftError, ErrorContext, ManifestError, ParseError
from .extraction import extract_domains
from .merger import merge_domains, merge_services
from .normalizer import normalize_declarations
from .parser import parse_modules, parse_text
from .policies import ConflictPolicy, ResolutionPolicies
from .project import load_project, load_project_with_manifest
from .resolver import resolve_scenario

__all__ = [
    "ir",
    "CraftError",
    "ParseError",
    "ManifestError",
    "ErrorContext",
    "ConflictPolicy",
    "ResolutionPolicies",
    "parse_modules",
    "parse_text",
    "normalize_declarations",
    "merge_domains",
    "merge_services",
    "resolve_scenario",
    "correlate_events",
    "build_model",
    "build_model_from_declarations",
    "extract_domains",
    "load_project",
    "load_project_with_manifest",
]
