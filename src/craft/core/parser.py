import logging
from pathlib import Path

from . import ir
from .dsl_parser_impl import parse_dsl

logger = logging.getLogger(__name__)


def parse_modules(files: list[Path]) -> list[ir.ModuleIR]:
    """
    Parse DSL files into ModuleIR structures.

    Files are parsed in the order given; that order is the declaration
    order the assembler sees.

    Args:
        files: List of .craft file paths to parse

    Returns:
        List of ModuleIR objects, one per file
    """
    modules: list[ir.ModuleIR] = []

    for f in files:
        text = f.read_text(encoding="utf-8")
        module = parse_dsl(text, f)
        logger.debug("Parsed %s: %d declarations", f, len(module.declarations))
        modules.append(module)

    return modules


def parse_text(text: str, name: str = "<string>") -> ir.ModuleIR:
    """Parse in-memory DSL text into a single module."""
    return parse_dsl(text, Path(name))
