"""
craft CLI Utilities.

Shared utility functions used across CLI modules.
"""

import platform
from pathlib import Path

import typer

from craft import __version__
from craft.core.errors import CraftError, ParseError


def get_version() -> str:
    """Installed craft version."""
    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"craft {get_version()}")
        typer.echo(
            f"Python {platform.python_version()} ({platform.python_implementation()})"
        )
        raise typer.Exit()


def print_human_error(error: CraftError) -> None:
    """Print an error in human-readable format."""
    if isinstance(error, ParseError):
        typer.echo(f"Parse error: {error}", err=True)
    else:
        typer.echo(f"Error: {error}", err=True)


def print_vscode_error(error: CraftError, root: Path) -> None:
    """Print an error in VS Code problem-matcher format: file:line:col: error: message"""
    if error.context:
        try:
            rel_path = Path(error.context.file).relative_to(root)
        except ValueError:
            rel_path = Path(error.context.file)
        line = error.context.line or 1
        col = error.context.column or 1
        typer.echo(f"{rel_path}:{line}:{col}: error: {error.message}", err=True)
    else:
        typer.echo(f"::error: {error.message}", err=True)
