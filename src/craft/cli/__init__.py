"""
craft CLI.

- project.py: validate, inspect, flows and domains commands
- utils.py: version and error printing helpers
"""

import sys

import typer

from craft.cli.project import (
    domains_command,
    flows_command,
    inspect_command,
    validate_command,
)
from craft.cli.utils import __version__, get_version, version_callback

app = typer.Typer(
    help="""craft – architecture-as-code compiler

Commands:
  • validate: parse and build the architecture model
  • inspect: print actors, domains, services and use cases
  • flows: print resolved scenario flows
  • domains: print the domains each use case touches
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """craft CLI main callback for global options."""
    pass


app.command(name="validate")(validate_command)
app.command(name="inspect")(inspect_command)
app.command(name="flows")(flows_command)
app.command(name="domains")(domains_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["__version__", "app", "get_version", "main"]


if __name__ == "__main__":
    main(sys.argv[1:])
