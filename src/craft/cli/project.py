"""
Project commands: validate, inspect, flows, domains.

Every command loads ``craft.toml``, parses the project's .craft files and
builds the ArchitectureModel before printing.
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from craft.core import ir
from craft.core.errors import CraftError
from craft.core.extraction import extract_domains
from craft.core.project import load_project_with_manifest

from .utils import print_human_error, print_vscode_error

console = Console()


def _load(manifest: str, format: str = "human") -> ir.ArchitectureModel:
    """Load the project named by `manifest`, exiting with code 1 on error."""
    manifest_path = Path(manifest).resolve()
    root = manifest_path.parent

    try:
        model, _ = load_project_with_manifest(root, manifest_path)
    except CraftError as e:
        if format == "vscode":
            print_vscode_error(e, root)
        else:
            print_human_error(e)
        raise typer.Exit(code=1)

    return model


def _print_json(data: object) -> None:
    typer.echo(json.dumps(data, indent=2, default=str))


def validate_command(
    manifest: str = typer.Option("craft.toml", "--manifest", "-m", help="Path to craft.toml"),
    format: str = typer.Option(
        "human", "--format", "-f", help="Output format: 'human' or 'vscode'"
    ),
) -> None:
    """
    Parse all .craft files and build the architecture model.
    """
    model = _load(manifest, format)

    if format == "vscode":
        typer.echo("::notice: Validation successful")
        return

    typer.echo(
        f"OK: {len(model.actors)} actors, {len(model.domains)} domains, "
        f"{len(model.services)} services, {len(model.use_cases)} use cases, "
        f"{len(model.flows)} flow edges."
    )


def inspect_command(
    manifest: str = typer.Option("craft.toml", "--manifest", "-m"),
    service: str | None = typer.Option(None, "--service", "-s", help="Inspect a specific service"),
    format: str = typer.Option("tree", "--format", "-f", help="Output format: 'tree' or 'json'"),
) -> None:
    """
    Inspect actors, domains, services and use cases.
    """
    model = _load(manifest)

    if service:
        svc = model.get_service(service)
        if svc is None:
            typer.echo(f"Service not found: {service}", err=True)
            raise typer.Exit(code=1)
        if format == "json":
            _print_json(svc.model_dump())
        else:
            _print_service(svc)
        return

    if format == "json":
        _print_json(model.model_dump(mode="json"))
        return

    typer.echo(f"\n{model.name}")

    if model.actors:
        typer.echo("\nActors:")
        for actor in model.actors:
            typer.echo(f"   • {actor.name} ({actor.kind.value})")

    if model.domains:
        typer.echo("\nDomains:")
        for domain in model.domains:
            subs = f" [{', '.join(domain.sub_domains)}]" if domain.sub_domains else ""
            owner = model.service_for_domain(domain.name)
            owned_by = f" (service: {owner.name})" if owner else ""
            typer.echo(f"   • {domain.name}{subs}{owned_by}")

    if model.services:
        typer.echo("\nServices:")
        for svc in model.services:
            _print_service(svc)

    if model.exposures:
        typer.echo("\nExposures:")
        for exposure in model.exposures:
            typer.echo(
                f"   • {exposure.name}: {', '.join(exposure.of)} "
                f"to {', '.join(exposure.to)} through {', '.join(exposure.through)}"
            )

    if model.architectures:
        typer.echo("\nArchitectures:")
        for arch in model.architectures:
            typer.echo(f"   • {arch.name or '(unnamed)'}")
            for component in arch.presentation:
                typer.echo(f"     presentation: {component}")
            for component in arch.gateway:
                typer.echo(f"     gateway: {component}")

    if model.use_cases:
        typer.echo("\nUse cases:")
        for use_case in model.use_cases:
            typer.echo(f"   • {use_case.name}")
            for scenario in use_case.scenarios:
                typer.echo(f"     {scenario.trigger.description}")
                for action in scenario.actions:
                    typer.echo(f"       {action.description}")


def _print_service(svc: ir.ServiceSpec) -> None:
    typer.echo(f"   • {svc.name}")
    if svc.domains:
        typer.echo(f"     domains: {', '.join(svc.domains)}")
    if svc.data_stores:
        typer.echo(f"     data-stores: {', '.join(svc.data_stores)}")
    if svc.language:
        typer.echo(f"     language: {svc.language}")
    if svc.deployment.is_set:
        rules = ", ".join(f"{r.percentage} -> {r.target}" for r in svc.deployment.rules)
        typer.echo(f"     deployment: {svc.deployment.kind}({rules})")


def flows_command(
    manifest: str = typer.Option("craft.toml", "--manifest", "-m"),
    use_case: str | None = typer.Option(
        None, "--use-case", "-u", help="Only show flows of this use case"
    ),
    format: str = typer.Option("text", "--format", "-f", help="Output format: 'text' or 'json'"),
) -> None:
    """
    Show resolved flow edges, scenario by scenario.
    """
    model = _load(manifest)

    flows = model.flows
    if use_case:
        if model.get_use_case(use_case) is None:
            typer.echo(f"Use case not found: {use_case}", err=True)
            raise typer.Exit(code=1)
        flows = model.flows_for(use_case)

    if format == "json":
        _print_json([edge.model_dump(mode="json") for edge in flows])
        return

    if not flows:
        console.print("[dim]No flows found.[/dim]")
        return

    scenarios: dict[str, list[ir.FlowEdge]] = {}
    for edge in flows:
        scenarios.setdefault(edge.scenario_id, []).append(edge)

    for scenario_id, edges in scenarios.items():
        table = Table(title=f"{edges[0].use_case} ({scenario_id})")
        table.add_column("#", style="dim")
        table.add_column("From")
        table.add_column("To")
        table.add_column("Kind")
        table.add_column("Label")
        for edge in edges:
            table.add_row(str(edge.step), edge.source, edge.target, edge.kind.value, edge.label)
        console.print(table)


def domains_command(
    manifest: str = typer.Option("craft.toml", "--manifest", "-m"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: 'text' or 'json'"),
) -> None:
    """
    Show which domains each use case touches.
    """
    extraction = extract_domains(_load(manifest))

    if format == "json":
        _print_json(extraction.model_dump())
        return

    typer.echo("Domains:")
    for domain in extraction.domains:
        typer.echo(f"   • {domain}: {', '.join(extraction.domain_use_cases[domain])}")

    for summary in extraction.use_cases:
        location = ""
        if summary.source is not None:
            source = summary.source
            location = f" ({source.file}:{source.start_line}-{source.end_line})"
        typer.echo(f"\n{summary.name}{location}")
        typer.echo(f"   entry point: {summary.entry_point or '-'}")
        for line in summary.actions:
            typer.echo(f"   {line}")
