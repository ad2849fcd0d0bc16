"""CLI principal (Typer).

Comandos:
- `provision`: autentica, crea tableros y concede membresías.
- `plan`: muestra los payloads que se enviarían (sin red).
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_report_json
from adapters.manifest_loader import load_manifest
from cli import doctor
from cli.ui_components import build_plan_table, build_report_table, print_banner
from core.config import AppSettings
from core.errors import ProvisioningError
from core.logging_config import configure_logging
from core.services.provisioning_pipeline import build_plan, run_provisioning

app = typer.Typer(
    no_args_is_help=True,
    help="Provision Taiga boards and memberships from a manifest.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.command()
def provision(
    manifest: Path = typer.Argument(..., exists=True, dir_okay=False, help="Manifest JSON (options + boards)."),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Taiga admin username."),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Taiga admin password."),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Write the provisioning report as JSON."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
) -> None:
    """Create every board in MANIFEST and add its members with the "Back" role."""

    settings = AppSettings()
    configure_logging(settings.log_level, json_output=settings.log_json)

    if not no_banner:
        print_banner(_console)

    try:
        request = load_manifest(manifest)
    except ProvisioningError as exc:
        _console.print(f"[red]Invalid manifest:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    username = username or settings.username or typer.prompt("Taiga admin username")
    password = password or settings.password or typer.prompt("Taiga admin password", hide_input=True)

    try:
        report = asyncio.run(
            run_provisioning(
                settings=settings,
                username=username,
                password=password,
                manifest=request,
            )
        )
    except ProvisioningError as exc:
        _console.print(f"[red]Provisioning failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _console.print(build_report_table(report))
    _console.print(f"[green]{len(report.boards)} boards, {len(report.memberships)} memberships.[/green]")

    if json_out:
        try:
            path = export_report_json(report=report, output_path=json_out)
        except OSError as exc:
            _console.print(f"[red]Could not write report:[/red] {escape(str(exc))}")
            raise typer.Exit(code=1) from exc
        _console.print(f"[green]Report saved to:[/green] {path}")


@app.command()
def plan(
    manifest: Path = typer.Argument(..., exists=True, dir_okay=False, help="Manifest JSON (options + boards)."),
) -> None:
    """Show what `provision` would send, without touching the network."""

    try:
        request = load_manifest(manifest)
    except ProvisioningError as exc:
        _console.print(f"[red]Invalid manifest:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _console.print(build_plan_table(build_plan(request.boards, request.options)))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
