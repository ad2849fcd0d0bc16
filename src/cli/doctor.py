"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get("")
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Show the effective configuration and check that the API is reachable."""

    settings = AppSettings()

    table = Table(title="taiga-provisioner Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API base_url", "OK", settings.api_base_url)
    if settings.username:
        table.add_row("Admin username", "OK", settings.username)
    else:
        table.add_row("Admin username", "OPTIONAL", "Not set -> prompted on provision")
    if settings.password:
        table.add_row("Admin password", "OK", "Set (hidden)")
    else:
        table.add_row("Admin password", "OPTIONAL", "Not set -> prompted on provision")
    table.add_row("Log level", "OK", f"{settings.log_level} ({'json' if settings.log_json else 'console'})")

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    base_url = typer.prompt("Taiga API base URL", default=settings.api_base_url, show_default=True).strip()
    username = typer.prompt("Admin username", default=settings.username or "", show_default=True).strip()
    password = typer.prompt("Admin password", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not username:
        raise typer.BadParameter("base URL and username are required")

    env_path = write_user_env_vars(
        {
            "TAIGA_PROVISIONER_API_BASE_URL": base_url,
            "TAIGA_PROVISIONER_USERNAME": username,
            "TAIGA_PROVISIONER_PASSWORD": password or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
