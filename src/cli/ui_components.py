"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections import Counter

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import BoardPlan, ProvisioningReport


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("taiga-provisioner", style="bold cyan")
    subtitle = Text("Tableros • Roles • Membresías", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_report_table(report: ProvisioningReport) -> Table:
    """Una fila por tablero creado, en el orden del manifest."""

    members_per_project = Counter(str(m.project) for m in report.memberships)

    table = Table(title="Provisioned Boards")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Board", style="cyan")
    table.add_column("Project ID", style="magenta")
    table.add_column("Members", style="green", justify="right")
    for index, board in enumerate(report.boards):
        table.add_row(
            str(index),
            board.name or "-",
            str(board.id),
            str(members_per_project.get(str(board.id), 0)),
        )
    return table


def build_plan_table(plans: list[BoardPlan]) -> Table:
    table = Table(title="Provisioning Plan (dry run)")
    table.add_column("Board", style="cyan", no_wrap=True)
    table.add_column("Private", style="white")
    table.add_column("Modules", style="white")
    table.add_column("Members", style="green", justify="right")
    for plan in plans:
        modules = [
            label
            for key, label in (
                ("is_backlog_activated", "backlog"),
                ("is_issues_activated", "issues"),
                ("is_kanban_activated", "kanban"),
                ("is_wiki_activated", "wiki"),
            )
            if plan.payload.get(key)
        ]
        table.add_row(
            plan.name,
            "yes" if plan.payload.get("is_private") else "no",
            ", ".join(modules) or "-",
            str(plan.member_count),
        )
    return table
