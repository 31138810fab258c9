"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Los tres estados del consumidor (cargando, error, cita) se pintan igual desde
  `quote` y desde `fetch`.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Quote, Resolution


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Se puede desactivar con `--quiet` en modos no interactivos (JSON/pipelines).
    """

    title = Text("daily-quote", style="bold cyan")
    subtitle = Text("Inspiración diaria • Proveedores con fallback", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def configure_logging(level: str, *, console: Console | None = None) -> None:
    """Logging nivelado hacia stderr con formato Rich."""

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )


def build_quote_panel(quote: Quote, *, source: str | None = None) -> Panel:
    body = Text()
    body.append(f"“{quote.content}”\n\n", style="italic")
    body.append(f"— {quote.author}", style="bold")
    subtitle = Text(f"source: {source}", style="dim") if source else None
    return Panel(body, title=Text("Quote", style="bold green"), subtitle=subtitle, border_style="green")


def build_error_panel(title: str, message: str) -> Panel:
    return Panel(Text(message), title=Text(title, style="bold red"), border_style="red")


def build_stages_table(resolution: Resolution) -> Table:
    """Tabla con el resultado de cada etapa intentada."""

    table = Table(title="Stages")
    table.add_column("Stage", style="cyan", no_wrap=True)
    table.add_column("Result", style="white")
    table.add_column("Time (ms)", style="magenta", justify="right")
    table.add_column("Error", style="red")
    for outcome in resolution.outcomes:
        result = "OK" if outcome.ok else (outcome.error_kind or "FAIL")
        table.add_row(
            outcome.stage,
            result,
            f"{outcome.elapsed_ms:.0f}",
            outcome.error or "",
        )
    return table
