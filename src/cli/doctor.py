"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import HttpxBoundedFetcher
from adapters.quote_sources import QuotableSource, ZenQuotesSource
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import QuoteSourceError
from core.interfaces.quote_source import QuoteSource

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_source(source: QuoteSource) -> tuple[bool, str]:
    try:
        quote = await source.fetch_quote()
        return True, f"{quote.author}: {quote.content[:60]}"
    except QuoteSourceError as exc:
        return False, f"{exc.kind}: {exc}"
    except Exception as exc:
        return False, f"unexpected: {type(exc).__name__}: {exc}"


async def _check_all(settings: AppSettings) -> list[tuple[str, str, bool, str]]:
    fetcher = HttpxBoundedFetcher(settings)
    sources: list[tuple[QuoteSource, str]] = [
        (QuotableSource(fetcher, settings), settings.primary_url),
        (ZenQuotesSource(fetcher, settings), settings.secondary_url),
    ]
    rows: list[tuple[str, str, bool, str]] = []
    for source, url in sources:
        ok, detail = await _check_source(source)
        rows.append((source.name, url, ok, detail))
    return rows


@app.command()
def run() -> None:
    """Run baseline diagnostics: configuration and provider reachability."""

    settings = AppSettings()

    table = Table(title="daily-quote Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Timeout", "OK", f"{settings.fetch_timeout_seconds:g}s per stage")
    table.add_row("Author sentinel", "OK", settings.unknown_author)
    table.add_row("User config", "OK", str(get_user_env_file()))

    # Connectivity (best-effort, sequential like the resolver)
    failures = 0
    for name, url, ok, detail in asyncio.run(_check_all(settings)):
        failures += 0 if ok else 1
        table.add_row(f"{name} provider", "OK" if ok else "FAIL", f"{url}\n{detail}")

    table.add_row("Static pool", "OK", "always available")
    _console.print(table)

    if failures:
        _console.print(
            "\n[yellow]Note:[/yellow] failing providers are skipped; `quote` still answers from the static pool."
        )


@app.command(name="setup-providers")
def setup_providers() -> None:
    """Interactive provider setup (stores config in the user config .env)."""

    settings = AppSettings()

    primary = typer.prompt("Primary provider URL", default=settings.primary_url, show_default=True).strip()
    secondary = typer.prompt("Secondary provider URL", default=settings.secondary_url, show_default=True).strip()
    timeout = typer.prompt(
        "Per-stage timeout (seconds)",
        default=settings.fetch_timeout_seconds,
        type=float,
        show_default=True,
    )

    if not primary or not secondary:
        raise typer.BadParameter("both provider URLs are required")
    if timeout <= 0:
        raise typer.BadParameter("timeout must be greater than zero")

    env_path = write_user_env_vars(
        {
            "DAILY_QUOTE_PRIMARY_URL": primary,
            "DAILY_QUOTE_SECONDARY_URL": secondary,
            "DAILY_QUOTE_FETCH_TIMEOUT_SECONDS": f"{timeout:g}",
        }
    )

    _console.print(f"[green]Saved provider config to:[/green] {env_path}")
