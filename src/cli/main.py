"""CLI principal (Typer).

Comandos:
- `quote`: resuelve una cita localmente (principal -> alternativa -> pool).
- `fetch`: consume un endpoint `/api/quotes` remoto.
- `serve`: expone `/api/quotes` con uvicorn.
- `doctor`: diagnósticos de entorno.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console

from adapters.json_exporter import export_quote_json, quote_payload
from adapters.quote_api_client import QuoteApiError, fetch_remote_quote
from cli import doctor
from cli.ui_components import (
    build_error_panel,
    build_quote_panel,
    build_stages_table,
    configure_logging,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import StageOutcome
from core.services.quote_resolver import ResolverHooks, build_default_resolver

__version__ = "0.1.0"

app = typer.Typer(no_args_is_help=True, help="Random inspirational quotes with provider fallback.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"daily-quote {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Override DAILY_QUOTE_LOG_LEVEL (DEBUG, INFO, WARNING...).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level)


@app.command()
def quote(
    trace: bool = typer.Option(False, "--trace", help="Show the outcome of every stage."),
    as_json: bool = typer.Option(False, "--json", help="Print the {content, author} JSON contract."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the quote as JSON."),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.1,
        help="Per-stage timeout in seconds (default: DAILY_QUOTE_FETCH_TIMEOUT_SECONDS).",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print the banner."),
) -> None:
    """Fetch one quote, falling back to the static pool if providers fail."""

    settings = AppSettings()
    if timeout is not None:
        settings = settings.model_copy(update={"fetch_timeout_seconds": timeout})

    if not quiet and not as_json:
        print_banner(_console)

    with _console.status("Fetching quote...") as status:

        def on_failed(outcome: StageOutcome) -> None:
            status.update(f"{outcome.stage} failed ({outcome.error_kind}), trying next source...")

        hooks = ResolverHooks(
            stage_start=lambda stage: status.update(f"Asking {stage} provider..."),
            stage_failed=on_failed,
        )
        resolver = build_default_resolver(settings, hooks=hooks)
        resolution = asyncio.run(resolver.resolve_with_trace())

    if output is not None:
        export_quote_json(quote=resolution.quote, output_path=output)

    if as_json:
        typer.echo(json.dumps(quote_payload(resolution.quote), ensure_ascii=False))
        return

    _console.print(build_quote_panel(resolution.quote, source=resolution.source if trace else None))
    if trace:
        _console.print(build_stages_table(resolution))


@app.command()
def fetch(
    url: str = typer.Argument("http://127.0.0.1:8000/api/quotes", help="Quote endpoint URL."),
) -> None:
    """Fetch a quote from a running daily-quote service."""

    settings = AppSettings()
    try:
        with _console.status("Loading quote..."):
            remote = asyncio.run(fetch_remote_quote(url, settings=settings))
    except QuoteApiError as exc:
        _console.print(build_error_panel(exc.title, str(exc)))
        raise typer.Exit(code=1)

    _console.print(build_quote_panel(remote))


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: DAILY_QUOTE_API_HOST)."),
    port: int | None = typer.Option(None, "--port", help="Port (default: DAILY_QUOTE_API_PORT)."),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development."),
) -> None:
    """Serve GET /api/quotes over HTTP."""

    import uvicorn  # noqa: PLC0415

    settings = AppSettings()
    uvicorn.run(
        "api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def run() -> None:
    app()


if __name__ == "__main__":
    run()
