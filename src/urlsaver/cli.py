"""
URL Content Saver CLI.

Usage:
    urlsaver serve
    urlsaver serve --http --port 3000
    urlsaver save https://example.com out/example.html
    urlsaver base-dir
"""

from __future__ import annotations

import asyncio
import json

import click
from rich.console import Console
from rich.table import Table

from urlsaver.config import get_settings
from urlsaver.logging import setup_logging

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: URLSAVER_LOG_LEVEL or INFO)",
)
@click.option("--log-json", is_flag=True, help="Log JSON lines to stderr (default: URLSAVER_LOG_JSON)")
@click.version_option(package_name="url-content-saver")
@click.pass_context
def main(ctx: click.Context, log_level: str | None, log_json: bool) -> None:
    """URL Content Saver command-line interface."""
    ctx.ensure_object(dict)
    setup_logging(level=log_level, json_output=log_json or None)


# =============================================================================
# Serve Command
# =============================================================================


@main.command()
@click.option("--http", "use_http", is_flag=True, help="Serve Streamable HTTP instead of stdio")
@click.option("--host", default=None, help="HTTP bind address (default: URLSAVER_HOST)")
@click.option("--port", "-p", type=int, default=None, help="HTTP port (default: URLSAVER_PORT or PORT)")
def serve(use_http: bool, host: str | None, port: int | None) -> None:
    """Run the MCP server.

    Uses stdio unless --http is given.

    Examples:

        urlsaver serve

        urlsaver serve --http --port 8080
    """
    from urlsaver.server import log_startup_environment, run_http, run_stdio

    settings = get_settings()
    log_startup_environment()

    try:
        if use_http:
            run_http(host or settings.host, port or settings.port)
        else:
            asyncio.run(run_stdio())
    except KeyboardInterrupt:
        err_console.print("[dim]Shutting down[/dim]")
    except OSError as e:
        err_console.print(f"[red]Failed to start server:[/red] {e}")
        raise SystemExit(1) from e


# =============================================================================
# Save Command
# =============================================================================


@main.command()
@click.argument("url")
@click.argument("file_path")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON payload")
def save(url: str, file_path: str, as_json: bool) -> None:
    """Download URL into FILE_PATH.

    FILE_PATH is resolved against the base directory when relative.

    Examples:

        urlsaver save https://example.com out/example.html

        urlsaver save https://example.com/data.csv /tmp/data.csv --json
    """
    from urlsaver.services.saver import UrlSaverService

    outcome = UrlSaverService().save(url, file_path)

    if as_json:
        click.echo(json.dumps(outcome.to_payload()))
    elif outcome.success:
        table = Table(show_header=False, box=None)
        table.add_column("Field", style="dim")
        table.add_column("Value")
        table.add_row("File", outcome.file_path)
        table.add_row("Size", f"{outcome.file_size:,} bytes")
        table.add_row("Type", outcome.content_type)
        table.add_row("Status", str(outcome.status_code))
        console.print("[green]Saved[/green]")
        console.print(table)
        console.print(f"[dim]{outcome.metrics.summary()}[/dim]")
    else:
        err_console.print(f"[red]Error:[/red] {outcome.reason}")

    if not outcome.success:
        raise SystemExit(1)


# =============================================================================
# Base Directory Command
# =============================================================================


@main.command("base-dir")
def base_dir() -> None:
    """Show the base directory and where it came from."""
    from urlsaver.services.paths import (
        EnvironmentContext,
        is_unrestricted_context,
        resolve_base_directory_with_source,
    )

    ctx = EnvironmentContext.from_process()
    directory, source = resolve_base_directory_with_source(ctx)

    console.print(f"[dim]Base directory:[/dim] {directory}")
    console.print(f"[dim]Source:[/dim] {source}")
    console.print(f"[dim]Any path allowed:[/dim] {'yes' if ctx.allow_any_path else 'no'}")
    if is_unrestricted_context(directory):
        console.print("[yellow]Unrestricted context: containment check disabled[/yellow]")


# =============================================================================
# Entry Point
# =============================================================================


if __name__ == "__main__":
    main()
