"""CLI entry-point for the Deck MCP server."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

import click
import uvicorn
from dotenv import load_dotenv

from deck_mcp import __version__
from deck_mcp.client import create_client
from deck_mcp.config import DeckSettings
from deck_mcp.health import init_health
from deck_mcp.logging_config import configure_logging
from deck_mcp.server import DEFAULT_HOST, build_http_app, mcp

logger = logging.getLogger(__name__)

_CREDENTIAL_VARS = ("NEXTCLOUD_URL", "NEXTCLOUD_USERNAME", "NEXTCLOUD_PASSWORD")


@click.group()
@click.version_option(__version__, prog_name="deck-mcp")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--json-logs", is_flag=True, help="Output structured JSON logs.")
def cli(verbose: bool, json_logs: bool) -> None:
    """Nextcloud Deck MCP server."""
    load_dotenv(Path.cwd() / ".env")
    configure_logging(verbose=verbose, json_format=json_logs)


# -----------------------------------------------------------------------
# deck-mcp serve
# -----------------------------------------------------------------------


@cli.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default="stdio",
    show_default=True,
    help="MCP transport to serve.",
)
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Bind address for http.")
@click.option("--port", type=int, default=None, help="Port for http (default: $PORT or 3261).")
def serve(transport: str, host: str, port: int | None) -> None:
    """Run the MCP server."""
    try:
        settings = DeckSettings.from_env()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    logger.info("Nextcloud URL: %s (user %s)", settings.base_url, settings.username)

    if transport == "stdio":
        mcp.run()
        return

    bind_port = port or settings.port
    app = build_http_app(host)
    init_health()
    logger.info("Serving MCP on http://%s:%d/mcp", host, bind_port)

    config = uvicorn.Config(app=app, host=host, port=bind_port, log_level="info")
    asyncio.run(uvicorn.Server(config).serve())


# -----------------------------------------------------------------------
# deck-mcp doctor
# -----------------------------------------------------------------------


def _check_env_var(name: str) -> tuple[bool, str]:
    val = os.environ.get(name, "")
    if not val:
        return False, f"{name} is not set"
    if name == "NEXTCLOUD_PASSWORD":
        return True, f"{name} = ***"
    if name == "NEXTCLOUD_URL":
        return True, f"{name} = {val}"
    masked = val[:4] + "..." if len(val) > 4 else "***"
    return True, f"{name} = {masked}"


async def _ping() -> int:
    async with create_client() as client:
        boards = await client.get_boards()
    return len(boards)


def _check_connection() -> tuple[bool, str]:
    try:
        count = asyncio.run(_ping())
    except Exception as exc:
        return False, f"Deck API unreachable: {exc}"
    return True, f"Deck API reachable, {count} board(s) visible"


@cli.command()
@click.option("--ping", is_flag=True, help="Also list boards to verify the credentials.")
def doctor(ping: bool) -> None:
    """Check configuration and, optionally, connectivity."""
    click.echo(click.style("Deck MCP Doctor\n", bold=True))

    results = [_check_env_var(name) for name in _CREDENTIAL_VARS]
    if ping and all(ok for ok, _ in results):
        results.append(_check_connection())

    has_issues = False
    for ok, msg in results:
        if ok:
            click.echo(click.style(f"  ✓ {msg}", fg="green"))
        else:
            click.echo(click.style(f"  ✗ {msg}", fg="red"))
            has_issues = True

    click.echo()
    if has_issues:
        click.echo(click.style("Some checks failed. See above for details.", fg="yellow"))
        raise SystemExit(1)
    click.echo(click.style("All checks passed!", fg="green"))


if __name__ == "__main__":
    cli()
