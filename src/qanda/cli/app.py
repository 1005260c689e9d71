"""Main CLI application.

Click commands for the qanda service: serve, init-db.
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from qanda import __version__
from qanda.config.loader import CONFIG_PATH_ENV, load_config
from qanda.core.errors import ConfigError

if TYPE_CHECKING:
    from qanda.config.schema import QandaConfig


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> QandaConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


async def _init_db(config: QandaConfig) -> str:
    """Create missing tables and return the (password-masked) URL."""
    from qanda.store.database import create_db, create_schema

    _, engine = await create_db(config.database)
    try:
        await create_schema(engine)
        return engine.url.render_as_string()
    finally:
        await engine.dispose()


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="qanda")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """qanda - questions, answers, and votes.

    A small REST service for posting questions and answers and voting
    on them.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── init-db ──────────────────────────────────────────────────────


@cli.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create the database tables if they do not exist."""
    from qanda.core.errors import QandaError

    config = _load_config(ctx.obj["config_path"])
    try:
        url = asyncio.run(_init_db(config))
    except QandaError as e:
        _error(str(e))
        return
    click.echo(f"Database ready: {url}")


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.option("--host", default=None, help="Host to bind to (overrides config).")
@click.option(
    "--port", type=int, default=None, help="Port to bind to (overrides config)."
)
@click.option(
    "--reload", is_flag=True, default=False, help="Enable auto-reload for development."
)
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool) -> None:
    """Start the REST API server."""
    import uvicorn

    from qanda.api.app import create_app

    config = _load_config(ctx.obj["config_path"])

    effective_host = host or config.api.host
    effective_port = port or config.api.port

    click.echo(f"Serving qanda on http://{effective_host}:{effective_port}")

    if not reload:
        uvicorn.run(create_app(config), host=effective_host, port=effective_port)
        return

    # The reloader re-imports the app in a child process, which finds
    # the config through the environment.
    if ctx.obj["config_path"]:
        os.environ[CONFIG_PATH_ENV] = str(Path(ctx.obj["config_path"]).resolve())
    uvicorn.run(
        "qanda.api.app:create_app",
        factory=True,
        host=effective_host,
        port=effective_port,
        reload=True,
    )
