"""CLI entry point for chud."""

from __future__ import annotations

import json
import logging
import os
import sys

import click

logger = logging.getLogger("chud")


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; stdout carries only the status line."""
    level_name = "DEBUG" if verbose else os.environ.get("CHUD_LOG_LEVEL", "WARNING")
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def read_payload(text: str) -> dict:
    """Decode the session payload. Blank input is an empty payload."""
    if not text.strip():
        return {}
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError("session payload must be a JSON object")
    return payload


def render_from_payload(payload: dict) -> str:
    """Load config for the payload's directory and render the status line."""
    from chud.core.config import load_config
    from chud.core.data import DataAccess
    from chud.core.pipeline import render_statusline
    from chud.types.context import SessionContext

    ctx = SessionContext.from_payload(payload, default_cwd=os.getcwd())
    config = load_config(ctx.cwd)
    return render_statusline(config, ctx, DataAccess.from_environment())


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """chud -- status line for Claude Code.

    \b
    Usage:
      echo '{"cwd": "/path"}' | chud     (render from a session payload)
      chud preview                       (render with a sample session)
      chud pace                          (spend pace report)
      chud config show
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is not None:
        return

    try:
        payload = read_payload("" if sys.stdin.isatty() else sys.stdin.read())
        line = render_from_payload(payload)
    except Exception as exc:
        logger.error("Status line failed: %s", exc, exc_info=verbose)
        click.echo("")
        sys.exit(1)
    click.echo(line)


def _register_subcommands() -> None:
    """Register CLI subcommands."""
    from chud.cli.commands import config_cmd, pace_cmd, preview_cmd

    cli.add_command(config_cmd, "config")
    cli.add_command(pace_cmd, "pace")
    cli.add_command(preview_cmd, "preview")


_register_subcommands()


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
