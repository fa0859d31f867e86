"""CLI subcommands for chud (config, pace, preview)."""

from __future__ import annotations

import os

import click


@click.group()
def config_cmd() -> None:
    """Inspect chud configuration."""


@config_cmd.command("show")
@click.option("--cwd", default=None, help="Directory to resolve the config from")
def config_show(cwd: str | None) -> None:
    """Show the effective configuration."""
    from chud.core.config import find_config_file, load_config, load_env_config

    click.echo("Environment:")
    env = load_env_config()
    if env:
        for k, v in sorted(env.items()):
            click.echo(f"  {k}: {v}")
    else:
        click.echo("  (no environment variables set)")

    path = find_config_file(cwd)
    click.echo(f"\nConfig file: {path if path else '(none, using defaults)'}")

    config = load_config(cwd)
    theme = config.theme
    click.echo("\nTheme:")
    click.echo(f"  powerline: {theme.powerline}")
    click.echo(f"  separator_style: {theme.separator_style.value}")
    click.echo(f"  color_mode: {theme.color_mode.value}")

    click.echo("\nSegments:")
    for spec in config.segments:
        options = ", ".join(f"{k}={v}" for k, v in sorted(spec.display.items()))
        click.echo(f"  {spec.type:<10} fg={spec.colors.fg} bg={spec.colors.bg}  {options}")


@click.command()
@click.option("--half-life", "half_life", default=7.0, type=float, help="Half-life in minutes")
@click.option("--logs-dir", default=None, type=click.Path(file_okay=False), help="Transcript root")
def pace_cmd(half_life: float, logs_dir: str | None) -> None:
    """Show the current spend pace and lookback totals."""
    from datetime import timedelta
    from pathlib import Path

    from rich.console import Console
    from rich.table import Table

    from chud.core.config import projects_dir
    from chud.usage.events import TranscriptEventSource
    from chud.usage.pace import PaceAggregator, lookback_window

    if half_life <= 0:
        raise click.BadParameter("must be positive", param_hint="--half-life")

    hl = timedelta(minutes=half_life)
    source = TranscriptEventSource(Path(logs_dir) if logs_dir else projects_dir())
    result = PaceAggregator(source, half_life=hl).aggregate()

    lookback_minutes = lookback_window(hl).total_seconds() / 60
    table = Table(title=f"Spend pace (half-life {half_life:g}m, lookback {lookback_minutes:g}m)")
    table.add_column("Metric", style="bold #94a3b8")
    table.add_column("Value", justify="right", style="#e2e8f0")
    table.add_row("Pace", f"[#34d399]${result.pace:.2f}/hr[/]")
    table.add_row("Total cost", f"${result.total_cost:.4f}")
    table.add_row("Events", str(result.event_count))
    table.add_row("Input tokens", f"{result.input_tokens:,}")
    table.add_row("Output tokens", f"{result.output_tokens:,}")
    table.add_row("Cache tokens", f"{result.cache_tokens:,}")
    table.add_row("Active minutes", f"{result.active_minutes:.1f}")
    Console().print(table)


@click.command()
@click.option("--cwd", default=None, help="Working directory for the sample session")
@click.option("--used", default=42.0, type=float, help="Sample context-window usage percentage")
def preview_cmd(cwd: str | None, used: float) -> None:
    """Render the status line for a sample session."""
    from chud.cli.main import render_from_payload

    payload = {
        "cwd": cwd or os.getcwd(),
        "model": {"id": "claude-sonnet-4-5"},
        "context_window": {
            "used_percentage": used,
            "remaining_percentage": max(100.0 - used, 0.0),
        },
    }
    click.echo(render_from_payload(payload))
