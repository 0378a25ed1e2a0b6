"""Configuration CLI commands."""

from __future__ import annotations

import click
from rich.table import Table

from reelsmith.cli.ui import console
from reelsmith.config import settings


def _mask(secret: str) -> str:
    if not secret:
        return "[dim](unset)[/dim]"
    return f"{secret[:4]}…" if len(secret) > 8 else "****"


@click.group()
def config() -> None:
    """Inspect configuration."""


@config.command("show")
def config_show() -> None:
    """Show key configuration settings."""
    table = Table(title="Reelsmith Configuration", show_lines=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    timeout = settings.generation_timeout_s
    table.add_row("Environment", settings.environment)
    table.add_row("Generation Provider", settings.generation_provider)
    table.add_row("Generation API URL", settings.generation_api_url)
    table.add_row("Generation Model", settings.generation_model)
    table.add_row("Generation API Key", _mask(settings.generation_api_key))
    table.add_row("Generation Timeout", "none" if timeout is None else f"{timeout}s")
    table.add_row("API Host", settings.api_host)
    table.add_row("API Port", str(settings.api_port))
    table.add_row("Gateway URL", settings.gateway_url)
    table.add_row("History File", settings.history_path)
    table.add_row("History Limit", str(settings.history_limit))
    table.add_row("Output Dir", settings.output_dir)

    console.print(table)


def register(cli: click.Group) -> None:
    cli.add_command(config)
