"""Style catalog CLI command."""

from __future__ import annotations

import click
from rich.table import Table

from reelsmith.cli.ui import console, format_style
from reelsmith.prompts import DEFAULT_STYLE, DURATION_OPTIONS, STYLE_OPTIONS


@click.command("styles")
def styles() -> None:
    """List the available video styles and durations."""
    table = Table(title="Video Styles", show_lines=False)
    table.add_column("Style")
    table.add_column("Label", style="cyan")
    table.add_column("Description", style="white")
    for option in STYLE_OPTIONS:
        marker = " (default)" if option.tag == DEFAULT_STYLE else ""
        table.add_row(format_style(option.tag), option.label + marker, option.description)
    console.print(table)

    durations = ", ".join(f"{d.seconds}s ({d.description})" for d in DURATION_OPTIONS)
    console.print(f"\n[dim]Durations: {durations}[/dim]")


def register(cli: click.Group) -> None:
    cli.add_command(styles)
