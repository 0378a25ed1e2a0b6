"""Shared CLI UI helpers (Rich formatting)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from rich.console import Console
from rich.table import Table

from reelsmith.history import GeneratedVideoRecord

console = Console()

STYLE_COLORS = {
    "minimal": "grey70",
    "dynamic": "dark_orange",
    "colorful": "magenta",
    "professional": "blue",
    "cinematic": "bold white on grey23",
    "modern": "slate_blue1",
}


def format_style(style: str) -> str:
    """Return colorized style tag for terminal output."""
    color = STYLE_COLORS.get(style, STYLE_COLORS["modern"])
    return f"[{color}]{style}[/{color}]"


def truncate_text(text: str, limit: int = 50) -> str:
    return f"{text[:limit]}..." if len(text) > limit else text


def format_relative(created_at: datetime, now: datetime | None = None) -> str:
    """'Just now' under an hour, '<n>h ago' under a day, else 'Mon D'."""
    now = now or datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    hours = (now - created_at).total_seconds() / 3600
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{int(hours)}h ago"
    return f"{created_at.strftime('%b')} {created_at.day}"


def render_history_table(records: Iterable[GeneratedVideoRecord]) -> None:
    """Render the history list, newest first."""
    table = Table(title="Video History", show_lines=False)
    table.add_column("ID", style="white")
    table.add_column("Text", style="white")
    table.add_column("Style")
    table.add_column("Duration", justify="right", style="cyan")
    table.add_column("Created", style="dim")

    for record in records:
        table.add_row(
            record.id,
            truncate_text(record.text),
            format_style(record.style),
            f"{record.duration}s",
            format_relative(record.created_at),
        )

    console.print(table)


__all__ = [
    "console",
    "format_relative",
    "format_style",
    "render_history_table",
    "truncate_text",
]
