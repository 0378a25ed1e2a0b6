"""History CLI commands: list, preview, download and clear past generations."""

from __future__ import annotations

import shutil
from pathlib import Path

import click

from reelsmith.cli.ui import console, format_relative, format_style, render_history_table
from reelsmith.config import settings
from reelsmith.history import GeneratedVideoRecord, HistoryStore, dumps_records


def _store() -> HistoryStore:
    return HistoryStore(settings.history_path, limit=settings.history_limit)


def _require_record(store: HistoryStore, record_id: str) -> GeneratedVideoRecord:
    record = store.get(record_id)
    if record is None:
        raise click.ClickException(f"No video with id {record_id} in history")
    return record


@click.group()
def history() -> None:
    """Inspect and manage generated videos."""


@history.command("list")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def history_list(output_json: bool) -> None:
    """List past generations, newest first."""
    store = _store()
    records = store.records
    if output_json:
        click.echo(dumps_records(records))
        return
    if not records:
        console.print("[dim]No videos yet. Your generated videos will appear here.[/dim]")
        return

    render_history_table(records)
    plural = "" if len(records) == 1 else "s"
    console.print(f"\n[dim]{len(records)} video{plural}[/dim]")
    if store.is_full:
        console.print(f"[yellow]Only the last {store.limit} videos are kept in history[/yellow]")


@history.command("show")
@click.argument("record_id")
def history_show(record_id: str) -> None:
    """Show one generation and where its video lives."""
    record = _require_record(_store(), record_id)
    available = Path(record.video_path).is_file()

    console.print(f"[bold]{record.id}[/bold]  {format_style(record.style)}  {record.duration}s")
    console.print(f"  created: {format_relative(record.created_at)}")
    console.print(f"  text:    {record.text}")
    if available:
        console.print(f"  file:    {record.video_path}")
    else:
        console.print(f"  file:    [red]missing[/red] ({record.video_path})")


@history.command("download")
@click.argument("record_id")
@click.argument(
    "destination",
    type=click.Path(path_type=Path),
    default=Path("."),
    required=False,
)
def history_download(record_id: str, destination: Path) -> None:
    """Copy a past video to DESTINATION (a file or directory)."""
    record = _require_record(_store(), record_id)
    source = Path(record.video_path)
    if not source.is_file():
        raise click.ClickException(f"Video file for {record_id} is no longer available")

    target = destination / record.download_name if destination.is_dir() else destination
    shutil.copyfile(source, target)
    console.print(f"[green]✓ Saved[/green] {target}")


@history.command("clear")
@click.option("--delete-files", is_flag=True, help="Also delete the stored video files")
@click.confirmation_option(prompt="Clear the video history?")
def history_clear(delete_files: bool) -> None:
    """Remove every record from the history."""
    removed = _store().clear()
    if delete_files:
        for record in removed:
            Path(record.video_path).unlink(missing_ok=True)
    console.print(f"[green]✓ Cleared[/green] {len(removed)} video(s)")


def register(cli: click.Group) -> None:
    cli.add_command(history)
