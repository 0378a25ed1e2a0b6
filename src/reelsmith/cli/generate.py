"""Video generation CLI command."""

from __future__ import annotations

from pathlib import Path

import click

from reelsmith.cli.progress import run_with_progress
from reelsmith.cli.ui import console, format_style
from reelsmith.client import GatewayClient, GatewayError
from reelsmith.config import settings
from reelsmith.history import GeneratedVideoRecord, HistoryStore
from reelsmith.observability.logging import get_logger
from reelsmith.prompts import DEFAULT_STYLE, DURATION_OPTIONS, STYLE_DESCRIPTIONS
from reelsmith.services.generation import MAX_TEXT_LENGTH

logger = get_logger(__name__)


def _check_text(text: str) -> None:
    if not text.strip():
        raise click.BadParameter("Please enter some text for your video", param_hint="TEXT")
    if len(text) > MAX_TEXT_LENGTH:
        raise click.BadParameter(
            f"Text must be less than {MAX_TEXT_LENGTH} characters ({len(text)}/{MAX_TEXT_LENGTH})",
            param_hint="TEXT",
        )


def _remove_video_files(records: list[GeneratedVideoRecord]) -> None:
    for record in records:
        Path(record.video_path).unlink(missing_ok=True)


@click.command("generate")
@click.argument("text")
@click.option(
    "--style",
    type=click.Choice(sorted(STYLE_DESCRIPTIONS)),
    default=DEFAULT_STYLE,
    show_default=True,
    help="Visual style of the video",
)
@click.option(
    "--duration",
    type=click.Choice([str(d.seconds) for d in DURATION_OPTIONS]),
    default="30",
    show_default=True,
    help="Target duration in seconds",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the video file (default: OUTPUT_DIR)",
)
@click.option("--gateway-url", default=None, help="Gateway base URL (default: GATEWAY_URL)")
def generate(
    text: str,
    style: str,
    duration: str,
    output_dir: Path | None,
    gateway_url: str | None,
) -> None:
    """Generate a vertical video from TEXT and add it to the history."""
    _check_text(text)
    seconds = int(duration)
    target_dir = output_dir or Path(settings.output_dir).expanduser()
    base_url = gateway_url or settings.gateway_url

    with GatewayClient(base_url) as client:
        try:
            video = run_with_progress(
                lambda: client.generate(text, style, seconds), console=console
            )
        except GatewayError as exc:
            raise click.ClickException(exc.message) from exc
        except KeyboardInterrupt:
            console.print("\n[yellow]⚠️  Generation interrupted by user[/yellow]")
            raise click.Abort() from None

    record = GeneratedVideoRecord(text=text, style=style, duration=seconds, video_path="")
    target_dir.mkdir(parents=True, exist_ok=True)
    video_path = target_dir / record.download_name
    video_path.write_bytes(video.content)
    record.video_path = str(video_path)

    store = HistoryStore(settings.history_path, limit=settings.history_limit)
    evicted = store.append(record)
    _remove_video_files(evicted)
    logger.info("video_saved", record_id=record.id, path=str(video_path), evicted=len(evicted))

    console.print(
        f"[green]✓ Video ready[/green] {format_style(style)} {seconds}s "
        f"[dim]({len(video.content)} bytes)[/dim]"
    )
    console.print(f"  id:   {record.id}")
    console.print(f"  file: {video_path}")


def register(cli: click.Group) -> None:
    cli.add_command(generate)
