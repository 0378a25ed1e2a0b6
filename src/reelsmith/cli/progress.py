"""Cosmetic generation progress.

The gateway reports no progress; the bar only signals that work is ongoing.
It advances by a random step on a fixed interval and holds at 90% until the
request resolves.
"""

from __future__ import annotations

import random
from typing import Callable, TypeVar

import anyio
import anyio.to_thread
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

T = TypeVar("T")

PROGRESS_CAP = 90.0
MAX_STEP = 15.0
TICK_INTERVAL_S = 2.0

_STAGES = (
    (10, "Initializing video generation..."),
    (30, "Processing your text content..."),
    (50, "Applying video style and effects..."),
    (70, "Generating visual elements..."),
    (90, "Rendering vertical video..."),
    (100, "Finalizing video output..."),
)


def progress_message(percent: float) -> str:
    for upper, message in _STAGES:
        if percent < upper:
            return message
    return "Video generation complete!"


def next_progress(current: float, rng: random.Random | None = None) -> float:
    if current >= PROGRESS_CAP:
        return PROGRESS_CAP
    step = (rng or random).random() * MAX_STEP
    return min(PROGRESS_CAP, current + step)


def run_with_progress(
    work: Callable[[], T],
    *,
    console: Console,
    interval: float = TICK_INTERVAL_S,
    rng: random.Random | None = None,
) -> T:
    """Run `work` in a worker thread while a simulated progress bar advances.

    On cancellation the worker thread is abandoned rather than awaited, so an
    interrupt surfaces even while a request is still blocked on the network.
    """
    columns = (
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
    )
    with Progress(*columns, console=console, transient=False) as progress:
        task = progress.add_task(progress_message(0.0), total=100)

        async def _tick() -> None:
            percent = 0.0
            while True:
                await anyio.sleep(interval)
                percent = next_progress(percent, rng)
                progress.update(task, completed=percent, description=progress_message(percent))

        async def _run() -> tuple[T | None, Exception | None]:
            async with anyio.create_task_group() as tg:
                tg.start_soon(_tick)
                try:
                    return await anyio.to_thread.run_sync(work, abandon_on_cancel=True), None
                except Exception as exc:
                    return None, exc
                finally:
                    tg.cancel_scope.cancel()

        result, error = anyio.run(_run)
        if error is not None:
            raise error
        progress.update(task, completed=100, description=progress_message(100))
    return result  # type: ignore[return-value]
