"""Reelsmith observability module - structured logging.

Usage:
    from reelsmith.observability import get_logger

    logger = get_logger(__name__)
    logger.info("generation_started", style=style)
"""

from __future__ import annotations

from reelsmith.config import settings
from reelsmith.observability.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "init_observability",
]

_OBSERVABILITY_INITIALIZED = False


def init_observability() -> None:
    """Initialize logging for the process (idempotent).

    This is intentionally *not* executed on import so `reelsmith` can be used as a
    library without mutating global logging configuration.
    """
    global _OBSERVABILITY_INITIALIZED
    if _OBSERVABILITY_INITIALIZED:
        return
    configure_logging(settings.log_level)
    _OBSERVABILITY_INITIALIZED = True
