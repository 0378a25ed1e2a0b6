"""Common FastAPI dependencies for the Reelsmith API."""

from __future__ import annotations

from reelsmith.config import get_settings
from reelsmith.services.generation import GenerationProvider, get_generation_provider

__all__ = ["get_provider"]


def get_provider() -> GenerationProvider:
    """Dependency that returns the configured generation provider.

    Tests override this via `app.dependency_overrides`.
    """

    return get_generation_provider(get_settings())
