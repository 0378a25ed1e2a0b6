"""API route modules."""

from reelsmith.api.routes import generate, health, metrics, styles

__all__ = ["generate", "health", "metrics", "styles"]
