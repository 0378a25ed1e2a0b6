"""Reelsmith configuration module."""

from reelsmith.config.settings import Settings, get_settings, reset_settings_cache, settings

__all__ = [
    "settings",
    "Settings",
    "get_settings",
    "reset_settings_cache",
]
