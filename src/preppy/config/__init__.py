"""Configuration management."""

from __future__ import annotations

from preppy.config.settings import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings"]
