"""Configuration for the media type registry."""

from .settings import DEFAULT_UPSTREAM_URL, Settings, TableSettings, load_settings

__all__ = ["Settings", "TableSettings", "load_settings", "DEFAULT_UPSTREAM_URL"]
