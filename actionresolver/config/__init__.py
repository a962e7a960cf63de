"""Configuration for the resolution pipeline."""

from actionresolver.config.settings import (
    DEFAULT_SETTINGS,
    ResolverSettings,
    load_settings,
    save_settings,
)

__all__ = ["DEFAULT_SETTINGS", "ResolverSettings", "load_settings", "save_settings"]
