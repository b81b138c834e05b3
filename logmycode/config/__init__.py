"""Configuration package."""

from logmycode.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
