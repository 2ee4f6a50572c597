"""Utility functions for reward engine."""

from .settings_loader import (
    read_settings,
    load_settings
)

__all__ = [
    "read_settings",
    "load_settings",
]
