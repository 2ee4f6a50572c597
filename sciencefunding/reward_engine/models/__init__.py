"""Data models for the reward accumulation system."""

from .report import Report
from .science_event import ScienceEvent
from .settings import Settings

__all__ = [
    "Report",
    "ScienceEvent",
    "Settings",
]
