"""Core services for the reward accumulation system."""

from .report_queue import ReportQueue
from .reward_converter import convert

__all__ = [
    "ReportQueue",
    "convert",
]
