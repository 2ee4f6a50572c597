"""
Reward accumulation system for Science Funding.

Science events are converted into funds and reputation, credited to the
active ledgers, and batched into a single player notification.
"""

from .accumulator import RewardAccumulator

__all__ = [
    "RewardAccumulator",
]
