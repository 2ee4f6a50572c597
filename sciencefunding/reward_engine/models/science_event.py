"""Inbound science event."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScienceEvent:
    """Science points received for one transmitted or recovered experiment."""
    amount: float
    subject: str
