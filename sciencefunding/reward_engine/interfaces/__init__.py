"""Collaborator interfaces for the reward accumulation system."""

from .event_source import EventSource, ScienceHandler
from .ledger import FundsLedger, ReputationLedger
from .notification_sink import NotificationSink, Severity

__all__ = [
    "EventSource",
    "ScienceHandler",
    "FundsLedger",
    "ReputationLedger",
    "NotificationSink",
    "Severity",
]
