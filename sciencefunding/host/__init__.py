"""Host-side collaborators: event feed, ledgers and notification sinks."""

from .event_source import ScienceEventSource
from .ledgers import InMemoryFundsLedger, InMemoryReputationLedger
from .notifications import Notification, CollectingNotificationSink, LoggingNotificationSink

__all__ = [
    "ScienceEventSource",
    "InMemoryFundsLedger",
    "InMemoryReputationLedger",
    "Notification",
    "CollectingNotificationSink",
    "LoggingNotificationSink",
]
