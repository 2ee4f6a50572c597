"""Notification sinks for running outside the game."""

from dataclasses import dataclass
from typing import List
import bittensor as bt

from sciencefunding.reward_engine.interfaces.notification_sink import NotificationSink, Severity


@dataclass(frozen=True)
class Notification:
    title: str
    body: str
    severity: Severity


class CollectingNotificationSink(NotificationSink):
    """Keeps every posted notification in memory."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def post_notification(self, title: str, body: str, severity: Severity) -> None:
        self.notifications.append(Notification(title=title, body=body, severity=severity))

    def by_severity(self, severity: Severity) -> List[Notification]:
        return [n for n in self.notifications if n.severity == severity]


class LoggingNotificationSink(CollectingNotificationSink):
    """Collects notifications and also writes them to the log."""

    def post_notification(self, title: str, body: str, severity: Severity) -> None:
        super().post_notification(title, body, severity)
        if severity == Severity.ERROR:
            bt.logging.error(f"{title}\n{body}")
        else:
            bt.logging.info(f"{title}\n{body}")
