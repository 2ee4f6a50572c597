"""Abstract interface for user-facing notifications."""

from abc import ABC, abstractmethod
from enum import Enum


class Severity(Enum):
    INFO = "info"
    ERROR = "error"


class NotificationSink(ABC):
    """Displays a message to the player."""

    @abstractmethod
    def post_notification(self, title: str, body: str, severity: Severity) -> None:
        """
        Post one notification.

        Args:
            title: Short headline
            body: Full message text, may span several lines
            severity: INFO for reward batches, ERROR for configuration problems
        """
        pass
