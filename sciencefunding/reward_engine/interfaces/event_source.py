"""Abstract interface for the host's science event feed."""

from abc import ABC, abstractmethod
from typing import Callable

ScienceHandler = Callable[[float, str], None]


class EventSource(ABC):
    """Delivers ``(amount, subject)`` science events to registered handlers."""

    @abstractmethod
    def add(self, handler: ScienceHandler) -> None:
        pass

    @abstractmethod
    def remove(self, handler: ScienceHandler) -> None:
        pass
