"""In-process science event feed."""

from typing import List
import bittensor as bt

from sciencefunding.reward_engine.interfaces.event_source import EventSource, ScienceHandler


class ScienceEventSource(EventSource):
    """Calls every registered handler, in registration order, for each event."""

    def __init__(self):
        self._handlers: List[ScienceHandler] = []

    def add(self, handler: ScienceHandler) -> None:
        if handler in self._handlers:
            bt.logging.debug(f"Handler already registered: {handler}")
            return
        self._handlers.append(handler)

    def remove(self, handler: ScienceHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def fire(self, amount: float, subject: str) -> None:
        for handler in list(self._handlers):
            handler(amount, subject)

    def __len__(self) -> int:
        return len(self._handlers)
