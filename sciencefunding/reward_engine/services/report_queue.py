"""FIFO buffer of pending reports and its persistence."""

from collections import deque
from typing import Iterable, Iterator, List, Tuple
import bittensor as bt

from sciencefunding.persistence.config_node import ConfigNode
from sciencefunding.utils.config import QUEUE_NODE_NAME, REPORT_NODE_NAME
from sciencefunding.utils.error_handling import RecordParseError
from ..models.report import Report


class ReportQueue:
    """
    Ordered queue of reports waiting to be shown to the player.

    The queue never rejects a report. Deciding when to flush is up to the
    caller, which compares len(queue) to its configured capacity.
    """

    def __init__(self, reports: Iterable[Report] = ()):
        self._items = deque(reports)

    def enqueue(self, report: Report) -> None:
        self._items.append(report)

    def size(self) -> int:
        return len(self._items)

    def drain_all(self) -> List[Report]:
        """Remove and return every report, oldest first. Empty queue returns []."""
        drained = list(self._items)
        self._items.clear()
        return drained

    @property
    def items(self) -> Tuple[Report, ...]:
        return tuple(self._items)

    def serialize(self) -> List[ConfigNode]:
        """One REPORT record per queued report, oldest first."""
        return [report.to_node() for report in self._items]

    @classmethod
    def restore(cls, records: Iterable[ConfigNode]) -> 'ReportQueue':
        """
        Rebuild a queue from saved REPORT records.

        A record that fails to parse is logged and skipped; the remaining
        records are still restored in their original order.

        Args:
            records: Saved REPORT records, oldest first

        Returns:
            ReportQueue holding every record that parsed
        """
        queue = cls()
        skipped = 0

        for record in records:
            try:
                queue.enqueue(Report.from_node(record))
            except RecordParseError as e:
                skipped += 1
                bt.logging.warning(f"Bad value found in queue, skipping ({e}):\n{record}")

        if skipped:
            bt.logging.warning(f"Skipped {skipped} unreadable records while restoring queue")

        return queue

    @classmethod
    def load_from(cls, state: ConfigNode) -> 'ReportQueue':
        """
        Rebuild the queue from the QUEUE section of a session state document.

        A state without a QUEUE section gives an empty queue, and an empty
        QUEUE section is added so later saves have somewhere to write.
        """
        queue_node = state.get_node(QUEUE_NODE_NAME)
        if queue_node is None:
            bt.logging.info("No queue node to load")
            state.add_node(QUEUE_NODE_NAME)
            return cls()

        return cls.restore(queue_node.get_nodes(REPORT_NODE_NAME))

    def save_to(self, state: ConfigNode) -> ConfigNode:
        """Replace the QUEUE section of ``state`` with the current contents."""
        state.remove_nodes(QUEUE_NODE_NAME)
        queue_node = state.add_node(QUEUE_NODE_NAME)
        for record in self.serialize():
            queue_node.add_node(record)
        return queue_node

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Report]:
        return iter(tuple(self._items))

    def __repr__(self) -> str:
        return f"ReportQueue({len(self._items)} reports)"
