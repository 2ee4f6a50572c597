"""Science reward accumulator - credits each science event and batches the notifications."""

from pathlib import Path
from typing import List, Optional, Union
import logging
import bittensor as bt

from sciencefunding.persistence.config_node import ConfigNode
from sciencefunding.utils.config import (
    SETTINGS_PATH,
    REPORT_TITLE,
    REPORT_HEADER,
    CONFIG_ERROR_TITLE,
    CONFIG_ERROR_MESSAGE,
)
from .interfaces.event_source import EventSource
from .interfaces.ledger import FundsLedger, ReputationLedger
from .interfaces.notification_sink import NotificationSink, Severity
from .models.report import Report
from .models.science_event import ScienceEvent
from .models.settings import Settings
from .services.report_queue import ReportQueue
from .services.reward_converter import convert
from .utils.settings_loader import load_settings


def compose_report_body(reports: List[Report]) -> str:
    """Header, blank line, then one rendered line per report in arrival order."""
    lines = [REPORT_HEADER, ""]
    lines.extend(report.render() for report in reports)
    return "\n".join(lines) + "\n"


class RewardAccumulator:
    """
    Listens for science events, pays out funds and reputation, and tells the
    player about it once enough reports have piled up.

    Every event is handled to completion, flush included, before the next one
    is accepted. The queue belongs to this instance for one session: it is
    rebuilt in on_load() and written back in on_save().
    """

    def __init__(
        self,
        notification_sink: NotificationSink,
        funds_ledger: Optional[FundsLedger] = None,
        reputation_ledger: Optional[ReputationLedger] = None,
        settings_path: Union[str, Path, None] = None,
        rewards_logger: Optional[logging.Logger] = None
    ):
        self.notifications = notification_sink
        self.funds_ledger = funds_ledger
        self.reputation_ledger = reputation_ledger
        self.settings_path = settings_path or SETTINGS_PATH
        self.rewards_logger = rewards_logger

        self.settings = Settings.defaults()
        self.queue = ReportQueue()

    # Subscription

    def start(self, event_source: EventSource) -> None:
        event_source.add(self.on_science_event)
        bt.logging.info("listening for science...")

    def stop(self, event_source: EventSource) -> None:
        event_source.remove(self.on_science_event)
        bt.logging.info("Stopped listening for science, removing handler.")

    # Session boundaries

    def load_configuration(self) -> Settings:
        """
        Reload the reward settings.

        On failure the fixed defaults are used and a single error notification
        is posted; the accumulator keeps working either way.
        """
        settings, error = load_settings(self.settings_path)
        self.settings = settings

        if error is not None:
            self.notifications.post_notification(
                CONFIG_ERROR_TITLE,
                CONFIG_ERROR_MESSAGE,
                Severity.ERROR
            )

        bt.logging.info(
            f"Configuration is {settings.funds_multiplier}, "
            f"{settings.reputation_multiplier}, {settings.queue_capacity}"
        )
        return settings

    def on_load(self, state: ConfigNode) -> None:
        """Reload settings and rebuild the pending queue from the session state."""
        self.load_configuration()
        self.queue = ReportQueue.load_from(state)
        bt.logging.info(f"Loaded {self.queue.size()} records")

    def on_save(self, state: ConfigNode) -> None:
        """Write the pending queue into the session state, replacing any previous copy."""
        bt.logging.debug("Saving message queue")
        self.queue.save_to(state)
        bt.logging.info(f"Saved {self.queue.size()} records")

    # Events

    def on_science_event(self, amount: float, subject: str) -> None:
        self.handle(ScienceEvent(amount=amount, subject=subject))

    def handle(self, event: ScienceEvent) -> Optional[Report]:
        """
        Credit one science event and queue its report.

        Returns:
            The queued Report, or None for a zero-science event
        """
        bt.logging.debug(f"Received {event.amount} science points for '{event.subject}'")

        report = convert(
            event.amount,
            event.subject,
            self.settings.funds_multiplier,
            self.settings.reputation_multiplier
        )
        if report is None:
            return None

        # Cannot award funds outside career games
        if self.funds_ledger is not None:
            self.funds_ledger.credit_funds(report.funds)
            bt.logging.debug(f"Added {report.funds} funds")
        else:
            bt.logging.debug("No funds ledger active, skipping funds")

        # Cannot award reputation in sandbox
        if self.reputation_ledger is not None:
            self.reputation_ledger.credit_reputation(report.reputation)
            bt.logging.debug(f"Added {report.reputation} reputation")
        else:
            bt.logging.debug("No reputation ledger active, skipping reputation")

        self.queue.enqueue(report)
        if self.queue.size() > self.settings.queue_capacity:
            self.flush()

        return report

    def flush(self) -> List[Report]:
        """
        Empty the queue into a single notification.

        Returns:
            The reports that were shown, oldest first
        """
        batch = self.queue.drain_all()
        if not batch:
            return batch

        bt.logging.info(f"💰 Posting the user notification for {len(batch)} reports")
        self.notifications.post_notification(
            REPORT_TITLE,
            compose_report_body(batch),
            Severity.INFO
        )

        if self.rewards_logger is not None:
            for report in batch:
                self.rewards_logger.reward(
                    report.render(),
                    extra={"subject": report.subject, "funds": report.funds, "rep": report.reputation}
                )

        return batch
