"""
Session runner: one load -> listen -> save cycle, as the game would drive it.

Used by scripts/replay_science_events.py to replay recorded science events
against a save file outside the game.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union
import bittensor as bt

from sciencefunding.host.event_source import ScienceEventSource
from sciencefunding.host.ledgers import InMemoryFundsLedger, InMemoryReputationLedger
from sciencefunding.host.notifications import LoggingNotificationSink, Notification
from sciencefunding.persistence.state_store import load_state, save_state
from sciencefunding.reward_engine.accumulator import RewardAccumulator
from sciencefunding.reward_engine.models.science_event import ScienceEvent
from sciencefunding.utils.config import SETTINGS_PATH, STATE_PATH, REWARDS_LOG_RETENTION_SIZE
from sciencefunding.utils.logging import setup_rewards_logger


@dataclass
class SessionResult:
    """What one session paid out and what it left pending."""
    funds: float
    reputation: float
    pending_reports: int
    state_path: str
    notifications: List[Notification] = field(default_factory=list)


def load_events(events_path: Union[str, Path]) -> List[ScienceEvent]:
    """
    Load recorded science events from a JSON list of ``{"amount", "subject"}`` objects.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the JSON is invalid or an entry is malformed
    """
    with open(events_path, 'r', encoding='utf-8') as f:
        try:
            raw_events = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in events file {events_path}: {e}")

    if not isinstance(raw_events, list):
        raise ValueError(f"Events file must hold a list, got {type(raw_events).__name__}")

    events = []
    for index, entry in enumerate(raw_events):
        try:
            events.append(ScienceEvent(amount=float(entry['amount']), subject=str(entry['subject'])))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed event at index {index}: {entry!r} ({e})")

    return events


def run_session(
    events: Iterable[ScienceEvent],
    settings_path: Union[str, Path, None] = None,
    state_path: Union[str, Path, None] = None,
    funds_enabled: bool = True,
    reputation_enabled: bool = True,
    rewards_log_dir: Optional[str] = None
) -> SessionResult:
    """
    Replay science events through one full session.

    Args:
        events: Science events, in arrival order
        settings_path: Reward settings file (defaults to SETTINGS_PATH)
        state_path: Session state file, read at start and rewritten at end
            (defaults to STATE_PATH)
        funds_enabled: Whether a funds ledger is active (career games)
        reputation_enabled: Whether a reputation ledger is active (not sandbox)
        rewards_log_dir: Directory for the rewards log, or None to skip it

    Returns:
        SessionResult with ledger totals, notifications and pending queue size
    """
    state_path = Path(state_path or STATE_PATH)

    funds_ledger = InMemoryFundsLedger() if funds_enabled else None
    reputation_ledger = InMemoryReputationLedger() if reputation_enabled else None
    sink = LoggingNotificationSink()
    rewards_logger = (
        setup_rewards_logger(rewards_log_dir, REWARDS_LOG_RETENTION_SIZE)
        if rewards_log_dir is not None else None
    )

    accumulator = RewardAccumulator(
        notification_sink=sink,
        funds_ledger=funds_ledger,
        reputation_ledger=reputation_ledger,
        settings_path=settings_path or SETTINGS_PATH,
        rewards_logger=rewards_logger
    )
    event_source = ScienceEventSource()

    state = load_state(state_path)
    accumulator.on_load(state)
    accumulator.start(event_source)

    try:
        for event in events:
            event_source.fire(event.amount, event.subject)
    finally:
        accumulator.on_save(state)
        save_state(state, state_path)
        accumulator.stop(event_source)

    result = SessionResult(
        funds=funds_ledger.balance if funds_ledger else 0.0,
        reputation=reputation_ledger.reputation if reputation_ledger else 0.0,
        pending_reports=accumulator.queue.size(),
        state_path=str(state_path),
        notifications=list(sink.notifications)
    )

    bt.logging.info(
        f"Session finished: {result.funds:.1f} funds, {result.reputation:.1f} rep, "
        f"{result.pending_reports} reports pending"
    )
    return result
