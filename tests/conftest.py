"""
Global pytest configuration and fixtures.

Provides in-memory collaborators and settings-file helpers so tests never
touch the packaged settings or a real save file.
"""

import pytest

from sciencefunding.host.ledgers import InMemoryFundsLedger, InMemoryReputationLedger
from sciencefunding.host.notifications import CollectingNotificationSink
from sciencefunding.reward_engine.models.report import Report


def settings_text(funds="1000", rep="1", queue_length="5"):
    """Settings file body; pass None to leave a key out."""
    lines = ["SCIENCE_FUNDING_SETTINGS", "{"]
    for key, value in (("funds", funds), ("rep", rep), ("queueLength", queue_length)):
        if value is not None:
            lines.append(f"\t{key} = {value}")
    lines.append("}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_settings(tmp_path):
    """Write a settings file into tmp_path and return its path."""
    def _write(funds="1000", rep="1", queue_length="5", text=None):
        path = tmp_path / "settings.cfg"
        path.write_text(text if text is not None else settings_text(funds, rep, queue_length))
        return path
    return _write


@pytest.fixture
def sink():
    return CollectingNotificationSink()


@pytest.fixture
def funds_ledger():
    return InMemoryFundsLedger()


@pytest.fixture
def reputation_ledger():
    return InMemoryReputationLedger()


@pytest.fixture
def sample_reports():
    return [
        Report(subject="Crew Report", funds=5000.0, reputation=5.0),
        Report(subject="EVA Report", funds=3000.0, reputation=3.0),
        Report(subject="Surface Sample", funds=1000.0, reputation=1.0),
    ]


# Performance optimization: disable logging during tests unless explicitly enabled
@pytest.fixture(autouse=True)
def fast_logging():
    """
    Reduce logging verbosity during tests for better performance.
    """
    import logging
    import bittensor as bt

    logging.getLogger().setLevel(logging.WARNING)
    bt.logging.set_debug(False)

    yield

    logging.getLogger().setLevel(logging.INFO)
