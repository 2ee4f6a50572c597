"""Tests for the reward accumulator."""

import pytest
from unittest.mock import Mock

from sciencefunding.host.event_source import ScienceEventSource
from sciencefunding.persistence.config_node import ConfigNode
from sciencefunding.reward_engine.accumulator import RewardAccumulator, compose_report_body
from sciencefunding.reward_engine.interfaces.notification_sink import Severity
from sciencefunding.reward_engine.models.report import Report
from sciencefunding.reward_engine.models.science_event import ScienceEvent
from sciencefunding.reward_engine.services.report_queue import ReportQueue


@pytest.fixture
def accumulator(write_settings, sink, funds_ledger, reputation_ledger):
    """Accumulator with capacity 2, funds x1000, rep x1, loaded from an empty state."""
    acc = RewardAccumulator(
        notification_sink=sink,
        funds_ledger=funds_ledger,
        reputation_ledger=reputation_ledger,
        settings_path=write_settings(funds="1000", rep="1", queue_length="2")
    )
    acc.on_load(ConfigNode())
    return acc


class TestHandle:
    """Test per-event processing."""

    def test_credits_ledgers_and_queues(self, accumulator, funds_ledger, reputation_ledger, sink):
        report = accumulator.handle(ScienceEvent(amount=5, subject="Crew Report"))

        assert report == Report(subject="Crew Report", funds=5000, reputation=5)
        assert funds_ledger.credits == [5000]
        assert reputation_ledger.credits == [5]
        assert accumulator.queue.items == (report,)
        assert sink.notifications == []

    def test_zero_science_is_noop(self, accumulator, funds_ledger, reputation_ledger, sink):
        assert accumulator.handle(ScienceEvent(amount=0, subject="Nothing")) is None

        assert len(accumulator.queue) == 0
        assert funds_ledger.credits == []
        assert reputation_ledger.credits == []
        assert sink.notifications == []

    def test_missing_ledgers_are_skipped(self, write_settings, sink):
        acc = RewardAccumulator(notification_sink=sink, settings_path=write_settings())
        acc.on_load(ConfigNode())

        report = acc.handle(ScienceEvent(amount=2, subject="Sandbox Report"))

        assert report is not None
        assert len(acc.queue) == 1

    def test_only_reputation_ledger(self, write_settings, sink, reputation_ledger):
        acc = RewardAccumulator(
            notification_sink=sink,
            reputation_ledger=reputation_ledger,
            settings_path=write_settings()
        )
        acc.on_load(ConfigNode())

        acc.handle(ScienceEvent(amount=2, subject="Science Report"))

        assert reputation_ledger.credits == [2.0]


class TestFlush:
    """Test the threshold trigger and the flushed notification."""

    def test_threshold_is_exceeded_not_reached(self, write_settings, sink):
        capacity = 4
        acc = RewardAccumulator(notification_sink=sink, settings_path=write_settings(queue_length=str(capacity)))
        acc.on_load(ConfigNode())

        for i in range(capacity):
            acc.handle(ScienceEvent(amount=1, subject=f"Report {i}"))

        assert len(acc.queue) == capacity
        assert sink.notifications == []

        acc.handle(ScienceEvent(amount=1, subject="One too many"))

        assert len(acc.queue) == 0
        assert len(sink.notifications) == 1

    def test_end_to_end_scenario(self, accumulator, sink):
        accumulator.handle(ScienceEvent(amount=5, subject="Crew Report"))
        assert accumulator.queue.items == (Report(subject="Crew Report", funds=5000, reputation=5),)
        assert sink.notifications == []

        accumulator.handle(ScienceEvent(amount=3, subject="EVA Report"))
        assert len(accumulator.queue) == 2
        assert sink.notifications == []

        accumulator.handle(ScienceEvent(amount=1, subject="Surface Sample"))
        assert len(accumulator.queue) == 0
        assert len(sink.notifications) == 1

        notification = sink.notifications[0]
        assert notification.title == "New funds available!"
        assert notification.severity == Severity.INFO
        assert notification.body.splitlines() == [
            "Your recent research efforts have granted you the following rewards:",
            "",
            "Crew Report: 5000.0 funds, 5.0 rep.",
            "EVA Report: 3000.0 funds, 3.0 rep.",
            "Surface Sample: 1000.0 funds, 1.0 rep.",
        ]

    def test_flush_on_empty_queue_is_noop(self, accumulator, sink):
        assert accumulator.flush() == []
        assert sink.notifications == []

    def test_manual_flush(self, accumulator, sink):
        accumulator.handle(ScienceEvent(amount=1, subject="Crew Report"))

        flushed = accumulator.flush()

        assert [r.subject for r in flushed] == ["Crew Report"]
        assert len(sink.notifications) == 1

    def test_flush_writes_rewards_log(self, accumulator):
        rewards_logger = Mock()
        accumulator.rewards_logger = rewards_logger

        for amount, subject in [(5, "Crew Report"), (3, "EVA Report"), (1, "Surface Sample")]:
            accumulator.handle(ScienceEvent(amount=amount, subject=subject))

        logged = [call.args[0] for call in rewards_logger.reward.call_args_list]
        assert logged == [
            "Crew Report: 5000.0 funds, 5.0 rep.",
            "EVA Report: 3000.0 funds, 3.0 rep.",
            "Surface Sample: 1000.0 funds, 1.0 rep.",
        ]
        first_fields = rewards_logger.reward.call_args_list[0].kwargs["extra"]
        assert first_fields == {"subject": "Crew Report", "funds": 5000.0, "rep": 5.0}

    def test_compose_report_body_terminates_every_line(self, sample_reports):
        body = compose_report_body(sample_reports[:1])
        assert body == (
            "Your recent research efforts have granted you the following rewards:\n"
            "\n"
            "Crew Report: 5000.0 funds, 5.0 rep.\n"
        )


class TestConfiguration:
    """Test configuration reload and fallback."""

    def test_loads_settings_file(self, write_settings, sink):
        acc = RewardAccumulator(notification_sink=sink, settings_path=write_settings("20", "0.5", "9"))

        settings = acc.load_configuration()

        assert settings.funds_multiplier == 20.0
        assert settings.reputation_multiplier == 0.5
        assert settings.queue_capacity == 9
        assert sink.notifications == []

    def test_missing_queue_length_falls_back(self, write_settings, sink):
        acc = RewardAccumulator(
            notification_sink=sink,
            settings_path=write_settings(funds="20", rep="0.5", queue_length=None)
        )

        acc.on_load(ConfigNode())

        assert acc.settings.funds_multiplier == 1000.0
        assert acc.settings.reputation_multiplier == 1.0
        assert acc.settings.queue_capacity == 5
        assert len(sink.notifications) == 1
        assert sink.notifications[0].severity == Severity.ERROR
        assert sink.notifications[0].title == "ScienceFunding error!"

    def test_missing_settings_file_falls_back(self, tmp_path, sink):
        acc = RewardAccumulator(notification_sink=sink, settings_path=tmp_path / "nope.cfg")

        acc.on_load(ConfigNode())

        assert acc.settings.queue_capacity == 5
        assert len(sink.by_severity(Severity.ERROR)) == 1

    def test_fallback_settings_still_convert(self, write_settings, sink, funds_ledger):
        acc = RewardAccumulator(
            notification_sink=sink,
            funds_ledger=funds_ledger,
            settings_path=write_settings(text="SCIENCE_FUNDING_SETTINGS\n{\n\tfunds = oops\n")
        )
        acc.on_load(ConfigNode())

        acc.handle(ScienceEvent(amount=2, subject="Crew Report"))

        assert funds_ledger.credits == [2000.0]

    def test_configuration_reloaded_each_load(self, write_settings, sink):
        path = write_settings(funds="10")
        acc = RewardAccumulator(notification_sink=sink, settings_path=path)
        acc.on_load(ConfigNode())
        assert acc.settings.funds_multiplier == 10.0

        write_settings(funds="30")
        acc.on_load(ConfigNode())

        assert acc.settings.funds_multiplier == 30.0


class TestSessionState:
    """Test load/save of the pending queue and event subscription."""

    def test_queue_survives_save_and_load(self, accumulator, write_settings, sink):
        accumulator.handle(ScienceEvent(amount=5, subject="Crew Report"))
        accumulator.handle(ScienceEvent(amount=3, subject="EVA Report"))
        state = ConfigNode()
        accumulator.on_save(state)

        reloaded = RewardAccumulator(notification_sink=sink, settings_path=write_settings(queue_length="2"))
        reloaded.on_load(ConfigNode.parse(state.to_text()))

        assert reloaded.queue.items == accumulator.queue.items

        reloaded.handle(ScienceEvent(amount=1, subject="Surface Sample"))
        assert len(reloaded.queue) == 0
        assert "Crew Report: 5000.0 funds, 5.0 rep." in sink.notifications[-1].body

    def test_load_replaces_in_memory_queue(self, accumulator):
        accumulator.handle(ScienceEvent(amount=5, subject="Crew Report"))

        accumulator.on_load(ConfigNode())

        assert len(accumulator.queue) == 0

    def test_load_skips_corrupted_records(self, accumulator, sample_reports):
        state = ConfigNode()
        ReportQueue(sample_reports[:2]).save_to(state)
        bad = state.get_node("QUEUE").add_node("REPORT")
        bad.add_value("funds", "corrupted")

        accumulator.on_load(state)

        assert accumulator.queue.items == tuple(sample_reports[:2])

    def test_start_and_stop_subscription(self, accumulator):
        source = ScienceEventSource()

        accumulator.start(source)
        source.fire(5, "Crew Report")
        accumulator.stop(source)
        source.fire(3, "EVA Report")

        assert [r.subject for r in accumulator.queue] == ["Crew Report"]
        assert len(source) == 0


def test_single_package_version():
    import sciencefunding.reward_engine as reward_engine
    from sciencefunding.utils import config

    assert getattr(reward_engine, "__version__", config.__version__) == config.__version__ == "1.3.0"
