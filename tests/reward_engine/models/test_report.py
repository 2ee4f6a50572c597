"""Tests for the Report model."""

import pytest

from sciencefunding.persistence.config_node import ConfigNode
from sciencefunding.reward_engine.models.report import Report
from sciencefunding.utils.error_handling import RecordParseError


def _record(**values):
    node = ConfigNode("REPORT")
    for key, value in values.items():
        node.add_value(key, value)
    return node


class TestRender:
    """Test the player-facing line."""

    def test_one_decimal_formatting(self):
        report = Report(subject="Crew Report", funds=5000, reputation=5)
        assert report.render() == "Crew Report: 5000.0 funds, 5.0 rep."

    def test_rounds_only_when_rendering(self):
        report = Report(subject="Goo", funds=1234.56, reputation=0.04)
        assert report.render() == "Goo: 1234.6 funds, 0.0 rep."
        assert report.funds == 1234.56

    def test_negative_values_render(self):
        report = Report(subject="Penalty", funds=-250.0, reputation=-1.5)
        assert report.render() == "Penalty: -250.0 funds, -1.5 rep."


class TestSerialization:
    """Test conversion to and from REPORT records."""

    def test_to_node_layout(self):
        node = Report(subject="EVA Report", funds=3000.0, reputation=3.0).to_node()

        assert node.name == "REPORT"
        assert [key for key, _ in node.values] == ["funds", "rep", "subject"]
        assert node.get_value("funds") == "3000.0"
        assert node.get_value("rep") == "3.0"
        assert node.get_value("subject") == "EVA Report"

    @pytest.mark.parametrize("report", [
        Report(subject="Crew Report", funds=5000.0, reputation=5.0),
        Report(subject="Mystery Goo = 2", funds=0.1 + 0.2, reputation=1 / 3),
        Report(subject="Negative", funds=-12.75, reputation=-0.001),
    ])
    def test_round_trip_is_exact(self, report):
        assert Report.from_node(report.to_node()) == report

    def test_round_trip_through_document_text(self):
        report = Report(subject="Surface Sample", funds=0.1 + 0.2, reputation=2.5)
        root = ConfigNode()
        root.add_node(report.to_node())

        parsed = ConfigNode.parse(root.to_text())

        assert Report.from_node(parsed.get_node("REPORT")) == report

    def test_parses_integer_text(self):
        report = Report.from_node(_record(funds="5000", rep="5", subject="Crew Report"))
        assert report == Report(subject="Crew Report", funds=5000.0, reputation=5.0)

    @pytest.mark.parametrize("missing", ["funds", "rep", "subject"])
    def test_missing_key_raises(self, missing):
        values = {"funds": "1", "rep": "1", "subject": "X"}
        del values[missing]

        with pytest.raises(RecordParseError) as exc_info:
            Report.from_node(_record(**values))

        assert missing in str(exc_info.value)

    @pytest.mark.parametrize("key", ["funds", "rep"])
    def test_invalid_number_raises(self, key):
        values = {"funds": "1", "rep": "1", "subject": "X"}
        values[key] = "lots"

        with pytest.raises(RecordParseError) as exc_info:
            Report.from_node(_record(**values))

        assert "lots" in str(exc_info.value)
        assert exc_info.value.record is not None

    def test_report_is_immutable(self):
        report = Report(subject="Crew Report", funds=1.0, reputation=1.0)
        with pytest.raises(AttributeError):
            report.funds = 2.0
