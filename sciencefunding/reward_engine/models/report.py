"""Report model for a single converted science reward."""

from dataclasses import dataclass

from sciencefunding.persistence.config_node import ConfigNode
from sciencefunding.utils.config import REPORT_NODE_NAME
from sciencefunding.utils.error_handling import ErrorMessages, log_and_raise_record_error


@dataclass(frozen=True)
class Report:
    """
    Funds and reputation granted for one science transmission.

    Values are stored unrounded; rounding only happens in render().
    """
    subject: str
    funds: float
    reputation: float

    def render(self) -> str:
        """Render as ``"Crew Report: 5000.0 funds, 5.0 rep."``."""
        return f"{self.subject}: {self.funds:.1f} funds, {self.reputation:.1f} rep."

    def to_node(self) -> ConfigNode:
        """Convert to a REPORT record for saving."""
        node = ConfigNode(REPORT_NODE_NAME)
        node.add_value("funds", repr(float(self.funds)))
        node.add_value("rep", repr(float(self.reputation)))
        node.add_value("subject", self.subject)
        return node

    @classmethod
    def from_node(cls, node: ConfigNode) -> 'Report':
        """
        Create Report from a saved REPORT record.

        Args:
            node: Record with ``funds``, ``rep`` and ``subject`` values

        Returns:
            Report instance

        Raises:
            RecordParseError: If a field is missing or a number does not parse
        """
        for key in ("funds", "rep", "subject"):
            if not node.has_value(key):
                log_and_raise_record_error(
                    f"{ErrorMessages.MISSING_REQUIRED_FIELD}: '{key}'",
                    record=node
                )

        numbers = {}
        for key in ("funds", "rep"):
            raw_value = node.get_value(key)
            try:
                numbers[key] = float(raw_value)
            except ValueError:
                log_and_raise_record_error(
                    f"{ErrorMessages.INVALID_NUMBER}: '{key}' = {raw_value!r}",
                    record=node
                )

        return cls(
            subject=node.get_value("subject"),
            funds=numbers["funds"],
            reputation=numbers["rep"]
        )
