"""Reward settings model."""

from dataclasses import dataclass

from sciencefunding.persistence.config_node import ConfigNode
from sciencefunding.utils.config import (
    DEFAULT_FUNDS_MULTIPLIER,
    DEFAULT_REP_MULTIPLIER,
    DEFAULT_QUEUE_LENGTH,
    SETTINGS_NODE_NAME,
)
from sciencefunding.utils.error_handling import ErrorMessages, log_and_raise_config_error


@dataclass(frozen=True)
class Settings:
    """
    Multipliers applied to each science transmission and the flush threshold.

    A flush happens when the queue holds more than ``queue_capacity`` reports.
    """
    funds_multiplier: float
    reputation_multiplier: float
    queue_capacity: int

    @classmethod
    def defaults(cls) -> 'Settings':
        return cls(
            funds_multiplier=DEFAULT_FUNDS_MULTIPLIER,
            reputation_multiplier=DEFAULT_REP_MULTIPLIER,
            queue_capacity=DEFAULT_QUEUE_LENGTH
        )

    @classmethod
    def from_node(cls, node: ConfigNode) -> 'Settings':
        """
        Create Settings from a settings node.

        Args:
            node: Node with ``funds``, ``rep`` and ``queueLength`` values

        Raises:
            ConfigParseError: If a key is missing or not numeric
        """
        parsed = {}
        for key, parse in (("funds", float), ("rep", float), ("queueLength", int)):
            raw_value = node.get_value(key)
            if raw_value is None:
                log_and_raise_config_error(ErrorMessages.MISSING_CONFIG, config_key=key)
            try:
                parsed[key] = parse(raw_value)
            except ValueError:
                log_and_raise_config_error(
                    ErrorMessages.INVALID_CONFIG, config_key=key, config_value=raw_value
                )

        return cls(
            funds_multiplier=parsed["funds"],
            reputation_multiplier=parsed["rep"],
            queue_capacity=parsed["queueLength"]
        )

    def to_node(self) -> ConfigNode:
        """Convert to a settings node (the on-disk layout of settings.cfg)."""
        node = ConfigNode(SETTINGS_NODE_NAME)
        node.add_value("funds", self.funds_multiplier)
        node.add_value("rep", self.reputation_multiplier)
        node.add_value("queueLength", self.queue_capacity)
        return node
