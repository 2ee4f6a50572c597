"""
Error handling utilities for consistent error patterns across the accumulator.

Two failures are recognised and recovered locally:
- ConfigParseError: the reward settings cannot be read. Callers fall back to
  the fixed defaults and tell the user once.
- RecordParseError: a single persisted report is corrupted. Callers skip it
  and keep restoring the rest.
"""

import bittensor as bt
from typing import Any, Dict, Optional, Union


class ConfigParseError(ValueError):
    """Reward settings are missing, unreadable or non-numeric."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key


class RecordParseError(ValueError):
    """A persisted report record cannot be turned back into a Report."""

    def __init__(self, message: str, record: Optional[str] = None):
        super().__init__(message)
        self.record = record


class ConfigNodeError(ValueError):
    """Document text is not a well-formed node tree."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)
        self.line_number = line_number


def _truncate(data: Any, limit: int = 200) -> Union[str, Any]:
    if data is not None and len(str(data)) > limit:
        return str(data)[:limit] + "... (truncated)"
    return data


def log_and_raise_config_error(
    message: str,
    config_key: Optional[str] = None,
    config_value: Optional[str] = None
) -> None:
    """
    Log configuration error and raise ConfigParseError.

    Args:
        message: Error message describing the configuration issue
        config_key: The configuration key that's problematic
        config_value: The problematic value (truncated for logging)

    Raises:
        ConfigParseError: Always raises with formatted message
    """
    bt.logging.error(
        f"Configuration error: {message}",
        extra={'config_key': config_key, 'config_value': _truncate(config_value)}
    )

    if config_key is not None:
        message = f"{message} (config_key: {config_key})"
    raise ConfigParseError(message, config_key=config_key)


def log_and_raise_record_error(
    message: str,
    record: Optional[Any] = None,
    context_info: Optional[Dict[str, Any]] = None
) -> None:
    """
    Log record parse error and raise RecordParseError.

    Args:
        message: Error message describing what failed to parse
        record: The offending record (truncated for logging)
        context_info: Additional context dictionary

    Raises:
        RecordParseError: Always raises with formatted message
    """
    safe_record = _truncate(record)

    bt.logging.debug(
        f"Record parse failed: {message}",
        extra={'record': safe_record, 'context': context_info}
    )

    raise RecordParseError(message, record=None if record is None else str(record))


class ErrorMessages:
    """Standard error messages for consistency."""

    # Configuration errors
    SETTINGS_FILE_MISSING = "Settings file does not exist"
    SETTINGS_FILE_UNREADABLE = "Settings file could not be read"
    SETTINGS_NODE_MISSING = "Settings node is missing"
    MISSING_CONFIG = "Required configuration is missing"
    INVALID_CONFIG = "Configuration value is invalid"

    # Record errors
    MISSING_REQUIRED_FIELD = "Required field is missing"
    INVALID_NUMBER = "Field is not a valid decimal"

    # Document errors
    UNBALANCED_BRACES = "Unbalanced braces in document"
    UNEXPECTED_OPEN_BRACE = "Opening brace without a node name"
