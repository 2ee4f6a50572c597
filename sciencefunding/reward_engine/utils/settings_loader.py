"""Reward settings loading for the accumulator."""

from pathlib import Path
from typing import Optional, Tuple, Union
import bittensor as bt

from sciencefunding.persistence.config_node import ConfigNode
from sciencefunding.utils.config import SETTINGS_NODE_NAME
from sciencefunding.utils.error_handling import (
    ConfigNodeError,
    ConfigParseError,
    ErrorMessages,
)
from ..models.settings import Settings


def read_settings(settings_path: Union[str, Path]) -> Settings:
    """
    Read and parse the reward settings file.

    Args:
        settings_path: Path to the settings file

    Returns:
        Parsed Settings

    Raises:
        ConfigParseError: If the file is missing, malformed, lacks the
            settings node, or holds a missing / non-numeric value
    """
    settings_path = Path(settings_path)
    bt.logging.debug(f"Loading settings file: {settings_path}")

    try:
        document = ConfigNode.load(settings_path)
    except FileNotFoundError:
        raise ConfigParseError(f"{ErrorMessages.SETTINGS_FILE_MISSING}: {settings_path}")
    except (OSError, UnicodeDecodeError, ConfigNodeError) as e:
        raise ConfigParseError(f"{ErrorMessages.SETTINGS_FILE_UNREADABLE}: {settings_path}: {e}")

    node = document.get_node(SETTINGS_NODE_NAME)
    if node is None:
        raise ConfigParseError(
            f"{ErrorMessages.SETTINGS_NODE_MISSING}: {SETTINGS_NODE_NAME} in {settings_path}"
        )

    bt.logging.debug(str(node))
    return Settings.from_node(node)


def load_settings(
    settings_path: Union[str, Path]
) -> Tuple[Settings, Optional[ConfigParseError]]:
    """
    Load reward settings, falling back to the fixed defaults on failure.

    Returns:
        Tuple of (settings, error). ``error`` is None on success; otherwise
        ``settings`` holds the defaults and the caller decides how to tell
        the player.
    """
    try:
        return read_settings(settings_path), None
    except ConfigParseError as e:
        bt.logging.error(f"There was an error while loading the configuration: {e}")
        return Settings.defaults(), e
