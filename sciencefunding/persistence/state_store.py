"""
Utilities for saving and loading the session state document.

The state document is rebuilt at session load and written back wholesale at
session save, so a player reloading an older save gets that save's pending
rewards rather than whatever was queued in memory.
"""

from pathlib import Path
from typing import Union
import bittensor as bt

from sciencefunding.persistence.config_node import ConfigNode
from sciencefunding.utils.error_handling import ConfigNodeError


def load_state(state_path: Union[str, Path]) -> ConfigNode:
    """
    Load the session state document.

    A missing, unreadable or unparseable file yields an empty document; the
    last two are logged as errors so the pending rewards it held are not lost silently.

    Args:
        state_path: Path to the state file (``.json`` for the JSON form)

    Returns:
        Root ConfigNode of the state document
    """
    state_path = Path(state_path)

    if not state_path.exists():
        bt.logging.info(f"No state file at {state_path}, starting fresh")
        return ConfigNode()

    try:
        state = ConfigNode.load(state_path)
    except (OSError, ConfigNodeError, UnicodeDecodeError) as e:
        bt.logging.error(f"Could not parse state file {state_path}: {e}")
        return ConfigNode()

    bt.logging.debug(f"Loaded state from {state_path}")
    return state


def save_state(state: ConfigNode, state_path: Union[str, Path]) -> str:
    """
    Save the session state document, replacing any previous file.

    Args:
        state: Root ConfigNode to save
        state_path: Destination path

    Returns:
        Path to saved state file
    """
    saved_path = state.save(state_path)
    bt.logging.debug(f"Saved state to {saved_path}")
    return saved_path
