"""Node-tree documents and session state storage."""

from .config_node import ConfigNode
from .state_store import load_state, save_state

__all__ = [
    "ConfigNode",
    "load_state",
    "save_state",
]
