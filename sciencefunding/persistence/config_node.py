"""
Node-tree document used for both the reward settings file and the session state.

A document is a tree of named nodes. Each node holds ordered ``key = value``
pairs and ordered child nodes:

    QUEUE
    {
        REPORT
        {
            funds = 5000.0
            rep = 5.0
            subject = Crew Report
        }
    }

Rules:
- ``//`` starts a comment that runs to the end of the line.
- A value line is split on the first ``=``; key and value are stripped.
- A node is a bare name followed by ``{`` (same line or next line) and closed by ``}``.
- Values are kept as text; callers convert them.
- Written values escape ``\\``, ``/``, line breaks and edge whitespace
  (``\\\\``, ``\\/``, ``\\n``, ``\\r``, ``\\t``, ``\\s``, ``\\uXXXX``) so any
  string survives a save and load. Unknown escapes are read literally.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import bittensor as bt

from sciencefunding.utils.error_handling import ConfigNodeError, ErrorMessages


_ESCAPES = {"\\": "\\\\", "/": "\\/", "\n": "\\n", "\r": "\\r"}
_EDGE_ESCAPES = {" ": "\\s", "\t": "\\t"}
_UNESCAPES = {"\\": "\\", "/": "/", "n": "\n", "r": "\r", "t": "\t", "s": " "}
_ESCAPE_PATTERN = re.compile(r"\\(u[0-9a-fA-F]{4}|.)")


def _escape_char(ch: str, edge: bool) -> str:
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if edge and ch in _EDGE_ESCAPES:
        return _EDGE_ESCAPES[ch]
    # str.splitlines() breaks on more than \n and \r; strip() eats edge whitespace
    if ch.splitlines() != [ch] or (edge and ch.isspace()):
        return f"\\u{ord(ch):04x}"
    return ch


def escape_value(value: str) -> str:
    """Encode a value so it fits on one line and is not stripped or cut by comments."""
    core = value.strip()
    start = len(value) - len(value.lstrip())
    end = start + len(core)
    return "".join(
        _escape_char(ch, edge=i < start or i >= end) for i, ch in enumerate(value)
    )


def unescape_value(text: str) -> str:
    def replace(match):
        code = match.group(1)
        if len(code) == 5:
            return chr(int(code[1:], 16))
        return _UNESCAPES.get(code, match.group(0))

    return _ESCAPE_PATTERN.sub(replace, text)


class ConfigNode:
    """Named node with ordered string values and ordered child nodes."""

    ROOT_NAME = "root"

    def __init__(self, name: str = ROOT_NAME):
        self.name = name
        self.values: List[Tuple[str, str]] = []
        self.nodes: List["ConfigNode"] = []

    # Values

    def has_value(self, key: str) -> bool:
        return any(k == key for k, _ in self.values)

    def get_value(self, key: str) -> Optional[str]:
        """Return the first value stored under ``key``, or None."""
        for k, v in self.values:
            if k == key:
                return v
        return None

    def get_values(self, key: str) -> List[str]:
        return [v for k, v in self.values if k == key]

    def add_value(self, key: str, value: Any) -> None:
        self.values.append((key, str(value)))

    # Nodes

    def has_node(self, name: str) -> bool:
        return any(node.name == name for node in self.nodes)

    def get_node(self, name: str) -> Optional["ConfigNode"]:
        """Return the first child called ``name``, or None."""
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    def get_nodes(self, name: Optional[str] = None) -> List["ConfigNode"]:
        if name is None:
            return list(self.nodes)
        return [node for node in self.nodes if node.name == name]

    def add_node(self, node: Union["ConfigNode", str]) -> "ConfigNode":
        """Append a child node (or a new empty one by name) and return it."""
        if isinstance(node, str):
            node = ConfigNode(node)
        self.nodes.append(node)
        return node

    def remove_nodes(self, name: str) -> int:
        """Remove every child called ``name``. Returns how many were removed."""
        before = len(self.nodes)
        self.nodes = [node for node in self.nodes if node.name != name]
        return before - len(self.nodes)

    # Text form

    @classmethod
    def parse(cls, text: str) -> "ConfigNode":
        """
        Parse document text into a root node.

        Args:
            text: Document text

        Returns:
            Root ConfigNode holding the top-level values and nodes

        Raises:
            ConfigNodeError: If braces are unbalanced or a node name is dangling
        """
        root = cls(cls.ROOT_NAME)
        stack = [root]
        pending_name: Optional[str] = None
        line_number = 0

        for line_number, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.split("//", 1)[0].strip()

            while line:
                if line.startswith("{"):
                    if pending_name is None:
                        raise ConfigNodeError(ErrorMessages.UNEXPECTED_OPEN_BRACE, line_number)
                    child = cls(pending_name)
                    stack[-1].nodes.append(child)
                    stack.append(child)
                    pending_name = None
                    line = line[1:].strip()
                    continue

                if line.startswith("}"):
                    if pending_name is not None or len(stack) == 1:
                        raise ConfigNodeError(ErrorMessages.UNBALANCED_BRACES, line_number)
                    stack.pop()
                    line = line[1:].strip()
                    continue

                if pending_name is not None:
                    raise ConfigNodeError(
                        f"Expected '{{' after node name '{pending_name}'", line_number
                    )

                brace = line.find("{")
                equals = line.find("=")

                if equals != -1 and (brace == -1 or equals < brace):
                    key = line[:equals].strip()
                    if not key:
                        raise ConfigNodeError("Value without a key", line_number)
                    stack[-1].values.append((key, unescape_value(line[equals + 1:].strip())))
                    line = ""
                elif brace == -1:
                    pending_name = line
                    line = ""
                else:
                    pending_name = line[:brace].strip()
                    line = line[brace:]

        if pending_name is not None:
            raise ConfigNodeError(
                f"Expected '{{' after node name '{pending_name}'", line_number
            )
        if len(stack) > 1:
            raise ConfigNodeError(ErrorMessages.UNBALANCED_BRACES, line_number)

        return root

    def to_text(self) -> str:
        """Serialize this node's contents (without its own name) as document text."""
        lines: List[str] = []
        self._write_body(lines, 0)
        return "\n".join(lines) + "\n" if lines else ""

    def _write_body(self, lines: List[str], depth: int) -> None:
        pad = "\t" * depth
        for key, value in self.values:
            lines.append(f"{pad}{key} = {escape_value(value)}")
        for node in self.nodes:
            lines.append(f"{pad}{node.name}")
            lines.append(pad + "{")
            node._write_body(lines, depth + 1)
            lines.append(pad + "}")

    def __str__(self) -> str:
        lines = [self.name, "{"]
        self._write_body(lines, 1)
        lines.append("}")
        return "\n".join(lines)

    # JSON form

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "values": [[k, v] for k, v in self.values],
            "nodes": [node.to_dict() for node in self.nodes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigNode":
        """
        Create from dictionary.

        Malformed value pairs and malformed child nodes are skipped with a
        warning, so one damaged record does not cost the rest of the document.

        Raises:
            ConfigNodeError: If the dictionary itself does not have the node shape
        """
        if not isinstance(data, dict):
            raise ConfigNodeError(f"Node must be an object, got {type(data).__name__}")

        values = data.get("values", [])
        nodes = data.get("nodes", [])
        for field, items in (("values", values), ("nodes", nodes)):
            if not isinstance(items, list):
                raise ConfigNodeError(f"Node {field} must be a list, got {type(items).__name__}")

        node = cls(str(data.get("name", cls.ROOT_NAME)))
        for pair in values:
            if not isinstance(pair, list) or len(pair) != 2:
                bt.logging.warning(f"Skipping malformed value in node {node.name}: {pair!r}")
                continue
            node.add_value(str(pair[0]), pair[1])
        for child in nodes:
            try:
                node.nodes.append(cls.from_dict(child))
            except ConfigNodeError as e:
                bt.logging.warning(f"Skipping malformed node in {node.name}: {e}")
        return node

    # Files

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ConfigNode":
        """
        Load a document from disk. ``.json`` files use the JSON form.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigNodeError: If the file content is malformed
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        if path.suffix == ".json":
            try:
                return cls.from_dict(json.loads(content))
            except json.JSONDecodeError as e:
                raise ConfigNodeError(f"Invalid JSON in {path}: {e}")
        return cls.parse(content)

    def save(self, path: Union[str, Path]) -> str:
        """Write this node to disk (JSON form for ``.json`` paths). Returns the path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix == ".json":
                json.dump(self.to_dict(), f, indent=2)
            else:
                f.write(self.to_text())

        return str(path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigNode):
            return NotImplemented
        return (
            self.name == other.name
            and self.values == other.values
            and self.nodes == other.nodes
        )

    def __repr__(self) -> str:
        return f"ConfigNode({self.name!r}, values={len(self.values)}, nodes={len(self.nodes)})"
