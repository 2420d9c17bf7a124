"""Script document: an esprima syntax tree paired with its source text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def is_node(value: Any) -> bool:
    """True for syntax-tree nodes (objects carrying a string ``type``)."""
    return not isinstance(value, str) and isinstance(getattr(value, "type", None), str)


def is_string_literal(node: Any) -> bool:
    """True for ``Literal`` nodes holding a quoted string (regex literals excluded)."""
    if getattr(node, "type", None) != "Literal" or getattr(node, "regex", None):
        return False
    raw = getattr(node, "raw", None) or ""
    return isinstance(node.value, str) and raw[:1] in ("'", '"')


@dataclass
class ScriptDocument:
    """A parsed script.

    ``originals`` maps ``id(literal)`` to the literal's value at parse time so
    the serializer can tell which literals were rewritten.
    """

    source: str
    tree: Any
    source_type: str = "script"
    originals: dict[int, str] = field(default_factory=dict)

    def literals(self) -> list[Any]:
        """Return every string literal node, in source order."""
        from cssgsub.script.traversal import traverse

        found: list[Any] = []

        def enter(node: Any, parent: Any) -> None:
            if is_string_literal(node):
                found.append(node)

        traverse(self.tree, enter)
        return found
