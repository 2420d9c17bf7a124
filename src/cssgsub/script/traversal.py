"""Pre-order traversal over esprima syntax trees."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterator

from cssgsub.script.document import is_node

__all__ = ["VisitorOption", "traverse", "children"]


class VisitorOption(Enum):
    """Value an enter callback may return to steer the walk."""

    SKIP = "skip"  # do not descend into the node's children
    BREAK = "break"  # stop the whole traversal


EnterFn = Callable[[Any, Any], "VisitorOption | None"]


def children(node: Any) -> Iterator[Any]:
    """Yield the direct child nodes of *node*, left to right in field order."""
    for value in vars(node).values():
        if is_node(value):
            yield value
        elif isinstance(value, list):
            for item in value:
                if is_node(item):
                    yield item


def traverse(root: Any, enter: EnterFn) -> None:
    """Visit *root* and its descendants in pre-order, calling ``enter(node, parent)``."""
    stack: list[tuple[Any, Any]] = [(root, None)]
    while stack:
        node, parent = stack.pop()
        option = enter(node, parent)
        if option is VisitorOption.BREAK:
            return
        if option is VisitorOption.SKIP:
            continue
        # Push in reverse so the leftmost child is visited first.
        stack.extend((child, node) for child in reversed(list(children(node))))
