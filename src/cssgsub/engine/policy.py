"""Token resolution for class names met while rewriting selectors."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from cssgsub.engine.tokens import TokenAllocator

__all__ = ["SelectorContext", "negation_spans", "resolve_or_mint"]

_NOT_OPEN = re.compile(r":not\(", re.IGNORECASE)


@lru_cache(maxsize=1024)
def negation_spans(selector: str) -> tuple[tuple[int, int], ...]:
    """Return ``(start, end)`` offsets of every ``:not(...)`` argument in *selector*."""
    spans: list[tuple[int, int]] = []
    pos = 0
    while True:
        match = _NOT_OPEN.search(selector, pos)
        if match is None:
            break
        start = match.end()
        depth = 1
        end = start
        while end < len(selector) and depth:
            if selector[end] == "(":
                depth += 1
            elif selector[end] == ")":
                depth -= 1
            end += 1
        spans.append((start, end - 1 if depth == 0 else end))
        pos = end
    return tuple(spans)


@dataclass(frozen=True)
class SelectorContext:
    """Where a class occurrence sits: its selector and the offset of its ``.``."""

    selector: str
    position: int

    @property
    def negated(self) -> bool:
        """True when the occurrence lies inside a ``:not(...)`` argument."""
        return any(start <= self.position < end for start, end in negation_spans(self.selector))


def resolve_or_mint(
    class_name: str, context: SelectorContext, allocator: TokenAllocator
) -> str | None:
    """Return the token for *class_name*, or None when it cannot be resolved.

    A class that only ever shows up negated (``:not(.x)``) is never seen by
    the script scan, so it gets a fresh token here instead of being
    treated as unused.
    """
    token = allocator.table.get(class_name)
    if token is not None:
        return token
    if context.negated:
        return allocator.mint(class_name)
    return None
