"""Class-name catalog: the ordered universe of class names in one stylesheet."""

from __future__ import annotations

import logging
import re
from typing import Iterator

from cssgsub.stylesheet.model import Stylesheet

logger = logging.getLogger(__name__)


class ClassNameCatalog:
    """Deduplicated class names, longest first.

    Ties keep the order in which names first appear in the stylesheet.
    Longest-first matters when the names are alternated into a single
    pattern: ``btn-primary`` must be tried before ``btn``.
    """

    def __init__(self, names: list[str]) -> None:
        self._names = names

    @classmethod
    def from_stylesheet(
        cls, stylesheet: Stylesheet, pattern: re.Pattern[str], nested: bool = True
    ) -> ClassNameCatalog:
        """Extract class names from every style rule's selector list.

        Rules inside conditional groups (``@media``, ``@supports``...) take
        part only when *nested* is true.
        """
        found: list[str] = []
        for rule in stylesheet.style_rules(nested=nested):
            joined = " ".join(rule.selectors)
            found.extend(m.group(0)[1:] for m in pattern.finditer(joined) if len(m.group(0)) > 1)
        return cls(_order(found))

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        return f"ClassNameCatalog({self._names!r})"


def _order(names: list[str]) -> list[str]:
    """Stable sort by descending length, then drop repeats."""
    seen: set[str] = set()
    ordered: list[str] = []
    for name in sorted(names, key=len, reverse=True):
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    logger.debug("catalog: %d class name(s) from %d match(es)", len(ordered), len(names))
    return ordered
