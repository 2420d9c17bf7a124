"""Stylesheet model: the rule tree built on top of tinycss2 nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

import tinycss2

# Grouping at-rules whose children are ordinary style rules.
CONDITIONAL_GROUPS = frozenset(
    {"media", "supports", "document", "container", "layer", "scope"}
)


def _unprefixed(name: str) -> str:
    """Strip a vendor prefix: ``-webkit-keyframes`` -> ``keyframes``."""
    if name.startswith("-"):
        _, _, rest = name[1:].partition("-")
        return rest or name
    return name


@dataclass
class Comment:
    """A ``/* ... */`` comment kept at statement or declaration level."""

    text: str


@dataclass
class Declaration:
    """A single ``property: value`` pair read from a block."""

    property: str
    value: str


def read_declarations(content: list[Any]) -> list[Declaration | Comment] | None:
    """Read the declarations and comments of a ``{}`` block.

    Returns None when the block holds anything else, such as nested rules
    or hacks like ``*zoom: 1`` that tinycss2 rejects.
    """
    items: list[Declaration | Comment] = []
    for node in tinycss2.parse_blocks_contents(content, skip_whitespace=True):
        if node.type == "comment":
            items.append(Comment(node.value))
        elif node.type != "declaration":
            return None
        else:
            value = tinycss2.serialize(node.value).strip()
            if node.important:
                value += " !important"
            items.append(Declaration(node.name, value))
    return items


@dataclass
class StyleRule:
    """A qualified rule: a selector list and its block.

    ``content`` holds the tinycss2 tokens of the block. An empty
    ``selectors`` list marks the rule as deleted; the serializer skips it.
    """

    selectors: list[str]
    content: list[Any] = field(default_factory=list, compare=False, repr=False)

    @property
    def type(self) -> str:
        return "rule"

    @property
    def deleted(self) -> bool:
        return not self.selectors

    @property
    def declarations(self) -> list[Declaration | Comment] | None:
        return read_declarations(self.content)


@dataclass
class GroupRule:
    """An at-rule whose block holds further rules (``@media``, ``@keyframes``...)."""

    name: str
    prelude: str
    rules: list[Statement] = field(default_factory=list)

    @property
    def type(self) -> str:
        return _unprefixed(self.name.lower())

    @property
    def is_conditional(self) -> bool:
        """True for groups whose children are style rules with real selectors."""
        return self.type in CONDITIONAL_GROUPS


@dataclass
class AtRule:
    """Any other at-rule: ``@import ...;`` or ``@font-face { ... }``.

    ``content`` is None for statement at-rules terminated by ``;``.
    """

    name: str
    prelude: str = ""
    content: list[Any] | None = field(default=None, compare=False, repr=False)

    @property
    def type(self) -> str:
        return _unprefixed(self.name.lower())

    @property
    def declarations(self) -> list[Declaration | Comment] | None:
        if self.content is None:
            return None
        return read_declarations(self.content)


Statement = Union[StyleRule, GroupRule, AtRule, Comment]


@dataclass
class Stylesheet:
    """A parsed stylesheet: top-level statements in source order."""

    rules: list[Statement] = field(default_factory=list)

    def style_rules(self, nested: bool = True) -> Iterator[StyleRule]:
        """Yield style rules in source order.

        With *nested*, also descend into conditional grouping rules
        (``@media``, ``@supports``...). Keyframe blocks are never entered.
        """
        yield from _walk(self.rules, nested)


def _walk(rules: list[Statement], nested: bool) -> Iterator[StyleRule]:
    for rule in rules:
        if isinstance(rule, StyleRule):
            yield rule
        elif nested and isinstance(rule, GroupRule) and rule.is_conditional:
            yield from _walk(rule.rules, nested)
