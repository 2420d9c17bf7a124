"""Build the stylesheet model from tinycss2's rule and token lists."""

from __future__ import annotations

from typing import Any

import tinycss2

from cssgsub.errors import ParseError
from cssgsub.stylesheet.model import (
    CONDITIONAL_GROUPS,
    AtRule,
    Comment,
    GroupRule,
    Statement,
    StyleRule,
    Stylesheet,
    _unprefixed,
)

__all__ = ["parse_stylesheet", "selector_list"]

# Grouping rules whose block is a rule list rather than declarations.
_GROUPS = CONDITIONAL_GROUPS | {"keyframes"}


def _raise_error(node: Any) -> None:
    raise ParseError(
        f"Line {node.source_line}: {node.message}",
        line=node.source_line,
        column=node.source_column,
    )


def _check(tokens: list[Any]) -> None:
    for token in tokens:
        if token.type == "error":
            _raise_error(token)


def selector_list(prelude: list[Any]) -> list[str]:
    """Split a qualified rule prelude into selectors on top-level commas.

    Commas nested in ``:is(...)`` or ``[...]`` belong to a single block
    token, so only the selector list separators split.
    """
    selectors: list[str] = []
    current: list[Any] = []
    for token in prelude:
        if token.type == "comment":
            continue
        if token == ",":
            selectors.append(tinycss2.serialize(current).strip())
            current = []
        else:
            current.append(token)
    selectors.append(tinycss2.serialize(current).strip())
    return [s for s in selectors if s]


def _statements(nodes: list[Any]) -> list[Statement]:
    statements: list[Statement] = []
    for node in nodes:
        if node.type == "error":
            _raise_error(node)
        elif node.type == "comment":
            statements.append(Comment(node.value))
        elif node.type == "qualified-rule":
            _check(node.prelude)
            statements.append(
                StyleRule(selectors=selector_list(node.prelude), content=node.content)
            )
        elif node.type == "at-rule":
            _check(node.prelude)
            statements.append(_at_rule(node))
    return statements


def _at_rule(node: Any) -> Statement:
    prelude = tinycss2.serialize(node.prelude).strip()
    if node.content is not None and _unprefixed(node.lower_at_keyword) in _GROUPS:
        children = tinycss2.parse_rule_list(node.content, skip_whitespace=True)
        return GroupRule(name=node.at_keyword, prelude=prelude, rules=_statements(children))
    return AtRule(name=node.at_keyword, prelude=prelude, content=node.content)


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse stylesheet source text into a Stylesheet rule tree.

    Raises ParseError on input tinycss2 reports as malformed, such as a
    stray ``}`` or a selector with no block before the end of input.
    """
    nodes = tinycss2.parse_stylesheet(source, skip_whitespace=True)
    return Stylesheet(rules=_statements(nodes))
