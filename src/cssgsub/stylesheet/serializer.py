"""Serialize a Stylesheet rule tree back to text with tinycss2."""

from __future__ import annotations

from typing import Any

import tinycss2
from tinycss2.ast import (
    CurlyBracketsBlock,
    FunctionBlock,
    ParenthesesBlock,
    SquareBracketsBlock,
    WhitespaceToken,
)

from cssgsub.stylesheet.model import (
    Comment,
    GroupRule,
    Statement,
    StyleRule,
    Stylesheet,
    read_declarations,
)

__all__ = ["stringify"]

# Literal tokens that need no whitespace on either side when compressed.
_SELECTOR_TIGHT = frozenset({",", ">", "+", "~"})
_BLOCK_TIGHT = frozenset({",", ":", ";", "!"})
_PRELUDE_TIGHT = frozenset({",", ":"})
_COMBINATORS = frozenset({">", "+", "~"})


def stringify(stylesheet: Stylesheet, compress: bool = False, indent: str = "  ") -> str:
    """Render *stylesheet* as text.

    The default output puts one selector per line and one declaration per
    line. ``compress=True`` drops comments and all optional whitespace.
    Deleted style rules (empty selector list) are skipped, and so is any
    grouping rule left without printable children.
    """
    if compress:
        return "".join(_compressed(rule) for rule in stylesheet.rules)
    blocks = [_pretty(rule, indent, 0) for rule in stylesheet.rules]
    return "\n\n".join(b for b in blocks if b)


# ---------------------------------------------------------------------------
# Compressed output
# ---------------------------------------------------------------------------


def _compressed(rule: Statement) -> str:
    if isinstance(rule, Comment):
        return ""
    if isinstance(rule, StyleRule):
        if rule.deleted:
            return ""
        head = ",".join(_minify_text(s, _SELECTOR_TIGHT) for s in rule.selectors)
        return head + "{" + _minify_block(rule.content) + "}"
    if isinstance(rule, GroupRule):
        body = "".join(_compressed(child) for child in rule.rules)
        if not body:
            return ""
        return _at_head(rule.name, _minify_text(rule.prelude, _PRELUDE_TIGHT)) + "{" + body + "}"
    head = _at_head(rule.name, _minify_text(rule.prelude, _PRELUDE_TIGHT))
    if rule.content is None:
        return head + ";"
    return head + "{" + _minify_block(rule.content) + "}"


def _minify_text(text: str, tight: frozenset[str]) -> str:
    tokens = tinycss2.parse_component_value_list(text)
    return tinycss2.serialize(_minify(tokens, tight))


def _minify_block(content: list[Any]) -> str:
    tokens = _minify(content, _BLOCK_TIGHT)
    while tokens and tokens[-1] == ";":
        tokens.pop()
    return tinycss2.serialize(tokens)


def _minify(tokens: list[Any], tight: frozenset[str]) -> list[Any]:
    """Drop comments and collapse whitespace in a component value list.

    Whitespace survives only between two tokens that would otherwise run
    together, and never next to a literal in *tight*.
    """
    out: list[Any] = []
    pending = False
    for token in tokens:
        if token.type == "comment":
            continue
        if token.type == "whitespace":
            pending = True
            continue
        token = _minify_nested(token, tight - _COMBINATORS)
        if pending and out and not _is_tight(out[-1], tight) and not _is_tight(token, tight):
            out.append(WhitespaceToken(token.source_line, token.source_column, " "))
        out.append(token)
        pending = False
    return out


def _is_tight(token: Any, tight: frozenset[str]) -> bool:
    return token.type == "literal" and token.value in tight


def _minify_nested(token: Any, tight: frozenset[str]) -> Any:
    line, column = token.source_line, token.source_column
    if token.type == "function":
        return FunctionBlock(line, column, token.name, _minify(token.arguments, tight))
    if token.type == "() block":
        return ParenthesesBlock(line, column, _minify(token.content, tight))
    if token.type == "[] block":
        return SquareBracketsBlock(line, column, _minify(token.content, tight))
    if token.type == "{} block":
        return CurlyBracketsBlock(line, column, _minify(token.content, _BLOCK_TIGHT))
    return token


def _at_head(name: str, prelude: str) -> str:
    if not prelude:
        return "@" + name
    return f"@{name} {prelude}"


# ---------------------------------------------------------------------------
# Pretty output
# ---------------------------------------------------------------------------


def _pretty(rule: Statement, indent: str, level: int) -> str:
    pad = indent * level
    if isinstance(rule, Comment):
        return f"{pad}/*{rule.text}*/"
    if isinstance(rule, StyleRule):
        if rule.deleted:
            return ""
        head = ",\n".join(pad + s for s in rule.selectors)
        return head + " " + _pretty_block(rule.content, indent, level)
    if isinstance(rule, GroupRule):
        rendered = [(child, _pretty(child, indent, level + 1)) for child in rule.rules]
        rendered = [(child, text) for child, text in rendered if text]
        if not any(not isinstance(child, Comment) for child, _ in rendered):
            return ""
        children = [text for _, text in rendered]
        return (
            pad + _at_head(rule.name, rule.prelude) + " {\n"
            + "\n\n".join(children)
            + "\n" + pad + "}"
        )
    head = pad + _at_head(rule.name, rule.prelude)
    if rule.content is None:
        return head + ";"
    return head + " " + _pretty_block(rule.content, indent, level)


def _pretty_block(content: list[Any], indent: str, level: int) -> str:
    items = read_declarations(content)
    if items is None:
        return "{" + tinycss2.serialize(content) + "}"
    pad = indent * (level + 1)
    lines = []
    for d in items:
        if isinstance(d, Comment):
            lines.append(f"{pad}/*{d.text}*/")
        else:
            lines.append(f"{pad}{d.property}: {d.value};")
    if not lines:
        return "{}"
    return "{\n" + "\n".join(lines) + "\n" + indent * level + "}"
