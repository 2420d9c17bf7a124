"""Regenerate script text from a ScriptDocument.

Only string literals whose value changed since parsing are re-rendered;
everything else is copied from the original source, so formatting and
comments survive untouched.
"""

from __future__ import annotations

from typing import Any

from cssgsub.script.document import ScriptDocument

__all__ = ["generate", "quote"]

_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def quote(value: str, quote_char: str = '"') -> str:
    """Render *value* as a JavaScript string literal delimited by *quote_char*."""
    out = [quote_char]
    for ch in value:
        if ch == quote_char:
            out.append("\\" + ch)
        elif ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20:
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    out.append(quote_char)
    return "".join(out)


def _changed(document: ScriptDocument, node: Any) -> bool:
    original = document.originals.get(id(node))
    return original is not None and node.value != original


def generate(document: ScriptDocument) -> str:
    """Return the script source with every rewritten literal spliced in."""
    edits = [
        (node.range[0], node.range[1], quote(node.value, node.raw[0]))
        for node in document.literals()
        if _changed(document, node)
    ]
    if not edits:
        return document.source
    edits.sort()
    parts: list[str] = []
    cursor = 0
    for start, end, text in edits:
        parts.append(document.source[cursor:start])
        parts.append(text)
        cursor = end
    parts.append(document.source[cursor:])
    return "".join(parts)
