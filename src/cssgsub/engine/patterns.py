"""Class-name patterns for the stylesheet side and the script side.

Derivation follows a fixed priority: a configured prefix, then an
explicit pattern, then "any class selector".
"""

from __future__ import annotations

import re
from typing import Iterable

__all__ = ["css_class_pattern", "script_class_pattern", "compile_regexp"]

_NAME_CHARS = r"[0-9a-zA-Z\-_]+"

# A class name in a script literal must not be glued to other name characters.
_BEFORE = r"(?<![0-9a-zA-Z\-_])"
_AFTER = r"(?![0-9a-zA-Z\-_])"


def compile_regexp(regexp: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(regexp, re.Pattern):
        return regexp
    return re.compile(regexp)


def css_class_pattern(
    prefix: str | None = None, regexp: str | re.Pattern[str] | None = None
) -> re.Pattern[str]:
    """Pattern matching ``.name`` class selectors inside a selector string."""
    if prefix:
        return re.compile(r"\.(?:" + re.escape(prefix) + r")" + _NAME_CHARS)
    if regexp is not None:
        compiled = compile_regexp(regexp)
        return re.compile(r"\." + compiled.pattern, compiled.flags)
    return re.compile(r"\." + _NAME_CHARS)


def script_class_pattern(
    prefix: str | None = None,
    regexp: str | re.Pattern[str] | None = None,
    names: Iterable[str] = (),
) -> re.Pattern[str] | None:
    """Pattern matching bare class names inside script string literals.

    Without a prefix or explicit pattern, the class names themselves are
    alternated in the given order (longest first when taken from a
    catalog). Returns None when there is nothing to match.
    """
    if prefix:
        return re.compile(r"\b" + re.escape(prefix) + _NAME_CHARS)
    if regexp is not None:
        return compile_regexp(regexp)
    names = list(names)
    if not names:
        return None
    alternation = "|".join(re.escape(n) for n in names)
    return re.compile(_BEFORE + "(?:" + alternation + ")" + _AFTER)
