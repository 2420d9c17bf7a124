"""Run configuration for a stylesheet/script substitution."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Mapping

# Option names used by the gulp-style configuration object.
_CAMEL_CASE = {
    "cssIn": "css_in",
    "jsIn": "js_in",
    "jsOut": "js_out",
    "replaceAll": "replace_all",
    "replacementsOutput": "replacements_output",
    "sourceType": "source_type",
}


@dataclass(frozen=True)
class GsubConfig:
    css_in: str | Path | None = None
    js_in: str | Path | None = None
    js_out: str | Path | None = None
    prefix: str | None = None
    regexp: str | re.Pattern[str] | None = None
    replace: Callable[..., Any] | None = None  # per-node hook, see cssgsub.engine.hooks
    replace_all: bool = False
    replacements_output: str | Path | None = None
    nested: bool = True  # extract class names inside @media/@supports blocks
    strict: bool = False  # raise on unresolved selectors instead of dropping them
    compress: bool = False
    source_type: str = "script"  # or "module"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GsubConfig:
        """Build a config from snake_case or camelCase option names."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown option: {key!r}")
            kwargs[name] = value
        replace = kwargs.get("replace")
        if replace is not None and not callable(replace):
            raise ValueError(f"replace must be callable, got {type(replace).__name__}")
        return cls(**kwargs)
