"""Replacement log: the substitution table persisted as JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cssgsub.engine.tokens import SubstitutionTable

logger = logging.getLogger(__name__)


def write_replacements(path: str | Path, table: SubstitutionTable) -> Path:
    """Write ``{"count": ..., "items": {...}}`` to *path*, creating parent dirs."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(table.to_dict(), indent=2) + "\n", encoding="utf-8")
    logger.info("replacement log written to %s (%d item(s))", target, len(table))
    return target


def load_replacements(path: str | Path) -> dict[str, Any]:
    """Read a replacement log back into a plain dict."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict) or "items" not in data or "count" not in data:
        raise ValueError(f"{path} is not a replacement log")
    return data
