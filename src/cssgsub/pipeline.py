"""Build-pipeline adapter: one stylesheet file in, one rewritten stylesheet out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Iterator

from cssgsub.config import GsubConfig
from cssgsub.engine import SubstitutionEngine
from cssgsub.events import EventBus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """A file travelling through the pipeline."""

    path: Path
    contents: str

    @classmethod
    def read(cls, path: str | Path) -> SourceFile:
        p = Path(path)
        return cls(path=p, contents=p.read_text(encoding="utf-8"))


def process_file(
    file: SourceFile, config: GsubConfig, event_bus: EventBus | None = None
) -> SourceFile:
    """Rewrite one stylesheet and its paired script.

    ``css_in`` defaults to the incoming file (its contents are used as-is);
    an explicit ``css_in`` is read from disk instead. The rewritten script is
    written to ``config.js_out``; the rewritten stylesheet comes back as a
    new SourceFile.
    """
    if config.js_out is None:
        raise ValueError("js_out must be set to write the rewritten script")
    css_text: str | None = None
    if config.css_in is None:
        config = replace(config, css_in=file.path)
        css_text = file.contents

    engine = SubstitutionEngine(config, css_text=css_text, event_bus=event_bus).run()
    css_out = engine.generate_css()
    js_out_text = engine.generate_js()

    js_out = Path(config.js_out)
    js_out.parent.mkdir(parents=True, exist_ok=True)
    js_out.write_text(js_out_text, encoding="utf-8")
    logger.info(
        "%s: %d replacement(s), script written to %s",
        file.path,
        engine.get_replacements_count(),
        js_out,
    )
    return SourceFile(path=file.path, contents=css_out)


def gsub(
    files: Iterable[SourceFile | str | Path],
    config: GsubConfig,
    event_bus: EventBus | None = None,
) -> Iterator[SourceFile]:
    """Lazily rewrite each stylesheet in *files*; errors surface per item."""
    for item in files:
        file = item if isinstance(item, SourceFile) else SourceFile.read(item)
        yield process_file(file, config, event_bus=event_bus)
