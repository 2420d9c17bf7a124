"""Parse script source into a ScriptDocument using esprima."""

from __future__ import annotations

import esprima
from esprima.error_handler import Error as EsprimaError

from cssgsub.errors import ParseError
from cssgsub.script.document import ScriptDocument

__all__ = ["parse_script"]

_SOURCE_TYPES = ("script", "module")


def parse_script(source: str, source_type: str = "script") -> ScriptDocument:
    """Parse JavaScript *source* into a ScriptDocument.

    Node ranges are recorded so the serializer can splice rewritten
    literals back into the original text.
    """
    if source_type not in _SOURCE_TYPES:
        raise ValueError(f"source_type must be one of {_SOURCE_TYPES}, got {source_type!r}")
    parse = esprima.parseModule if source_type == "module" else esprima.parseScript
    try:
        tree = parse(source, {"range": True})
    except EsprimaError as e:
        line = getattr(e, "lineNumber", None)
        column = getattr(e, "column", None)
        message = getattr(e, "description", None) or str(e)
        raise ParseError(f"Line {line}: {message}", line=line, column=column) from e
    document = ScriptDocument(source=source, tree=tree, source_type=source_type)
    for node in document.literals():
        document.originals[id(node)] = node.value
    return document
