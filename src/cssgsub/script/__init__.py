from cssgsub.script.document import ScriptDocument, is_node, is_string_literal
from cssgsub.script.parser import parse_script
from cssgsub.script.serializer import generate, quote
from cssgsub.script.traversal import VisitorOption, children, traverse

__all__ = [
    "ScriptDocument",
    "is_node",
    "is_string_literal",
    "parse_script",
    "generate",
    "quote",
    "VisitorOption",
    "children",
    "traverse",
]
