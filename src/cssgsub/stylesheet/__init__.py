from cssgsub.stylesheet.parser import parse_stylesheet, selector_list
from cssgsub.stylesheet.serializer import stringify
from cssgsub.stylesheet.model import (
    AtRule,
    Comment,
    Declaration,
    GroupRule,
    StyleRule,
    Stylesheet,
)

__all__ = [
    "parse_stylesheet",
    "selector_list",
    "stringify",
    "AtRule",
    "Comment",
    "Declaration",
    "GroupRule",
    "StyleRule",
    "Stylesheet",
]
