"""Error types raised by the parsers and the substitution engine."""

from __future__ import annotations


class ParseError(Exception):
    """Raised when stylesheet or script source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


class UnresolvedSelectorError(Exception):
    """Raised in strict mode when a selector references a class with no token."""

    def __init__(self, selector: str, class_name: str) -> None:
        self.selector = selector
        self.class_name = class_name
        super().__init__(
            f"Selector {selector!r} references class {class_name!r} which has no replacement"
        )


class EngineStateError(RuntimeError):
    """Raised when an engine step is called out of order."""


class TokenConflictError(ValueError):
    """Raised when a token would be assigned to two different class names."""

    def __init__(self, token: str, owner: str, class_name: str) -> None:
        self.token = token
        self.owner = owner
        self.class_name = class_name
        super().__init__(
            f"Token {token!r} is already assigned to {owner!r}, cannot assign it to {class_name!r}"
        )
