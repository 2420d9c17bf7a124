"""Event types emitted while a substitution run mutates its documents."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TokenMinted:
    class_name: str
    token: str
    origin: str  # "script", "replace_all", "negation", "hook"


@dataclass(frozen=True)
class LiteralRewritten:
    before: str
    after: str
    occurrences: int


@dataclass(frozen=True)
class SelectorDropped:
    selector: str
    class_name: str


@dataclass(frozen=True)
class RuleDropped:
    selectors: tuple[str, ...]
