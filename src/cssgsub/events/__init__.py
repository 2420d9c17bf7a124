"""Event system: bus and event types for substitution runs."""

from cssgsub.events.bus import EventBus
from cssgsub.events.types import (
    LiteralRewritten,
    RuleDropped,
    SelectorDropped,
    TokenMinted,
)

__all__ = [
    "EventBus",
    "LiteralRewritten",
    "RuleDropped",
    "SelectorDropped",
    "TokenMinted",
]
