"""Per-node hooks run before default literal handling during the script walk.

A hook is called as ``hook(node, parent, context)`` for every node, in
pre-order. Its return value decides what happens next:

* ``HookResult.CONTINUE`` (or ``None``): default handling runs.
* ``HookResult.HANDLED``: the hook dealt with the node; default handling is
  skipped but the walk still enters the node's children.
* ``HookResult.SKIP``: default handling is skipped and the node's subtree
  is not visited.

Hooks get a :class:`TraversalContext` so they can look up or register
tokens through the same allocator the engine uses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from cssgsub.engine.tokens import SubstitutionTable, TokenAllocator
from cssgsub.events import EventBus, TokenMinted


class HookResult(Enum):
    CONTINUE = "continue"
    HANDLED = "handled"
    SKIP = "skip"


class NodeHook(Protocol):
    def __call__(
        self, node: Any, parent: Any, context: TraversalContext
    ) -> HookResult | None: ...


@dataclass
class TraversalContext:
    """State shared with hooks while the script tree is walked."""

    allocator: TokenAllocator
    pattern: re.Pattern[str] | None
    event_bus: EventBus | None = None

    @property
    def table(self) -> SubstitutionTable:
        return self.allocator.table

    def matches(self, value: str) -> bool:
        """True if *value* is exactly one class name the run substitutes."""
        return self.pattern is not None and self.pattern.fullmatch(value) is not None

    def token_for(self, class_name: str) -> str:
        """Look up the token for *class_name*, minting it if needed."""
        if class_name in self.allocator:
            return self.allocator.table.items[class_name]
        token = self.allocator.mint(class_name)
        self._emit(TokenMinted(class_name, token, "hook"))
        return token

    def register(self, class_name: str, token: str) -> str:
        """Map *class_name* to a token the hook computed itself."""
        known = class_name in self.allocator
        self.allocator.register(class_name, token)
        if not known:
            self._emit(TokenMinted(class_name, token, "hook"))
        return token

    def _emit(self, event: object) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(event)


def _property_name(key: Any) -> str | None:
    if getattr(key, "type", None) == "Identifier":
        return key.name
    if getattr(key, "type", None) == "Literal" and isinstance(key.value, str):
        return key.value
    return None


def derived_suffix_hook(
    suffix: str = "-inner", keys: tuple[str, ...] = ("baseCls",)
) -> NodeHook:
    """Build a hook for frameworks that derive a class from a base class.

    Ext JS and Sencha Touch components declare ``baseCls: "d-panel"`` and
    the framework later adds ``"d-panel" + "-inner"`` at runtime, a name
    the script never spells out. When the walk reaches such a property,
    the hook maps the base class as usual and also maps
    ``base + suffix`` to ``token + suffix``, so ``.d-panel-inner`` in the
    stylesheet follows the runtime-built name.
    """

    def hook(node: Any, parent: Any, context: TraversalContext) -> HookResult:
        if getattr(node, "type", None) != "Property":
            return HookResult.CONTINUE
        if _property_name(node.key) not in keys:
            return HookResult.CONTINUE
        value = node.value
        if getattr(value, "type", None) != "Literal" or not isinstance(value.value, str):
            return HookResult.CONTINUE
        base = value.value
        if not context.matches(base):
            return HookResult.CONTINUE
        token = context.token_for(base)
        derived = base + suffix
        if derived not in context.allocator:
            context.register(derived, token + suffix)
        return HookResult.CONTINUE

    return hook
