"""Synchronous event bus for substitution-run events."""

from __future__ import annotations

from typing import Any, Callable

Listener = Callable[[Any], None]


class EventBus:
    """Publish-subscribe bus used by the engine to report mints and drops.

    Listeners are keyed by event class; ``on_all`` listeners see every
    event. Dispatch happens inline, in registration order, so a listener
    observes the documents in the state the event describes.
    """

    def __init__(self) -> None:
        self._by_type: dict[type, list[Listener]] = {}
        self._catch_all: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> None:
        """Call *callback* for every event of exactly *event_type*."""
        self._by_type.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Listener) -> None:
        """Call *callback* for every event."""
        self._catch_all.append(callback)

    def collect(self, event_type: type | None = None) -> list[Any]:
        """Return a list that fills up with emitted events (all, or one type)."""
        sink: list[Any] = []
        if event_type is None:
            self.on_all(sink.append)
        else:
            self.subscribe(event_type, sink.append)
        return sink

    def emit(self, event: Any) -> None:
        for callback in self._catch_all:
            callback(event)
        for callback in self._by_type.get(type(event), ()):
            callback(event)
