"""
Synchronous event bus for order events.
"""
from __future__ import annotations

from typing import Any, Iterable

from order_lifecycle.core.events.event_sink import EventSink


class EventBus:
    """Dispatches each event to every registered sink, in registration order.

    The bus is synchronous and not thread-safe. It can be used as a context
    manager; leaving the block closes all sinks.
    """

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._closed = False

    @property
    def sinks(self) -> tuple[EventSink, ...]:
        return tuple(self._sinks)

    def register(self, sink: EventSink) -> None:
        if self._closed:
            raise RuntimeError("cannot register a sink on a closed event bus")
        self._sinks.append(sink)

    def emit(self, event: Any) -> None:
        if self._closed:
            raise RuntimeError("cannot emit on a closed event bus")
        for sink in self._sinks:
            sink.on_event(event)

    def close(self) -> None:
        """Close every sink that exposes close(). Safe to call twice."""
        if self._closed:
            return

        self._closed = True
        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()

    def __enter__(self) -> EventBus:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
