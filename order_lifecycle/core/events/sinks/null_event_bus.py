"""
Event bus for lifecycles with no configured sinks.
"""
from __future__ import annotations

from typing import Any

from order_lifecycle.core.events.event_bus import EventBus
from order_lifecycle.core.events.event_sink import EventSink


class NullEventBus(EventBus):
    """Drops every order event.

    LifecycleConfig.build_event_bus returns it when logging, recording and
    metrics are all disabled. It never holds sinks.
    """

    def __init__(self) -> None:
        super().__init__(sinks=())

    def register(self, sink: EventSink) -> None:
        raise RuntimeError("NullEventBus does not accept sinks; use EventBus instead")

    def emit(self, event: Any) -> None:
        return
