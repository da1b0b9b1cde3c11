"""
Event sink interface.

Sinks consume order events emitted by the lifecycle service. A sink may
optionally expose close(); the bus calls it once on shutdown.
"""
from __future__ import annotations

from typing import Any, Protocol


class EventSink(Protocol):
    def on_event(self, event: Any) -> None:
        """Consume an order event."""
