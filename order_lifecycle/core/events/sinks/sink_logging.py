"""
Logging event sink.
"""
from __future__ import annotations

import logging
from typing import Any

from order_lifecycle.core.events.events import OrderRejectedEvent, OrderTransitionEvent


class LoggingEventSink:
    """Logs order events using the standard logging module.

    Transitions are logged at INFO, rejections at WARNING. Unknown events are
    logged at DEBUG.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def on_event(self, event: Any) -> None:
        if isinstance(event, OrderTransitionEvent):
            self._logger.info(
                "order_transition %s: %s -> %s",
                event.operation,
                event.prev_state,
                event.next_state,
                extra={"event": event, "order_id": event.order_id},
            )
        elif isinstance(event, OrderRejectedEvent):
            self._logger.warning(
                "order_rejected %s in state %s: %s",
                event.operation,
                event.state,
                event.message,
                extra={"event": event, "order_id": event.order_id},
            )
        else:
            self._logger.debug("domain_event", extra={"event": event})
