"""
Domain event models.

These events represent immutable facts about order transitions. They are
consumed by loggers, recorders, and metrics sinks.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from order_lifecycle.core.domain.types import OrderState


@dataclass(frozen=True, slots=True)
class OrderTransitionEvent:
    ts: datetime
    order_id: str | None
    operation: str

    prev_state: OrderState
    next_state: OrderState


@dataclass(frozen=True, slots=True)
class OrderRejectedEvent:
    ts: datetime
    order_id: str | None
    operation: str

    state: OrderState
    error_type: str
    message: str
