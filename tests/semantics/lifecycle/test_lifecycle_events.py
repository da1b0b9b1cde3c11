"""
Semantic test: lifecycle service emits one event per call.

Invariant:
A successful transition (including a no-op) emits an OrderTransitionEvent,
a rejected one emits an OrderRejectedEvent. The service never changes what
the pure state machine returns.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from order_lifecycle.core.domain.errors import PaymentError, RefundError
from order_lifecycle.core.domain.types import (
    AddItemCommand,
    CompleteCommand,
    OrderItem,
    PayCommand,
    RefundCommand,
    RemoveItemCommand,
)
from order_lifecycle.core.events.event_bus import EventBus
from order_lifecycle.core.events.events import OrderRejectedEvent, OrderTransitionEvent
from order_lifecycle.core.events.sinks.null_event_bus import NullEventBus
from order_lifecycle.core.lifecycle.order_lifecycle import OrderLifecycle
from order_lifecycle.core.ports.clock import FixedClock

INSTANT = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


class _ListSink:
    def __init__(self) -> None:
        self.events: list[Any] = []
        self.closed = False

    def on_event(self, event: Any) -> None:
        self.events.append(event)

    def close(self) -> None:
        self.closed = True


def _lifecycle() -> tuple[OrderLifecycle, _ListSink]:
    sink = _ListSink()
    return OrderLifecycle(FixedClock(INSTANT), EventBus([sink]), order_id="order-1"), sink


def test_transitions_emit_transition_events() -> None:
    lifecycle, sink = _lifecycle()

    order = lifecycle.create()
    order = lifecycle.add_item(order, OrderItem(id="a", price=7)).order
    order = lifecycle.pay(order).order
    result = lifecycle.complete(order)

    assert result.ok
    assert result.order.completed_at == INSTANT
    assert sink.events == [
        OrderTransitionEvent(ts=INSTANT, order_id="order-1", operation="add_item", prev_state="empty", next_state="active"),
        OrderTransitionEvent(ts=INSTANT, order_id="order-1", operation="pay", prev_state="active", next_state="paid"),
        OrderTransitionEvent(ts=INSTANT, order_id="order-1", operation="complete", prev_state="paid", next_state="completed"),
    ]


def test_noop_emits_self_transition() -> None:
    lifecycle, sink = _lifecycle()

    result = lifecycle.remove_item(lifecycle.create(), "a")

    assert result.ok
    assert sink.events[0].prev_state == "empty"
    assert sink.events[0].next_state == "empty"


def test_rejection_emits_rejected_event() -> None:
    lifecycle, sink = _lifecycle()

    result = lifecycle.pay(lifecycle.create())

    assert isinstance(result.error, PaymentError)
    assert sink.events == [
        OrderRejectedEvent(
            ts=INSTANT,
            order_id="order-1",
            operation="pay",
            state="empty",
            error_type="PaymentError",
            message="Cannot pay for order with no order items",
        )
    ]


def test_replay_stops_at_first_rejection() -> None:
    lifecycle, sink = _lifecycle()

    result = lifecycle.replay(
        [
            AddItemCommand(item=OrderItem(id="a", price=7)),
            PayCommand(),
            CompleteCommand(),
            RefundCommand(),
            RemoveItemCommand(item_id="a"),
        ]
    )

    assert isinstance(result.error, RefundError)
    assert result.error.message == "Cannot refund completed order"
    assert result.order.state == "completed"
    assert [type(event) for event in sink.events] == [
        OrderTransitionEvent,
        OrderTransitionEvent,
        OrderTransitionEvent,
        OrderRejectedEvent,
    ]


def test_replay_from_given_order() -> None:
    lifecycle = OrderLifecycle(FixedClock(INSTANT), NullEventBus())
    start = lifecycle.add_item(lifecycle.create(), OrderItem(id="a", price=2)).order

    result = lifecycle.replay([AddItemCommand(item=OrderItem(id="b", price=3)), PayCommand()], order=start)

    assert result.ok
    assert result.order.amount_paid == 5


def test_close_closes_sinks_once() -> None:
    lifecycle, sink = _lifecycle()

    lifecycle.close()
    lifecycle.close()

    assert sink.closed
