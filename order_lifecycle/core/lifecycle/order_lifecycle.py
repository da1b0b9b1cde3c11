"""Order lifecycle service: applies transitions and emits order events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from order_lifecycle.core.domain import order_state_machine as machine
from order_lifecycle.core.domain.result import TransitionResult
from order_lifecycle.core.domain.types import EmptyOrder, create_order
from order_lifecycle.core.events.events import OrderRejectedEvent, OrderTransitionEvent

if TYPE_CHECKING:
    from order_lifecycle.core.domain.types import Order, OrderCommand, OrderItem
    from order_lifecycle.core.events.event_bus import EventBus
    from order_lifecycle.core.ports.clock import Clock

LOGGER = logging.getLogger(__name__)


class OrderLifecycle:
    """Caller-side facade over the pure state machine.

    The service holds no order state: callers pass in the current order value
    and keep the value returned in the TransitionResult. Every call emits
    exactly one event:
    - OrderTransitionEvent when the transition succeeded (including no-ops)
    - OrderRejectedEvent when it was rejected

    It must NOT persist orders or serialize concurrent writers of one order.
    """

    def __init__(self, clock: Clock, event_bus: EventBus, order_id: str | None = None) -> None:
        self._clock = clock
        self._event_bus = event_bus
        self.order_id = order_id

    @property
    def clock(self) -> Clock:
        return self._clock

    def create(self) -> EmptyOrder:
        return create_order()

    def add_item(self, order: Order, item: OrderItem) -> TransitionResult:
        return self._record("add_item", order, machine.add_item(order, item))

    def remove_item(self, order: Order, item_id: str) -> TransitionResult:
        return self._record("remove_item", order, machine.remove_item(order, item_id))

    def pay(self, order: Order) -> TransitionResult:
        return self._record("pay", order, machine.pay(order))

    def refund(self, order: Order) -> TransitionResult:
        return self._record("refund", order, machine.refund(order))

    def complete(self, order: Order) -> TransitionResult:
        return self._record("complete", order, machine.complete(order, self._clock))

    def apply(self, order: Order, command: OrderCommand) -> TransitionResult:
        result = machine.apply_command(order, command, self._clock)
        return self._record(command.command, order, result)

    def replay(self, commands: Iterable[OrderCommand], order: Order | None = None) -> TransitionResult:
        """Apply commands starting from ``order`` (empty by default).

        Stops at the first rejection; later commands are not applied.
        """
        result = TransitionResult.success(order if order is not None else self.create())
        for index, command in enumerate(commands):
            result = self.apply(result.order, command)
            if not result.ok:
                LOGGER.debug(
                    "Replay stopped at command %d (%s)",
                    index,
                    command.command,
                    extra={"order_id": self.order_id},
                )
                break
        return result

    def close(self) -> None:
        self._event_bus.close()

    def _record(self, operation: str, prev: Order, result: TransitionResult) -> TransitionResult:
        ts = self._clock.now()
        if result.error is None:
            self._event_bus.emit(
                OrderTransitionEvent(
                    ts=ts,
                    order_id=self.order_id,
                    operation=operation,
                    prev_state=prev.state,
                    next_state=result.order.state,
                )
            )
        else:
            self._event_bus.emit(
                OrderRejectedEvent(
                    ts=ts,
                    order_id=self.order_id,
                    operation=operation,
                    state=prev.state,
                    error_type=type(result.error).__name__,
                    message=result.error.message,
                )
            )
        return result
