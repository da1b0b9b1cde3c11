"""
Order lifecycle state machine.

This module defines the canonical order states, the allowed transitions
between them and the five transition functions. Every transition is total
over all five variants: it either produces a new order value or returns a
typed rejection inside a TransitionResult. Order values are never mutated.

The machine is pure and synchronous. The only outside input is the injected
Clock read by complete().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, NoReturn

from order_lifecycle.core.domain.errors import (
    CompletionError,
    ErrorMessage,
    OrderModificationError,
    PaymentError,
    RefundError,
)
from order_lifecycle.core.domain.result import TransitionResult
from order_lifecycle.core.domain.types import (
    EMPTY_ORDER,
    ActiveOrder,
    AddItemCommand,
    CompleteCommand,
    CompletedOrder,
    EmptyOrder,
    PaidOrder,
    PayCommand,
    RefundCommand,
    RefundedOrder,
    RemoveItemCommand,
)

if TYPE_CHECKING:
    from order_lifecycle.core.domain.types import Order, OrderCommand, OrderItem, OrderState
    from order_lifecycle.core.ports.clock import Clock


ORDER_STATES: frozenset[OrderState] = frozenset(
    {
        "empty",
        "active",
        "paid",
        "completed",
        "refunded",
    }
)

# Terminal order states: no transition leaves them.
ORDER_TERMINAL_STATES: frozenset[OrderState] = frozenset(
    {
        "completed",
        "refunded",
    }
)


# Successful order state transitions.
#
# Key   : previous state
# Value : set of states a successful transition can produce
#
# Notes:
# - Self-edges are the no-op successes (remove on empty, remove of an
#   absent id or add on active, complete on completed).
# - active -> empty happens when the last item is removed.
# - Terminal states only carry the completed self-loop.
ORDER_ALLOWED_TRANSITIONS: dict[OrderState, frozenset[OrderState]] = {
    "empty": frozenset({"empty", "active"}),
    "active": frozenset({"empty", "active", "paid"}),
    "paid": frozenset({"completed", "refunded"}),
    "completed": frozenset({"completed"}),
    "refunded": frozenset(),
}


def is_terminal_state(state: str) -> bool:
    """Return True if the given state is terminal."""
    return state in ORDER_TERMINAL_STATES


def is_valid_transition(prev_state: str, next_state: str) -> bool:
    """Return True if the transition prev_state -> next_state is allowed."""
    allowed = ORDER_ALLOWED_TRANSITIONS.get(prev_state)
    if allowed is None:
        return False
    return next_state in allowed


def _unknown_variant(order: object) -> NoReturn:
    raise TypeError(f"Unknown order variant: {type(order).__name__}")


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def add_item(order: Order, item: OrderItem) -> TransitionResult:
    """Append an item. Duplicate ids are kept as separate entries."""
    if isinstance(order, EmptyOrder):
        return TransitionResult.success(ActiveOrder(items=(item,)))
    if isinstance(order, ActiveOrder):
        return TransitionResult.success(ActiveOrder(items=(*order.items, item)))
    if isinstance(order, (PaidOrder, CompletedOrder, RefundedOrder)):
        return TransitionResult.failure(
            order, OrderModificationError(ErrorMessage.MODIFY_PAID, order.state)
        )
    _unknown_variant(order)


def remove_item(order: Order, item_id: str) -> TransitionResult:
    """Remove every item with ``item_id``.

    Removing the last item returns the order to empty. An absent id (or an
    empty order) is a no-op that returns the input value itself.
    """
    if isinstance(order, EmptyOrder):
        return TransitionResult.success(order)
    if isinstance(order, ActiveOrder):
        remaining = tuple(item for item in order.items if item.id != item_id)
        if len(remaining) == len(order.items):
            return TransitionResult.success(order)
        if remaining:
            return TransitionResult.success(ActiveOrder(items=remaining))
        return TransitionResult.success(EMPTY_ORDER)
    if isinstance(order, (PaidOrder, CompletedOrder, RefundedOrder)):
        return TransitionResult.failure(
            order, OrderModificationError(ErrorMessage.MODIFY_PAID, order.state)
        )
    _unknown_variant(order)


def pay(order: Order) -> TransitionResult:
    """Capture payment for the sum of the current item prices."""
    if isinstance(order, EmptyOrder):
        return TransitionResult.failure(order, PaymentError(ErrorMessage.PAY_EMPTY, order.state))
    if isinstance(order, ActiveOrder):
        amount_paid = sum(item.price for item in order.items)
        return TransitionResult.success(PaidOrder(items=order.items, amount_paid=amount_paid))
    if isinstance(order, (PaidOrder, CompletedOrder, RefundedOrder)):
        return TransitionResult.failure(order, PaymentError(ErrorMessage.PAY_PAID, order.state))
    _unknown_variant(order)


def refund(order: Order) -> TransitionResult:
    """Refund the full paid amount of a paid, not yet completed order."""
    if isinstance(order, (EmptyOrder, ActiveOrder)):
        return TransitionResult.failure(order, RefundError(ErrorMessage.REFUND_UNPAID, order.state))
    if isinstance(order, PaidOrder):
        return TransitionResult.success(
            RefundedOrder(
                items=order.items,
                amount_paid=order.amount_paid,
                amount_refunded=order.amount_paid,
            )
        )
    if isinstance(order, CompletedOrder):
        return TransitionResult.failure(order, RefundError(ErrorMessage.REFUND_COMPLETED, order.state))
    if isinstance(order, RefundedOrder):
        return TransitionResult.failure(order, RefundError(ErrorMessage.REFUND_REFUNDED, order.state))
    _unknown_variant(order)


def complete(order: Order, clock: Clock) -> TransitionResult:
    """Mark a paid order as fulfilled at ``clock.now()``.

    Completing an already completed order is an idempotent no-op: the input
    value is returned and the clock is not read.
    """
    if isinstance(order, (EmptyOrder, ActiveOrder)):
        return TransitionResult.failure(
            order, CompletionError(ErrorMessage.COMPLETE_UNPAID, order.state)
        )
    if isinstance(order, PaidOrder):
        return TransitionResult.success(
            CompletedOrder(
                items=order.items,
                amount_paid=order.amount_paid,
                completed_at=clock.now(),
            )
        )
    if isinstance(order, CompletedOrder):
        return TransitionResult.success(order)
    if isinstance(order, RefundedOrder):
        return TransitionResult.failure(
            order, CompletionError(ErrorMessage.COMPLETE_REFUNDED, order.state)
        )
    _unknown_variant(order)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def apply_command(order: Order, command: OrderCommand, clock: Clock) -> TransitionResult:
    """Dispatch a command to the matching transition."""
    if isinstance(command, AddItemCommand):
        return add_item(order, command.item)
    if isinstance(command, RemoveItemCommand):
        return remove_item(order, command.item_id)
    if isinstance(command, PayCommand):
        return pay(order)
    if isinstance(command, RefundCommand):
        return refund(order)
    if isinstance(command, CompleteCommand):
        return complete(order, clock)
    raise TypeError(f"Unknown order command: {type(command).__name__}")


def run_commands(order: Order, commands: Iterable[OrderCommand], clock: Clock) -> TransitionResult:
    """Apply commands in order, stopping at the first rejection.

    On failure the result carries the order value the rejected command was
    applied to.
    """
    result = TransitionResult.success(order)
    for command in commands:
        result = result.then(lambda current, cmd=command: apply_command(current, cmd, clock))
        if not result.ok:
            break
    return result
