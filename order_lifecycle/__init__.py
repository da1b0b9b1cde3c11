"""Public API for the order_lifecycle package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# State machine
# ----------------------------------------------------------------------
from order_lifecycle.core.domain.errors import (
    CompletionError,
    ErrorMessage,
    OrderError,
    OrderModificationError,
    PaymentError,
    RefundError,
)
from order_lifecycle.core.domain.order_state_machine import (
    ORDER_ALLOWED_TRANSITIONS,
    ORDER_STATES,
    ORDER_TERMINAL_STATES,
    add_item,
    apply_command,
    complete,
    is_terminal_state,
    is_valid_transition,
    pay,
    refund,
    remove_item,
    run_commands,
)
from order_lifecycle.core.domain.result import TransitionResult

# ----------------------------------------------------------------------
# Domain Types
# ----------------------------------------------------------------------
from order_lifecycle.core.domain.types import (
    EMPTY_ORDER,
    ActiveOrder,
    AddItemCommand,
    CompleteCommand,
    CompletedOrder,
    EmptyOrder,
    Order,
    OrderCommand,
    OrderItem,
    PaidOrder,
    PayCommand,
    RefundCommand,
    RefundedOrder,
    RemoveItemCommand,
    create_order,
)
from order_lifecycle.core.events.event_bus import EventBus

# ----------------------------------------------------------------------
# Lifecycle service and config
# ----------------------------------------------------------------------
from order_lifecycle.core.lifecycle.lifecycle_config import LifecycleConfig, MetricsConfig
from order_lifecycle.core.lifecycle.order_lifecycle import OrderLifecycle
from order_lifecycle.core.ports.clock import Clock, FixedClock, SystemClock

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Transitions
    "add_item",
    "remove_item",
    "pay",
    "refund",
    "complete",
    "apply_command",
    "run_commands",
    "TransitionResult",
    "ORDER_STATES",
    "ORDER_TERMINAL_STATES",
    "ORDER_ALLOWED_TRANSITIONS",
    "is_terminal_state",
    "is_valid_transition",

    # Errors
    "OrderError",
    "OrderModificationError",
    "PaymentError",
    "RefundError",
    "CompletionError",
    "ErrorMessage",

    # Domain types
    "Order",
    "OrderItem",
    "EmptyOrder",
    "ActiveOrder",
    "PaidOrder",
    "CompletedOrder",
    "RefundedOrder",
    "EMPTY_ORDER",
    "create_order",
    "OrderCommand",
    "AddItemCommand",
    "RemoveItemCommand",
    "PayCommand",
    "RefundCommand",
    "CompleteCommand",

    # Collaborators
    "Clock",
    "SystemClock",
    "FixedClock",
    "EventBus",

    # Lifecycle
    "OrderLifecycle",
    "LifecycleConfig",
    "MetricsConfig",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("order-lifecycle")
except PackageNotFoundError:
    __version__ = "0.0.0"
