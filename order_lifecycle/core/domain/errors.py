"""Order transition errors.

Rejections are normal business outcomes. The state machine returns them inside
a TransitionResult instead of raising; callers that prefer exceptions can raise
them via TransitionResult.unwrap().

The message strings are part of the observable contract and must stay stable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from order_lifecycle.core.domain.types import OrderState


class ErrorMessage:
    """Stable rejection messages."""

    MODIFY_PAID = "Cannot modify already paid order"

    PAY_EMPTY = "Cannot pay for order with no order items"
    PAY_PAID = "Cannot pay for already paid order"

    REFUND_UNPAID = "Cannot refund unpaid order"
    REFUND_COMPLETED = "Cannot refund completed order"
    REFUND_REFUNDED = "Cannot refund already refunded order"

    COMPLETE_UNPAID = "Cannot complete unpaid order"
    COMPLETE_REFUNDED = "Cannot complete refunded order"


class OrderError(Exception):
    """Base class for rejected order transitions.

    Attributes:
        message: one of the ErrorMessage constants.
        state: state of the order the transition was rejected for.
    """

    def __init__(self, message: str, state: OrderState) -> None:
        super().__init__(message)
        self.message = message
        self.state = state

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, state={self.state!r})"


class OrderModificationError(OrderError):
    """Add/remove attempted on a paid, completed or refunded order."""


class PaymentError(OrderError):
    """Payment attempted on an empty or already paid order."""


class RefundError(OrderError):
    """Refund attempted on an unpaid, completed or already refunded order."""


class CompletionError(OrderError):
    """Completion attempted on an unpaid or refunded order."""
