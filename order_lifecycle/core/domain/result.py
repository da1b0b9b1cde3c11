"""Explicit success/failure value returned by every order transition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from order_lifecycle.core.domain.errors import OrderError
    from order_lifecycle.core.domain.types import Order


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Outcome of a single transition.

    - success: ``order`` is the new order value, ``error`` is None
    - failure: ``order`` is the unchanged input value, ``error`` carries the
      typed rejection
    """

    order: Order
    error: OrderError | None = None

    @classmethod
    def success(cls, order: Order) -> TransitionResult:
        return cls(order=order)

    @classmethod
    def failure(cls, order: Order, error: OrderError) -> TransitionResult:
        return cls(order=order, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Order:
        """Return the order, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.order

    def then(self, fn: Callable[[Order], TransitionResult]) -> TransitionResult:
        """Apply ``fn`` to the order on success; pass a failure through unchanged."""
        if self.error is not None:
            return self
        return fn(self.order)
