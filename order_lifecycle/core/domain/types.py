"""Core order data models.

This module defines the canonical Pydantic models for order items, the five
order variants and the command union. Each variant carries exactly the data
valid for its state, so combinations such as "paid with zero items" or
"refunded and completed" cannot be constructed. These types are treated as
schema definitions (see core/schemas/*.schema.json).
"""

# pylint: disable=line-too-long,missing-class-docstring,missing-function-docstring
from __future__ import annotations

from typing import Annotated, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


class OrderItem(BaseModel):
    """Immutable line item. Identity is by ``id``."""

    id: str = Field(..., min_length=1, description="Item identifier, unique within an order by convention.")
    # Zero is allowed, negative prices are rejected at construction.
    price: float = Field(..., ge=0, description="Item price.")

    model_config = ConfigDict(extra="forbid", frozen=True)


# Non-empty, immutable item sequence shared by every post-empty variant.
OrderItems = Annotated[tuple[OrderItem, ...], Field(min_length=1)]


# ---------------------------------------------------------------------------
# Order variants (discriminated union)
# ---------------------------------------------------------------------------


class EmptyOrder(BaseModel):
    """No items added yet."""

    state: Literal["empty"] = "empty"

    model_config = ConfigDict(extra="forbid", frozen=True)


class ActiveOrder(BaseModel):
    """Items added, not yet paid."""

    state: Literal["active"] = "active"
    items: OrderItems

    model_config = ConfigDict(extra="forbid", frozen=True)


class PaidOrder(BaseModel):
    """Payment captured. The item sequence is frozen from here on."""

    state: Literal["paid"] = "paid"
    items: OrderItems
    amount_paid: float = Field(..., ge=0, description="Sum of item prices at the moment of payment.")

    model_config = ConfigDict(extra="forbid", frozen=True)


class CompletedOrder(BaseModel):
    state: Literal["completed"] = "completed"
    items: OrderItems
    amount_paid: float = Field(..., ge=0)
    completed_at: AwareDatetime = Field(..., description="Timezone-aware instant the order was fulfilled.")

    model_config = ConfigDict(extra="forbid", frozen=True)


class RefundedOrder(BaseModel):
    """Payment returned before completion. Only full refunds exist."""

    state: Literal["refunded"] = "refunded"
    items: OrderItems
    amount_paid: float = Field(..., ge=0)
    amount_refunded: float = Field(..., ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def validate_full_refund(self) -> RefundedOrder:
        if self.amount_refunded != self.amount_paid:
            raise ValueError("amount_refunded must equal amount_paid (full refund only)")
        return self


# Discriminated union: Pydantic selects the variant based on ``state``.
Order = Annotated[
    EmptyOrder | ActiveOrder | PaidOrder | CompletedOrder | RefundedOrder,
    Field(discriminator="state"),
]

OrderState = Literal["empty", "active", "paid", "completed", "refunded"]

EMPTY_ORDER = EmptyOrder()


def create_order() -> EmptyOrder:
    """Return a new order in the empty state."""
    return EMPTY_ORDER


# ---------------------------------------------------------------------------
# Commands (discriminated union)
# ---------------------------------------------------------------------------


class AddItemCommand(BaseModel):
    command: Literal["add_item"] = Field("add_item", description="Operation to apply.")
    item: OrderItem

    model_config = ConfigDict(extra="forbid", frozen=True)


class RemoveItemCommand(BaseModel):
    command: Literal["remove_item"] = Field("remove_item", description="Operation to apply.")
    item_id: str = Field(..., min_length=1, description="Every item with this id is removed.")

    model_config = ConfigDict(extra="forbid", frozen=True)


class PayCommand(BaseModel):
    """Pay the order. The amount is always computed from the items."""

    command: Literal["pay"] = Field("pay", description="Operation to apply.")

    model_config = ConfigDict(extra="forbid", frozen=True)


class RefundCommand(BaseModel):
    """Refund the full paid amount."""

    command: Literal["refund"] = Field("refund", description="Operation to apply.")

    model_config = ConfigDict(extra="forbid", frozen=True)


class CompleteCommand(BaseModel):
    command: Literal["complete"] = Field("complete", description="Operation to apply.")

    model_config = ConfigDict(extra="forbid", frozen=True)


OrderCommand = Annotated[
    AddItemCommand | RemoveItemCommand | PayCommand | RefundCommand | CompleteCommand,
    Field(discriminator="command"),
]
