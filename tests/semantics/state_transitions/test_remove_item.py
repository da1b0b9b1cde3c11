"""
Semantic test: remove_item.

Invariant:
Removing from an active order filters every matching entry. Removing the
last item returns to empty. An absent id, or an empty order, is a no-op that
returns the input value itself.
"""

from __future__ import annotations

from order_lifecycle.core.domain.order_state_machine import remove_item
from order_lifecycle.core.domain.types import EMPTY_ORDER, ActiveOrder, EmptyOrder, OrderItem

ITEM_A = OrderItem(id="a", price=5)
ITEM_B = OrderItem(id="b", price=7)


def test_remove_on_empty_is_noop() -> None:
    result = remove_item(EMPTY_ORDER, "a")

    assert result.ok
    assert result.order is EMPTY_ORDER


def test_remove_matching_item_keeps_the_rest() -> None:
    active = ActiveOrder(items=(ITEM_A, ITEM_B))

    result = remove_item(active, "a")

    assert result.ok
    assert isinstance(result.order, ActiveOrder)
    assert result.order.items == (ITEM_B,)
    assert active.items == (ITEM_A, ITEM_B)


def test_remove_last_item_returns_to_empty() -> None:
    result = remove_item(ActiveOrder(items=(ITEM_A,)), "a")

    assert result.ok
    assert isinstance(result.order, EmptyOrder)


def test_remove_filters_all_duplicates() -> None:
    active = ActiveOrder(items=(ITEM_A, ITEM_B, OrderItem(id="a", price=1)))

    result = remove_item(active, "a")

    assert result.order.items == (ITEM_B,)


def test_remove_absent_id_returns_input_unchanged() -> None:
    active = ActiveOrder(items=(ITEM_A, ITEM_B))

    result = remove_item(active, "zzz")

    assert result.ok
    assert result.order is active
