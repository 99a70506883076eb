"""
shopfront/services/ledger.py - Append-only order ledger with running totals.

Totals are kept incrementally so stats reads stay O(1). Money is summed as Decimal
(see `money()`) and only turned into float at the edge. `rederive()` rebuilds the totals
from the stored orders alone (item prices, quantities, discount_value) and must agree
with the running counters.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List

from shopfront.schemas.order import Order


def money(value) -> Decimal:
    return Decimal(str(value))


@dataclass
class Totals:
    total_orders: int = 0
    total_items_sold: int = 0
    gross_revenue: Decimal = Decimal("0")
    total_discount_given: Decimal = Decimal("0")


class OrderLedger:
    def __init__(self) -> None:
        self._orders: List[Order] = []
        self._totals = Totals()

    def __len__(self) -> int:
        return len(self._orders)

    def record(self, order: Order, gross: Decimal, discount: Decimal) -> None:
        self._orders.append(order.model_copy(deep=True))
        t = self._totals
        t.total_orders += 1
        t.total_items_sold += order.item_count
        t.gross_revenue += gross
        t.total_discount_given += discount

    def totals(self) -> Totals:
        t = self._totals
        return Totals(t.total_orders, t.total_items_sold, t.gross_revenue, t.total_discount_given)

    def orders(self) -> List[Order]:
        return [o.model_copy(deep=True) for o in self._orders]

    def rederive(self) -> Totals:
        """Recompute totals from the recorded orders alone; must always match `totals()`."""
        t = Totals()
        for order in self._orders:
            t.total_orders += 1
            t.total_items_sold += sum(it.quantity for it in order.items)
            t.gross_revenue += sum((money(it.price) * it.quantity for it in order.items), Decimal("0"))
            t.total_discount_given += money(order.discount_value)
        return t
