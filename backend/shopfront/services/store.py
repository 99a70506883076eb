"""
# `shopfront/services/store.py` — In-memory store

## Overview
`MemoryStore` owns every cart, order and discount code of the process. It composes:
- `CartRegistry`  (services/carts.py)
- `OrderLedger`   (services/ledger.py)
- `DiscountEngine` (services/discounts.py)

## Concurrency
One `threading.Lock` guards the whole store. Every public method takes it for its
whole duration (`with self._lock:`), so two checkouts never interleave, and neither do a
checkout and a cart change or code generation for *any* user. The helpers below never
take the lock and never call a public method, so there is no re-entrance.

## Errors
Failures are `StoreError` subclasses (core/errors.py), raised before anything is
mutated. A failed checkout records no order and leaves the discount state untouched.

## Returned values
Callers always receive copies (pydantic `model_copy`), never live state.
"""
from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import Callable, Optional

from shopfront.core.codes import gen_order_id
from shopfront.core.errors import CartEmpty, InvalidItem, StoreError
from shopfront.schemas.cart import Cart, CartItem
from shopfront.schemas.discount import DiscountCode, Stats
from shopfront.schemas.order import Order
from shopfront.services.carts import CartRegistry
from shopfront.services.discounts import DEFAULT_THRESHOLD, DiscountEngine, utcnow
from shopfront.services.ledger import OrderLedger, money

logger = logging.getLogger(__name__)


class MemoryStore:
    def __init__(
        self,
        nth_order: int = DEFAULT_THRESHOLD,
        code_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._lock = threading.Lock()
        self.carts = CartRegistry()
        self.ledger = OrderLedger()
        self.discounts = DiscountEngine(nth_order, code_factory=code_factory)

    @property
    def threshold(self) -> int:
        return self.discounts.threshold

    # ---------- carts ----------
    def add_item(self, user_id: str, item: CartItem) -> Cart:
        with self._lock:
            return self.carts.add_item(user_id, item)

    def view_cart(self, user_id: str) -> Cart:
        with self._lock:
            return self.carts.snapshot(user_id)

    # ---------- checkout ----------
    def checkout(self, user_id: str, discount_code: str = "") -> Order:
        with self._lock:
            items = self.carts.items(user_id)
            if not items:
                raise CartEmpty()

            gross = sum((money(it.price) * it.quantity for it in items), Decimal("0"))
            if not gross.is_finite():
                raise InvalidItem("cart holds an item without a finite price")

            # Validate and price everything first; state changes only once the order exists.
            discount = Decimal("0")
            code_used = None
            if discount_code:
                try:
                    active = self.discounts.check(discount_code)
                except StoreError as exc:
                    logger.warning("Checkout for %s rejected discount %r: %s", user_id, discount_code, exc)
                    raise
                discount = gross * money(active.percentage) / Decimal("100")
                code_used = active.code

            order = Order(
                id=gen_order_id(),
                user_id=user_id,
                items=items,
                total_amount=float(gross - discount),
                discount_code=code_used,
                discount_value=float(discount),
                created_at=utcnow(),
            )
            if code_used:
                self.discounts.redeem(code_used)
            self.ledger.record(order, gross, discount)
            self.carts.clear(user_id)

            logger.info(
                "Order %s for %s: %d item(s), gross=%s discount=%s",
                order.id, user_id, order.item_count, gross, discount,
            )
            return order.model_copy(deep=True)

    # ---------- admin ----------
    def generate_discount(self) -> DiscountCode:
        with self._lock:
            return self.discounts.generate(len(self.ledger))

    def stats(self) -> Stats:
        with self._lock:
            totals = self.ledger.totals()
            return Stats(
                total_orders=totals.total_orders,
                total_items_sold=totals.total_items_sold,
                gross_revenue=float(totals.gross_revenue),
                total_discount_given=float(totals.total_discount_given),
                discount_codes=self.discounts.history(),
                active_discount=self.discounts.active,
                next_eligible_order=self.discounts.next_eligible_order,
            )
