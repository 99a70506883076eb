# shopfront/services/carts.py
from __future__ import annotations

import math
from typing import Dict, List

from shopfront.core.errors import InvalidItem
from shopfront.schemas.cart import Cart, CartItem


class CartRegistry:
    """
    user_id -> {sku: CartItem}.

    Not locked: MemoryStore holds its lock around every call.
    Carts are created on first touch (reads included) and never removed.
    """

    def __init__(self) -> None:
        self._carts: Dict[str, Dict[str, CartItem]] = {}

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._carts

    def _get_or_create(self, user_id: str) -> Dict[str, CartItem]:
        lines = self._carts.get(user_id)
        if lines is None:
            lines = {}
            self._carts[user_id] = lines
        return lines

    def add_item(self, user_id: str, item: CartItem) -> Cart:
        """Add a line or merge into the existing one (quantity adds up, price/name are replaced)."""
        if not (item.sku or "").strip() or item.quantity <= 0:
            raise InvalidItem()
        if not math.isfinite(item.price) or item.price <= 0:
            raise InvalidItem()

        lines = self._get_or_create(user_id)
        existing = lines.get(item.sku)
        if existing is not None:
            lines[item.sku] = existing.model_copy(update={
                "quantity": existing.quantity + item.quantity,
                "price": item.price,
                "name": item.name,
            })
        else:
            lines[item.sku] = item.model_copy()
        return self.snapshot(user_id)

    def snapshot(self, user_id: str) -> Cart:
        lines = self._get_or_create(user_id)
        return Cart(items={sku: it.model_copy() for sku, it in lines.items()})

    def items(self, user_id: str) -> List[CartItem]:
        """Copies of the cart lines, in insertion order."""
        return [it.model_copy() for it in self._get_or_create(user_id).values()]

    def clear(self, user_id: str) -> None:
        self._get_or_create(user_id).clear()
