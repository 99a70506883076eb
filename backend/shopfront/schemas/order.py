# shopfront/schemas/order.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from shopfront.schemas.cart import CartItem, _Base


# (Input) checkout payload; the whole body is optional
class CheckoutBody(_Base):
    discount_code: str = Field("", description="Active discount code, empty for none")


# (Output) finalized order
class Order(_Base):
    id: str
    user_id: str
    items: List[CartItem] = Field(default_factory=list)
    total_amount: float = Field(..., description="Gross minus discount")
    discount_code: Optional[str] = None
    discount_value: float = 0.0
    created_at: datetime

    @property
    def item_count(self) -> int:
        return sum(it.quantity for it in self.items)
