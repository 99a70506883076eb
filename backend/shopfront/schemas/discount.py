"""
shopfront/schemas/discount.py - Pydantic models for discount codes and admin stats.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from shopfront.schemas.cart import _Base


class DiscountCode(_Base):
    code: str = Field(..., description="Unique code string, e.g. DISC-7KQ2ZP")
    percentage: float = Field(..., description="Discount percentage (10 for 10% off)")
    generated_at: datetime
    redeemed_at: Optional[datetime] = None
    is_redeemed: bool = False
    eligible_order_number: int = Field(..., description="Order count that unlocked this code")


class Stats(_Base):
    total_orders: int = 0
    total_items_sold: int = 0
    gross_revenue: float = 0.0
    total_discount_given: float = 0.0
    discount_codes: List[DiscountCode] = Field(default_factory=list, description="Redeemed codes, then the active one")
    active_discount: Optional[DiscountCode] = None
    next_eligible_order: int = 0
