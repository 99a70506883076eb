"""
shopfront/core/errors.py - Store error taxonomy.

Every error here is expected and recoverable. The store raises them straight to its
caller; the HTTP layer decides which status code each one maps to.
"""
from typing import Optional


class StoreError(Exception):
    """Base class for every caller-facing store failure."""
    message = "store error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class InvalidItem(StoreError):
    message = "sku, price and quantity are required"


class CartEmpty(StoreError):
    message = "cart is empty"


class DiscountNotActive(StoreError):
    message = "no active discount code"


class DiscountAlreadyUsed(StoreError):
    message = "discount code already used"


class DiscountMismatch(StoreError):
    message = "discount code mismatch"


class DiscountNotEligible(StoreError):
    message = "not eligible to generate discount code yet"
