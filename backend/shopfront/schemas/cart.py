"""
shopfront/schemas/cart.py - Pydantic models for Cart.

JSON uses camelCase names; Python code uses snake_case (populate_by_name).
"""
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Base(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartItem(_Base):
    sku: str = Field(..., description="Caller-supplied item identity; unique within a cart")
    name: str = Field("", description="Display name of the item")
    price: float = Field(..., allow_inf_nan=False, description="Unit price at the time of adding to cart")
    quantity: int = Field(..., description="Quantity of the item in the cart")


class Cart(_Base):
    items: Dict[str, CartItem] = Field(default_factory=dict, description="Cart lines keyed by sku")


class AddItemBody(_Base):
    """Add-to-cart payload. Missing fields fall back to zero values and are rejected by the route."""
    sku: str = ""
    name: str = ""
    price: float = Field(0, allow_inf_nan=False)
    quantity: int = 0

    def to_item(self) -> CartItem:
        return CartItem(sku=self.sku, name=self.name, price=self.price, quantity=self.quantity)
