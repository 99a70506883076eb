"""
shopfront/routers/carts.py
Cart endpoints: add an item, view the cart, check out.

Behavior
- The user is identified by the `{user_id}` path segment; there is no authentication.
- Add merges lines by sku: quantities add up, price and name take the latest values.
  Prices must be finite and positive.
- GET creates an empty cart for unknown users (it never 404s).
- Checkout turns the whole cart into one order, optionally redeeming the active
  discount code, and leaves the cart empty. Its body is read leniently: a missing,
  malformed or mistyped body means "no discount code", never a 400.

Store errors (CartEmpty, discount problems) are turned into `{"error": ...}` responses
by the handlers registered in main.py.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from shopfront.core.dependencies import get_store
from shopfront.schemas.cart import AddItemBody, Cart
from shopfront.schemas.order import CheckoutBody, Order
from shopfront.services.store import MemoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart/{user_id}", tags=["Cart"])


# ---------- tiny utils ----------
async def _discount_code(request: Request) -> str:
    """`discountCode` from the checkout body, or "" when the body is absent or unreadable."""
    raw = await request.body()
    if not raw.strip():
        return ""
    try:
        return CheckoutBody.model_validate_json(raw).discount_code
    except ValidationError:
        logger.info("Ignoring unreadable checkout body for %s", request.url.path)
        return ""


# ---------- routes ----------
@router.post("/items", response_model=Cart, status_code=status.HTTP_201_CREATED)
def add_to_cart(user_id: str, payload: AddItemBody, store: MemoryStore = Depends(get_store)):
    """Add an item (or more of it) to the user's cart and return the whole cart."""
    if not payload.sku or payload.quantity <= 0 or payload.price <= 0:
        raise HTTPException(status_code=400, detail="sku, price and quantity are required")
    return store.add_item(user_id, payload.to_item())


@router.get("/items", response_model=Cart)
def view_cart(user_id: str, store: MemoryStore = Depends(get_store)):
    return store.view_cart(user_id)


@router.post("/checkout", response_model=Order)
def checkout(
    user_id: str,
    code: str = Depends(_discount_code),
    store: MemoryStore = Depends(get_store),
):
    """
    Finalize the cart into an order.
    Body is optional; `{"discountCode": "DISC-XXXXXX"}` applies the active code.
    """
    return store.checkout(user_id, code)
