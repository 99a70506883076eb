"""
shopfront/routers/admin.py — Admin: nth-order discount codes and store stats.

- POST /admin/discounts/generate : issue the next 10% code once the order count allows it
  (409 while not eligible or while a code is still waiting to be used).
- GET  /admin/stats               : order/revenue totals and the discount code history.

No authentication is applied here; protect the prefix at the proxy if needed.
"""
from fastapi import APIRouter, Depends, status

from shopfront.core.dependencies import get_store
from shopfront.schemas.discount import DiscountCode, Stats
from shopfront.services.store import MemoryStore

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/discounts/generate",
    response_model=DiscountCode,
    status_code=status.HTTP_201_CREATED,
    summary="Generate Discount Code",
)
def generate_discount(store: MemoryStore = Depends(get_store)):
    return store.generate_discount()


@router.get("/stats", response_model=Stats, summary="Store Stats")
def get_stats(store: MemoryStore = Depends(get_store)):
    return store.stats()
