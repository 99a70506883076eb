"""
shopfront/services/discounts.py - "Every Nth order unlocks 10% off" code lifecycle.

States
- no active code          -> generate() allowed once total_orders >= next_eligible_order
- active, unredeemed      -> redeem() at checkout moves it into history
- redeemed (in history)   -> immutable; next_eligible_order has moved up by `threshold`

Like the other services, this class does no locking of its own.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from shopfront.core.codes import gen_discount_code
from shopfront.core.errors import (
    DiscountAlreadyUsed,
    DiscountMismatch,
    DiscountNotActive,
    DiscountNotEligible,
)
from shopfront.schemas.discount import DiscountCode

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 5
DISCOUNT_PERCENTAGE = 10.0
MAX_CODE_ATTEMPTS = 20


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DiscountEngine:
    def __init__(
        self,
        threshold: int = DEFAULT_THRESHOLD,
        code_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        if threshold <= 0:
            threshold = DEFAULT_THRESHOLD
        self.threshold = threshold
        self.next_eligible_order = threshold
        self._code_factory = code_factory or gen_discount_code
        self._active: Optional[DiscountCode] = None
        self._history: List[DiscountCode] = []

    @property
    def active(self) -> Optional[DiscountCode]:
        return self._active.model_copy() if self._active else None

    def is_eligible(self, total_orders: int) -> bool:
        has_open_code = self._active is not None and not self._active.is_redeemed
        return total_orders >= self.next_eligible_order and not has_open_code

    def generate(self, total_orders: int) -> DiscountCode:
        if not self.is_eligible(total_orders):
            raise DiscountNotEligible()

        code = DiscountCode(
            code=self._new_code(),
            percentage=DISCOUNT_PERCENTAGE,
            generated_at=utcnow(),
            eligible_order_number=self.next_eligible_order,
        )
        self._active = code
        logger.info("Discount code %s generated at order #%d", code.code, total_orders)
        return code.model_copy()

    def check(self, code: str) -> DiscountCode:
        """Validate `code` against the active one without changing any state."""
        active = self._active
        if active is None:
            raise DiscountNotActive()
        if active.is_redeemed:
            raise DiscountAlreadyUsed()
        if active.code != code:
            raise DiscountMismatch()
        return active.model_copy()

    def redeem(self, code: str) -> DiscountCode:
        self.check(code)
        active = self._active

        redeemed = active.model_copy(update={"is_redeemed": True, "redeemed_at": utcnow()})
        self._history.append(redeemed)
        self._active = None
        self.next_eligible_order += self.threshold
        logger.info("Discount code %s redeemed; next eligible order is #%d", code, self.next_eligible_order)
        return redeemed.model_copy()

    def history(self) -> List[DiscountCode]:
        """Redeemed codes in redemption order, followed by the active one if present."""
        out = [c.model_copy() for c in self._history]
        if self._active is not None:
            out.append(self._active.model_copy())
        return out

    def _new_code(self) -> str:
        used = {c.code for c in self._history}
        for _ in range(MAX_CODE_ATTEMPTS):
            candidate = self._code_factory()
            if candidate not in used:
                return candidate
        raise RuntimeError(f"could not generate an unused discount code in {MAX_CODE_ATTEMPTS} attempts")
