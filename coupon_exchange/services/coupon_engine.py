"""Coupon Engine - issuance, redemption and lookup of single-use coupons.

Invariants:
    - issue() validates all three fields before the single insert; two calls
      with the same input create two coupons
    - redeem() performs exactly one conditional update and no prior read;
      zero affected rows -> CouponRedemptionConflictError
    - "not found", "already used" and "expired" share one user-facing message
    - view() of an unknown or malformed id -> ResourceNotFoundError

Design Decisions:
    - The engine holds no locks: concurrent redemptions are settled by the
      database evaluating WHERE status = 'unused' atomically
    - Expiry is advisory unless enforce_expiry is set, in which case the
      check joins the same conditional update rather than a separate read
    - Clock injected (`clock`) so tests can pin "now"
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from coupon_exchange.core.coupon_lifecycle import (
    compute_expires_at, parse_coupon_id, parse_issue_request,
)
from coupon_exchange.core.domain_types import CouponId, CouponView
from coupon_exchange.core.errors import (
    CouponIssueFailedError, CouponRedemptionConflictError, DatabaseError,
    ErrorContext, ResourceNotFoundError,
)
from coupon_exchange.core.repository_protocols import IssuedCouponRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class IssuedCouponReceipt:
    coupon_id: CouponId
    expires_at: datetime


class CouponEngine:
    """Single-use coupon lifecycle: unused -> used, exactly once."""

    def __init__(
        self,
        coupons: IssuedCouponRepository,
        enforce_expiry: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.coupons = coupons
        self.enforce_expiry = enforce_expiry
        self.clock = clock

    async def issue(
        self,
        deal_id: str | None,
        origin_id: str | None,
        expiry_days: str | None,
    ) -> IssuedCouponReceipt:
        request = parse_issue_request(deal_id, origin_id, expiry_days)
        expires_at = compute_expires_at(self.clock(), request.expiry_days)
        context = ErrorContext(
            store_id=str(request.origin_store_id), deal_id=request.deal_id,
        )

        try:
            coupon_id = await self.coupons.insert_issued_coupon(
                request.deal_id, request.origin_store_id, expires_at,
            )
        except DatabaseError as e:
            raise CouponIssueFailedError(e.operation, context) from e
        if not coupon_id:
            raise CouponIssueFailedError("no coupon id returned", context)

        logger.info(
            "Coupon issued",
            extra={
                "coupon_id": coupon_id,
                "deal_id": request.deal_id,
                "store_id": request.origin_store_id,
            },
        )
        return IssuedCouponReceipt(coupon_id=coupon_id, expires_at=expires_at)

    async def redeem(self, coupon_id: str) -> datetime:
        """Mark the coupon used. Returns the stamped used_at."""
        parsed = parse_coupon_id(coupon_id)
        if parsed is None:
            raise CouponRedemptionConflictError(ErrorContext(coupon_id=coupon_id))

        now = self.clock()
        affected = await self.coupons.conditional_mark_used(
            parsed, now, require_unexpired=self.enforce_expiry,
        )
        if affected != 1:
            logger.info(
                "Coupon redemption rejected",
                extra={"coupon_id": parsed},
            )
            raise CouponRedemptionConflictError(ErrorContext(coupon_id=str(parsed)))

        logger.info("Coupon redeemed", extra={"coupon_id": parsed})
        return now

    async def view(self, coupon_id: str) -> CouponView:
        parsed = parse_coupon_id(coupon_id)
        coupon = await self.coupons.get_issued_coupon_with_deal_and_store(
            parsed,
        ) if parsed else None
        if coupon is None:
            raise ResourceNotFoundError(
                "IssuedCoupon", coupon_id, ErrorContext(coupon_id=coupon_id),
            )
        return coupon
