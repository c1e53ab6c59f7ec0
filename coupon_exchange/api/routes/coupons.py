"""Coupon Routes - issue, view and redeem single-use coupons.

Invariants:
    - POST /generate takes form fields dealId, originId, expiryDays
    - GET /generate is always rejected with 400
    - Redemption failure returns {success: false, message} with 409 and the
      same message whether the coupon is missing, used or expired
    - Coupon ids are taken as raw strings: malformed ids are 404 / 409,
      never a 422 from path parsing

Design Decisions:
    - /generate routes declared before /{coupon_id} so "generate" is never
      read as a coupon id
"""

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import JSONResponse

from coupon_exchange.api.dependencies import get_services
from coupon_exchange.core.errors import (
    CouponRedemptionConflictError, InputValidationError,
)
from coupon_exchange.schemas.coupon import (
    CouponViewResponse, IssueCouponResponse, RedeemCouponResponse,
)
from coupon_exchange.services.wiring import Services

router = APIRouter(prefix="/api/v1/coupons", tags=["coupons"])


@router.post("/generate", response_model=IssueCouponResponse)
async def generate_coupon(
    deal_id: str | None = Form(None, alias="dealId"),
    origin_id: str | None = Form(None, alias="originId"),
    expiry_days: str | None = Form(None, alias="expiryDays"),
    services: Services = Depends(get_services),
):
    """Issue one coupon for a partner deal shown on the origin store's page."""
    receipt = await services.coupons.issue(deal_id, origin_id, expiry_days)
    return IssueCouponResponse(
        issued_id=receipt.coupon_id, expires_at=receipt.expires_at,
    )


@router.get("/generate")
async def generate_coupon_wrong_method():
    raise InputValidationError(
        "Coupons can only be issued with a POST form submission.", "method",
    )


@router.get("/{coupon_id}", response_model=CouponViewResponse)
async def get_coupon(
    coupon_id: str, services: Services = Depends(get_services),
):
    """Coupon page data: the coupon, its deal and the partner store."""
    view = await services.coupons.view(coupon_id)
    return CouponViewResponse.from_view(view, services.coupons.clock())


@router.post("/{coupon_id}/redeem", response_model=RedeemCouponResponse)
async def redeem_coupon(
    coupon_id: str, services: Services = Depends(get_services),
):
    """Store owner confirms the coupon at the counter."""
    try:
        used_at = await services.coupons.redeem(coupon_id)
    except CouponRedemptionConflictError as e:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=RedeemCouponResponse(
                success=False, message=e.message,
            ).model_dump(by_alias=True, mode="json"),
        )
    return RedeemCouponResponse(success=True, used_at=used_at)
