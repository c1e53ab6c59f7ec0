"""Coupon Schemas - issuance, redemption and coupon page payloads.

Invariants:
    - IssueCouponResponse always carries success=True; failures use the
      error envelope from core.errors
    - RedeemCouponResponse.message is the collapsed conflict message on failure
"""

from datetime import datetime
from uuid import UUID

from coupon_exchange.core.coupon_lifecycle import is_expired
from coupon_exchange.core.domain_types import CouponView
from coupon_exchange.schemas.base import CamelModel


class IssueCouponResponse(CamelModel):
    success: bool = True
    issued_id: UUID
    expires_at: datetime
    message: str = "Coupon issued successfully."


class RedeemCouponResponse(CamelModel):
    success: bool
    message: str | None = None
    used_at: datetime | None = None


class CouponDealSummary(CamelModel):
    deal_id: int
    description: str
    conditions: str | None = None
    store_id: UUID
    store_name: str | None = None
    map_url: str | None = None


class CouponViewResponse(CamelModel):
    id: UUID
    status: str
    expires_at: datetime
    used_at: datetime | None = None
    expired: bool
    origin_store_id: UUID
    deal: CouponDealSummary

    @classmethod
    def from_view(cls, view: CouponView, now: datetime) -> "CouponViewResponse":
        return cls(
            id=view.id,
            status=view.status.value,
            expires_at=view.expires_at,
            used_at=view.used_at,
            expired=is_expired(view.expires_at, now),
            origin_store_id=view.origin_store_id,
            deal=CouponDealSummary(
                deal_id=view.deal_id,
                description=view.description,
                conditions=view.conditions,
                store_id=view.store_id,
                store_name=view.store_name,
                map_url=view.map_url,
            ),
        )
