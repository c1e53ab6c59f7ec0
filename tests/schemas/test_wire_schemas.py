"""Wire schemas - camelCase serialization and DealCreate validation.

Invariants:
    - Responses serialize with camelCase keys (issuedId, storeName, expiryDays)
    - Requests accept both camelCase and snake_case names
    - DealCreate.description is stripped and must not be blank
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from coupon_exchange.core.domain_types import (
    CouponStatus, CouponView, DealId, PartnerOffer, StoreId,
)
from coupon_exchange.schemas.coupon import CouponViewResponse, IssueCouponResponse
from coupon_exchange.schemas.shop import DealCreate, PartnerDealResponse


def test_issue_response_uses_camel_case():
    cid = uuid4()
    body = IssueCouponResponse(
        issued_id=cid, expires_at=datetime(2026, 1, 8, tzinfo=timezone.utc),
    ).model_dump(by_alias=True, mode="json")
    assert body["success"] is True
    assert body["issuedId"] == str(cid)
    assert "expiresAt" in body


def test_partner_deal_response_from_offer():
    owner = StoreId(uuid4())
    offer = PartnerOffer(
        deal_id=DealId(3), store_id=owner, description="Free latte",
        conditions=None, store_name="Bean There", map_url="https://map/bean",
        expiry_days=7,
    )
    body = PartnerDealResponse.from_offer(offer).model_dump(by_alias=True, mode="json")
    assert body == {
        "id": 3,
        "description": "Free latte",
        "conditions": None,
        "storeId": str(owner),
        "storeName": "Bean There",
        "mapUrl": "https://map/bean",
        "expiryDays": 7,
    }


def test_coupon_view_response_flags_expiry():
    view = CouponView(
        id=uuid4(), status=CouponStatus.UNUSED,
        expires_at=datetime(2026, 1, 8), used_at=None,
        deal_id=DealId(1), origin_store_id=StoreId(uuid4()),
        description="10% off", conditions=None,
        store_id=StoreId(uuid4()), store_name="Nail Studio", map_url=None,
    )
    before = CouponViewResponse.from_view(view, datetime(2026, 1, 7, tzinfo=timezone.utc))
    after = CouponViewResponse.from_view(view, datetime(2026, 1, 9, tzinfo=timezone.utc))
    assert before.expired is False
    assert after.expired is True
    assert before.deal.store_name == "Nail Studio"


def test_deal_create_strips_description():
    assert DealCreate(description="  Free cookie  ").description == "Free cookie"


def test_deal_create_rejects_blank_description():
    with pytest.raises(ValidationError):
        DealCreate(description="   ")


def test_deal_create_conditions_max_length():
    with pytest.raises(ValidationError):
        DealCreate(description="ok", conditions="x" * 2001)
