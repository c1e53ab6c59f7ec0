"""Domain Types - identity wrappers, coupon status enum, record immutability."""

import dataclasses
from uuid import uuid4

import pytest

from coupon_exchange.core.domain_types import (
    AffiliationPair, CouponId, CouponStatus, DealId, StoreId, StoreRecord,
)


def test_identity_types_wrap_values():
    uid = uuid4()
    assert StoreId(uid) == uid
    assert CouponId(uid) == uid
    assert DealId(17) == 17


def test_coupon_status_has_two_states():
    assert {s.value for s in CouponStatus} == {"unused", "used"}
    assert CouponStatus("used") is CouponStatus.USED


def test_records_are_frozen():
    store = StoreRecord(id=StoreId(uuid4()), store_name="Bean There", category="cafe")
    with pytest.raises(dataclasses.FrozenInstanceError):
        store.category = "bakery"


def test_affiliation_pairs_compare_by_value():
    a, b = StoreId(uuid4()), StoreId(uuid4())
    assert AffiliationPair(a, b) == AffiliationPair(a, b)
    assert len({AffiliationPair(a, b), AffiliationPair(a, b)}) == 1
