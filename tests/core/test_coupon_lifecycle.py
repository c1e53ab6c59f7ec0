"""Coupon Lifecycle - issuance input validation and expiry arithmetic.

Tests:
    - Valid form strings produce a typed IssueRequest
    - Missing, blank and non-numeric fields raise InputValidationError
    - expires_at is exactly issued_at + expiry_days
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from coupon_exchange.core.coupon_lifecycle import (
    compute_expires_at, is_expired, parse_coupon_id, parse_issue_request,
)
from coupon_exchange.core.errors import InputValidationError


def test_parse_valid_request():
    origin = uuid4()
    req = parse_issue_request("5", str(origin), "7")
    assert req.deal_id == 5
    assert req.origin_store_id == origin
    assert req.expiry_days == 7


def test_parse_strips_whitespace():
    origin = uuid4()
    req = parse_issue_request(" 17 ", f" {origin} ", " 3 ")
    assert (req.deal_id, req.origin_store_id, req.expiry_days) == (17, origin, 3)


@pytest.mark.parametrize("deal, origin, expiry, field", [
    (None, "x", "7", "dealId"),
    ("5", None, "7", "originId"),
    ("5", "x", None, "expiryDays"),
    ("", "x", "7", "dealId"),
    ("5", "  ", "7", "originId"),
])
def test_missing_fields_rejected(deal, origin, expiry, field):
    with pytest.raises(InputValidationError) as exc:
        parse_issue_request(deal, origin, expiry)
    assert exc.value.field == field
    assert exc.value.http_status == 400


@pytest.mark.parametrize("deal, expiry, field", [
    ("five", "7", "dealId"),
    ("5", "seven", "expiryDays"),
    ("5.5", "7", "dealId"),
    ("5", "7days", "expiryDays"),
])
def test_non_integer_fields_rejected(deal, expiry, field):
    with pytest.raises(InputValidationError) as exc:
        parse_issue_request(deal, str(uuid4()), expiry)
    assert exc.value.field == field


@pytest.mark.parametrize("expiry", ["0", "-3"])
def test_non_positive_expiry_rejected(expiry):
    with pytest.raises(InputValidationError):
        parse_issue_request("5", str(uuid4()), expiry)


@pytest.mark.parametrize("deal, expiry, field", [
    ("99999999999999999999", "7", "dealId"),
    (str(2**31), "7", "dealId"),
    ("0", "7", "dealId"),
    ("-1", "7", "dealId"),
    ("5", "100000000", "expiryDays"),
    ("5", "36501", "expiryDays"),
])
def test_out_of_range_fields_rejected(deal, expiry, field):
    with pytest.raises(InputValidationError) as exc:
        parse_issue_request(deal, str(uuid4()), expiry)
    assert exc.value.field == field


def test_range_limits_accepted():
    req = parse_issue_request(str(2**31 - 1), str(uuid4()), "36500")
    assert (req.deal_id, req.expiry_days) == (2**31 - 1, 36500)


@pytest.mark.parametrize("deal, expiry, field", [
    ("1_000", "7", "dealId"),
    ("5", "1_0", "expiryDays"),
    ("\u0663", "7", "dealId"),
    ("5", "\uff17", "expiryDays"),
    ("--5", "7", "dealId"),
    ("+5", "7", "dealId"),
])
def test_only_plain_ascii_digits_accepted(deal, expiry, field):
    with pytest.raises(InputValidationError) as exc:
        parse_issue_request(deal, str(uuid4()), expiry)
    assert exc.value.field == field


def test_malformed_origin_rejected():
    with pytest.raises(InputValidationError) as exc:
        parse_issue_request("5", "abc", "7")
    assert exc.value.field == "originId"


def test_parse_coupon_id():
    cid = uuid4()
    assert parse_coupon_id(str(cid)) == cid
    assert parse_coupon_id("not-a-uuid") is None
    assert parse_coupon_id(None) is None


def test_compute_expires_at_adds_days():
    issued = datetime(2026, 3, 28, 12, 0, tzinfo=timezone.utc)
    assert compute_expires_at(issued, 7) == datetime(2026, 4, 4, 12, 0, tzinfo=timezone.utc)


def test_is_expired_handles_naive_storage_values():
    expires = datetime(2026, 1, 8)  # naive, as SQLite returns it
    assert not is_expired(expires, datetime(2026, 1, 7, tzinfo=timezone.utc))
    assert is_expired(expires, datetime(2026, 1, 8, tzinfo=timezone.utc))
    assert is_expired(expires, datetime(2026, 1, 8) + timedelta(seconds=1))
