"""Coupon Lifecycle - input parsing and time arithmetic for issuance and redemption.

Invariants:
    - parse_issue_request either returns a complete IssueRequest or raises
      InputValidationError; nothing is written before it returns
    - dealId and expiryDays must be plain ASCII base-10 integers;
      1 <= dealId <= 2**31 - 1 and 1 <= expiryDays <= 36500
    - expires_at = issued_at + expiry_days days, computed once at issuance

Design Decisions:
    - Raw strings in, typed request out: form values arrive as text and the
      route never converts them itself
"""

from datetime import datetime, timedelta
from uuid import UUID

from coupon_exchange.core.domain_types import CouponId, DealId, IssueRequest, StoreId
from coupon_exchange.core.errors import InputValidationError

MAX_EXPIRY_DAYS = 36500
# issued_coupons.deal_id is a 32-bit INTEGER column
MAX_DEAL_ID = 2**31 - 1


def _require(value: str | None, field: str) -> str:
    if value is None or not str(value).strip():
        raise InputValidationError("Required coupon fields are missing.", field)
    return str(value).strip()


def _parse_int(value: str, field: str) -> int:
    # int() alone would also take "1_000" and non-ASCII digits
    if not (value.isascii() and value.removeprefix("-").isdigit()):
        raise InputValidationError(
            "dealId and expiryDays must be valid integers.", field,
        )
    return int(value, 10)


def parse_uuid(value: str | None) -> UUID | None:
    """Parse a UUID string, returning None when malformed."""
    if value is None:
        return None
    try:
        return UUID(str(value).strip())
    except ValueError:
        return None


def parse_issue_request(
    deal_id: str | None, origin_id: str | None, expiry_days: str | None,
) -> IssueRequest:
    """Validate the three issuance fields. Pure, no IO."""
    raw_deal = _require(deal_id, "dealId")
    raw_origin = _require(origin_id, "originId")
    raw_expiry = _require(expiry_days, "expiryDays")

    parsed_deal = _parse_int(raw_deal, "dealId")
    parsed_expiry = _parse_int(raw_expiry, "expiryDays")
    if not 1 <= parsed_deal <= MAX_DEAL_ID:
        raise InputValidationError("dealId is out of range.", "dealId")
    if parsed_expiry < 1:
        raise InputValidationError("expiryDays must be at least 1.", "expiryDays")
    if parsed_expiry > MAX_EXPIRY_DAYS:
        raise InputValidationError(
            f"expiryDays must be at most {MAX_EXPIRY_DAYS}.", "expiryDays",
        )

    origin = parse_uuid(raw_origin)
    if origin is None:
        raise InputValidationError("originId is not a valid store id.", "originId")

    return IssueRequest(
        deal_id=DealId(parsed_deal),
        origin_store_id=StoreId(origin),
        expiry_days=parsed_expiry,
    )


def parse_coupon_id(value: str | None) -> CouponId | None:
    parsed = parse_uuid(value)
    return CouponId(parsed) if parsed else None


def compute_expires_at(issued_at: datetime, expiry_days: int) -> datetime:
    return issued_at + timedelta(days=expiry_days)


def is_expired(expires_at: datetime, now: datetime) -> bool:
    """Advisory check used for display; redemption enforces it in SQL when enabled."""
    # SQLite hands back naive datetimes; both sides are UTC
    if expires_at.tzinfo is None or now.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=None)
        now = now.replace(tzinfo=None)
    return now >= expires_at
