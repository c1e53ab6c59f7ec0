"""Domain Types - identities, enums and immutable records shared by core and shell.

Invariants:
    - StoreId and CouponId wrap UUIDs; DealId wraps the catalog's integer key
    - AffiliationPair is always canonical: str(store_a_id) < str(store_b_id)
    - CouponStatus has exactly two states; USED is terminal

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - Frozen dataclasses for records crossing the persistence port: the shell
      maps ORM rows into them so core never sees SQLAlchemy objects
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

StoreId = NewType("StoreId", UUID)
DealId = NewType("DealId", int)
CouponId = NewType("CouponId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class CouponStatus(str, Enum):
    """IssuedCoupon lifecycle states - maps to DB `status` column."""
    UNUSED = "unused"
    USED = "used"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class StoreRecord:
    """Store identity plus the display metadata core needs."""
    id: StoreId
    store_name: str
    category: str | None = None
    map_url: str | None = None
    address: str | None = None
    region: str | None = None


@dataclass(frozen=True)
class DealTemplateRecord:
    """Deal template joined with its owning store's display fields."""
    id: DealId
    store_id: StoreId
    description: str
    conditions: str | None = None
    store_name: str | None = None
    map_url: str | None = None


@dataclass(frozen=True)
class AffiliationPair:
    """Unordered store pair in canonical orientation."""
    store_a_id: StoreId
    store_b_id: StoreId

    @property
    def key(self) -> str:
        return f"{self.store_a_id}-{self.store_b_id}"

    def partner_of(self, store_id: StoreId) -> StoreId:
        """Return the side of the pair that is not `store_id`."""
        return self.store_b_id if self.store_a_id == store_id else self.store_a_id


@dataclass(frozen=True)
class PartnerOffer:
    """A partner deal annotated for display and issuance."""
    deal_id: DealId
    store_id: StoreId
    description: str
    conditions: str | None
    store_name: str | None
    map_url: str | None
    expiry_days: int


@dataclass(frozen=True)
class IssueRequest:
    """Validated input for a single coupon issuance."""
    deal_id: DealId
    origin_store_id: StoreId
    expiry_days: int


@dataclass(frozen=True)
class CouponView:
    """Issued coupon joined with its deal and the deal-owning store."""
    id: CouponId
    status: CouponStatus
    expires_at: datetime
    used_at: datetime | None
    deal_id: DealId
    origin_store_id: StoreId
    description: str
    conditions: str | None
    store_id: StoreId
    store_name: str | None
    map_url: str | None
