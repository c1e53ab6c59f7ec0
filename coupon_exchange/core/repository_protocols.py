"""Boundary Protocols - persistence ports between the services and storage.

Invariants:
    - Services depend on these Protocols only, never on SQLAlchemy sessions
    - conditional_mark_used is a single atomic conditional update; it returns
      the affected row count and performs no prior read
    - upsert_affiliations ignores existing (store_a_id, store_b_id) keys
    - Every method raises DatabaseError when storage is unreachable

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory fakes need no inheritance
    - Async in Protocol: implementations do IO; the pure core never awaits
"""

from datetime import datetime
from typing import Protocol, Sequence

from coupon_exchange.core.domain_types import (
    AffiliationPair, CouponId, CouponView, DealId, DealTemplateRecord,
    StoreId, StoreRecord,
)


class StoreDirectory(Protocol):
    """Contract for store lookups - implemented by shell."""
    async def list_stores(self) -> list[StoreRecord]: ...
    async def get_store(self, store_id: StoreId) -> StoreRecord | None: ...


class DealCatalog(Protocol):
    """Contract for deal template persistence - implemented by shell."""
    async def list_deal_templates_by_owners(
        self, owner_ids: Sequence[StoreId],
    ) -> list[DealTemplateRecord]: ...
    async def insert_deal_template(
        self, store_id: StoreId, description: str, conditions: str | None,
    ) -> DealId: ...


class AffiliationRepository(Protocol):
    """Contract for derived affiliation pairs - implemented by shell."""
    async def upsert_affiliations(
        self, pairs: Sequence[AffiliationPair],
    ) -> int: ...
    async def list_affiliations_involving(
        self, store_id: StoreId,
    ) -> list[AffiliationPair]: ...


class IssuedCouponRepository(Protocol):
    """Contract for issued coupon persistence - implemented by shell."""
    async def insert_issued_coupon(
        self, deal_id: DealId, origin_store_id: StoreId, expires_at: datetime,
    ) -> CouponId | None: ...
    async def conditional_mark_used(
        self, coupon_id: CouponId, now: datetime, require_unexpired: bool = False,
    ) -> int: ...
    async def get_issued_coupon_with_deal_and_store(
        self, coupon_id: CouponId,
    ) -> CouponView | None: ...
