"""SQL Repositories - SQLAlchemy implementations of the persistence ports.

Invariants:
    - Every method opens its own session through DatabaseSessionManager and
      commits before returning; no transaction spans two port calls
    - conditional_mark_used is ONE UPDATE ... WHERE id = :id AND status = 'unused'
      statement; the affected rowcount is the whole answer
    - upsert_affiliations uses INSERT ... ON CONFLICT DO NOTHING on the pair key
    - ORM rows never leave this module; callers get core.domain_types records

Design Decisions:
    - Repositories hold the process-wide session manager, not a session:
      built once at startup and shared by concurrent requests
    - Dialect-specific insert() picked from the bound dialect: PostgreSQL in
      deployments, SQLite in tests; both support on_conflict_do_nothing
"""

from datetime import datetime
from typing import Any, Sequence, cast

from sqlalchemy import Insert, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import CursorResult

from coupon_exchange.core.domain_types import (
    AffiliationPair, CouponId, CouponStatus, CouponView, DealId,
    DealTemplateRecord, StoreId, StoreRecord,
)
from coupon_exchange.infrastructure.database import DatabaseSessionManager
from coupon_exchange.models.affiliation import Affiliation
from coupon_exchange.models.coupon_deal import CouponDeal
from coupon_exchange.models.issued_coupon import IssuedCoupon
from coupon_exchange.models.store import Store


def _to_store_record(store: Store) -> StoreRecord:
    return StoreRecord(
        id=StoreId(store.id),
        store_name=store.store_name,
        category=store.category,
        map_url=store.map_url,
        address=store.address,
        region=store.region,
    )


def _insert_ignoring_conflicts(dialect: str, rows: list[dict]) -> Insert:
    """INSERT ... ON CONFLICT (store_a_id, store_b_id) DO NOTHING for the given dialect."""
    insert_fn = pg_insert if dialect == "postgresql" else sqlite_insert
    return (
        insert_fn(Affiliation)
        .values(rows)
        .on_conflict_do_nothing(index_elements=["store_a_id", "store_b_id"])
    )


class SqlStoreDirectory:
    """Store lookups backed by the `stores` table."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def list_stores(self) -> list[StoreRecord]:
        async with self._db.session() as db:
            result = await db.execute(select(Store).order_by(Store.created_at, Store.id))
            return [_to_store_record(s) for s in result.scalars().all()]

    async def get_store(self, store_id: StoreId) -> StoreRecord | None:
        async with self._db.session() as db:
            result = await db.execute(select(Store).where(Store.id == store_id))
            store = result.scalar_one_or_none()
            return _to_store_record(store) if store else None


class SqlDealCatalog:
    """Deal templates joined with their owning store."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def list_deal_templates_by_owners(
        self, owner_ids: Sequence[StoreId],
    ) -> list[DealTemplateRecord]:
        if not owner_ids:
            return []
        async with self._db.session() as db:
            result = await db.execute(
                select(CouponDeal, Store.store_name, Store.map_url)
                .join(Store, Store.id == CouponDeal.store_id)
                .where(CouponDeal.store_id.in_(list(owner_ids)))
                .order_by(CouponDeal.id)
            )
            return [
                DealTemplateRecord(
                    id=DealId(deal.id),
                    store_id=StoreId(deal.store_id),
                    description=deal.description,
                    conditions=deal.conditions,
                    store_name=store_name,
                    map_url=map_url,
                )
                for deal, store_name, map_url in result.all()
            ]

    async def insert_deal_template(
        self, store_id: StoreId, description: str, conditions: str | None,
    ) -> DealId:
        async with self._db.session() as db:
            deal = CouponDeal(
                store_id=store_id, description=description, conditions=conditions,
            )
            db.add(deal)
            await db.commit()
            return DealId(deal.id)


class SqlAffiliationRepository:
    """Derived affiliation pairs."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager
        self._dialect = db_manager.engine.dialect.name

    async def upsert_affiliations(self, pairs: Sequence[AffiliationPair]) -> int:
        """Insert missing pairs, skip existing ones. Returns rows actually inserted."""
        if not pairs:
            return 0
        rows = [
            {"store_a_id": p.store_a_id, "store_b_id": p.store_b_id}
            for p in pairs
        ]
        async with self._db.session() as db:
            result = cast(
                CursorResult[Any],
                await db.execute(_insert_ignoring_conflicts(self._dialect, rows)),
            )
            await db.commit()
            return max(result.rowcount, 0)

    async def list_affiliations_involving(
        self, store_id: StoreId,
    ) -> list[AffiliationPair]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Affiliation.store_a_id, Affiliation.store_b_id)
                .where(or_(
                    Affiliation.store_a_id == store_id,
                    Affiliation.store_b_id == store_id,
                ))
            )
            return [
                AffiliationPair(store_a_id=StoreId(a), store_b_id=StoreId(b))
                for a, b in result.all()
            ]


class SqlIssuedCouponRepository:
    """Issued coupons and their single conditional state transition."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def insert_issued_coupon(
        self, deal_id: DealId, origin_store_id: StoreId, expires_at: datetime,
    ) -> CouponId | None:
        async with self._db.session() as db:
            coupon = IssuedCoupon(
                deal_id=deal_id,
                origin_store_id=origin_store_id,
                status=CouponStatus.UNUSED.value,
                expires_at=expires_at,
            )
            db.add(coupon)
            await db.commit()
            return CouponId(coupon.id) if coupon.id else None

    async def conditional_mark_used(
        self, coupon_id: CouponId, now: datetime, require_unexpired: bool = False,
    ) -> int:
        """Compare-and-set unused -> used. Returns affected row count (0 or 1)."""
        stmt = (
            update(IssuedCoupon)
            .where(IssuedCoupon.id == coupon_id)
            .where(IssuedCoupon.status == CouponStatus.UNUSED.value)
        )
        if require_unexpired:
            stmt = stmt.where(IssuedCoupon.expires_at > now)
        stmt = stmt.values(
            status=CouponStatus.USED.value, used_at=now,
        ).execution_options(synchronize_session=False)

        async with self._db.session() as db:
            result = cast(CursorResult[Any], await db.execute(stmt))
            await db.commit()
            return result.rowcount

    async def get_issued_coupon_with_deal_and_store(
        self, coupon_id: CouponId,
    ) -> CouponView | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(IssuedCoupon, CouponDeal, Store.store_name, Store.map_url)
                .join(CouponDeal, CouponDeal.id == IssuedCoupon.deal_id)
                .join(Store, Store.id == CouponDeal.store_id)
                .where(IssuedCoupon.id == coupon_id)
            )
            row = result.one_or_none()
            if row is None:
                return None
            coupon, deal, store_name, map_url = row
            return CouponView(
                id=CouponId(coupon.id),
                status=CouponStatus(coupon.status),
                expires_at=coupon.expires_at,
                used_at=coupon.used_at,
                deal_id=DealId(deal.id),
                origin_store_id=StoreId(coupon.origin_store_id),
                description=deal.description,
                conditions=deal.conditions,
                store_id=StoreId(deal.store_id),
                store_name=store_name,
                map_url=map_url,
            )
