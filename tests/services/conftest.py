"""Service test fixtures - async SQLite DB, wired services, FastAPI test client.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - Transactions start with BEGIN IMMEDIATE so concurrent writers queue on
      the database lock instead of failing with "database is locked"
    - Helper sessions are always closed before services run (no held locks)
    - get_services dependency overridden to use services bound to the test DB

Design Decisions:
    - File database over :memory:: concurrent sessions need real separate
      connections for the redemption race tests
    - db_manager built with __new__: reuses the production session() error
      mapping without creating a pooled Postgres engine
"""

import random
from dataclasses import dataclass, field

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

import coupon_exchange.models  # noqa: F401
from coupon_exchange.api.dependencies import get_services
from coupon_exchange.config import Settings
from coupon_exchange.db.base import Base
from coupon_exchange.infrastructure.database import DatabaseSessionManager
from coupon_exchange.main import app
from coupon_exchange.models.coupon_deal import CouponDeal
from coupon_exchange.models.store import Store
from coupon_exchange.services.wiring import build_services


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'coupons.db'}", echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _manual_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def db_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def settings():
    return Settings(
        partner_deal_limit=3, coupon_expiry_days=7, affiliation_batch_size=2,
    )


@pytest.fixture
def services(db_manager, settings):
    return build_services(db_manager, settings, rng=random.Random(1234))


@pytest.fixture
async def client(services):
    """FastAPI test client with services dependency overridden."""
    app.dependency_overrides[get_services] = lambda: services
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@dataclass
class SeededDirectory:
    """Ids of the seeded neighborhood, keyed by a readable name."""
    stores: dict = field(default_factory=dict)
    deals: dict = field(default_factory=dict)


@pytest.fixture
async def seeded(test_session_factory):
    """Two cafes, a nail salon, a bakery and an uncategorized store, with deals.

    Qualifying pairs: each cafe with nail and bakery, plus nail-bakery (5 pairs).
    """
    directory = SeededDirectory()
    rows = [
        ("cafe_a", "Bean There", "cafe"),
        ("cafe_b", "Daily Grind", "cafe"),
        ("nail", "Polished", "nail salon"),
        ("bakery", "Rise & Shine", "bakery"),
        ("no_category", "Mystery Shop", None),
    ]
    deal_rows = [
        ("cafe_a", "Free refill"),
        ("cafe_b", "2-for-1 espresso"),
        ("nail", "10% off gel nails"),
        ("nail", "Free hand massage"),
        ("bakery", "Free cookie"),
        ("bakery", "500 won off cake"),
        ("bakery", "Free bread sample"),
        ("no_category", "Mystery discount"),
    ]
    async with test_session_factory() as db:
        for key, name, category in rows:
            store = Store(
                store_name=name, category=category,
                map_url=f"https://map.example/{key}",
            )
            db.add(store)
            await db.flush()
            directory.stores[key] = store.id
        for key, description in deal_rows:
            deal = CouponDeal(
                store_id=directory.stores[key], description=description,
                conditions="One per visit",
            )
            db.add(deal)
            await db.flush()
            directory.deals.setdefault(key, []).append(deal.id)
        await db.commit()
    return directory


@pytest.fixture
def count_rows(test_session_factory):
    """Count rows of an ORM model in a short-lived session."""
    async def _count(model) -> int:
        async with test_session_factory() as db:
            result = await db.execute(select(func.count()).select_from(model))
            return result.scalar_one()
    return _count


@pytest.fixture
def fetch(test_session_factory):
    """Load one ORM row by primary key in a short-lived session."""
    async def _fetch(model, pk):
        async with test_session_factory() as db:
            return await db.get(model, pk)
    return _fetch
