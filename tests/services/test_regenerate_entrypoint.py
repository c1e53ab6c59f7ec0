"""Regeneration entry point - exit status for schedulers."""

import pytest

from coupon_exchange import regenerate_affiliations
from coupon_exchange.models.affiliation import Affiliation
from coupon_exchange.services import wiring


@pytest.fixture
def use_test_database(db_manager, monkeypatch):
    monkeypatch.setattr(wiring, "init_db", lambda *args, **kwargs: db_manager)


async def test_run_regenerates_and_exits_zero(use_test_database, seeded, count_rows):
    assert await regenerate_affiliations.run() == 0
    assert await count_rows(Affiliation) == 5


async def test_run_exits_nonzero_on_database_failure(
    use_test_database, seeded, test_engine,
):
    async with test_engine.begin() as conn:
        await conn.run_sync(Affiliation.__table__.drop)

    assert await regenerate_affiliations.run() == 1
