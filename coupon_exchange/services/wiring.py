"""Service Wiring - builds every service once per process from the session manager.

Invariants:
    - One repository instance per port, shared by all services
    - Business constants come from Settings, never from module globals
"""

import random
from dataclasses import dataclass

from coupon_exchange.config import Settings
from coupon_exchange.core.repository_protocols import StoreDirectory
from coupon_exchange.infrastructure.database import DatabaseSessionManager, init_db
from coupon_exchange.infrastructure.sql_repositories import (
    SqlAffiliationRepository, SqlDealCatalog, SqlIssuedCouponRepository,
    SqlStoreDirectory,
)
from coupon_exchange.services.affiliation_builder import AffiliationGraphBuilder
from coupon_exchange.services.coupon_engine import CouponEngine
from coupon_exchange.services.deal_templates import DealTemplateService
from coupon_exchange.services.partner_deals import PartnerDealSelector


@dataclass(frozen=True)
class Services:
    database: DatabaseSessionManager
    stores: StoreDirectory
    graph_builder: AffiliationGraphBuilder
    partner_deals: PartnerDealSelector
    deal_templates: DealTemplateService
    coupons: CouponEngine


def build_services(
    db_manager: DatabaseSessionManager,
    settings: Settings,
    rng: random.Random | None = None,
) -> Services:
    stores = SqlStoreDirectory(db_manager)
    deals = SqlDealCatalog(db_manager)
    affiliations = SqlAffiliationRepository(db_manager)
    coupons = SqlIssuedCouponRepository(db_manager)

    return Services(
        database=db_manager,
        stores=stores,
        graph_builder=AffiliationGraphBuilder(
            stores, affiliations, batch_size=settings.affiliation_batch_size,
        ),
        partner_deals=PartnerDealSelector(
            stores, affiliations, deals,
            limit=settings.partner_deal_limit,
            expiry_days=settings.coupon_expiry_days,
            rng=rng,
        ),
        deal_templates=DealTemplateService(stores, deals),
        coupons=CouponEngine(
            coupons, enforce_expiry=settings.enforce_coupon_expiry,
        ),
    )


def open_services(settings: Settings) -> tuple[DatabaseSessionManager, Services]:
    """Create the process-wide session manager and the services bound to it."""
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout_seconds,
    )
    return manager, build_services(manager, settings)
