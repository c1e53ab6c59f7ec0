"""Partner Deal Selector - up to N partner deals to show on a store's page.

Invariants:
    - Unknown store -> ResourceNotFoundError (before any affiliation read)
    - No affiliations -> empty deals with the store's display name, not an error
    - Read failures on affiliations or deals propagate as DatabaseError
"""

import logging
import random
from dataclasses import dataclass, field

from coupon_exchange.core.domain_types import PartnerOffer, StoreId
from coupon_exchange.core.errors import ErrorContext, ResourceNotFoundError
from coupon_exchange.core.partner_selection import (
    partner_ids, sample_deals, to_partner_offers,
)
from coupon_exchange.core.repository_protocols import (
    AffiliationRepository, DealCatalog, StoreDirectory,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartnerDealSelection:
    origin_store_id: StoreId
    store_name: str
    deals: list[PartnerOffer] = field(default_factory=list)


class PartnerDealSelector:
    """Sample partner deals for a store page."""

    def __init__(
        self,
        stores: StoreDirectory,
        affiliations: AffiliationRepository,
        deals: DealCatalog,
        limit: int = 3,
        expiry_days: int = 7,
        rng: random.Random | None = None,
    ):
        self.stores = stores
        self.affiliations = affiliations
        self.deals = deals
        self.limit = limit
        self.expiry_days = expiry_days
        self.rng = rng or random.Random()

    async def select(self, store_id: StoreId) -> PartnerDealSelection:
        store = await self.stores.get_store(store_id)
        if store is None:
            raise ResourceNotFoundError(
                "Store", str(store_id), ErrorContext(store_id=str(store_id)),
            )

        pairs = await self.affiliations.list_affiliations_involving(store_id)
        partners = partner_ids(store_id, pairs)
        if not partners:
            logger.info("Store has no partners", extra={"store_id": store_id})
            return PartnerDealSelection(
                origin_store_id=store_id, store_name=store.store_name,
            )

        candidates = await self.deals.list_deal_templates_by_owners(partners)
        chosen = sample_deals(candidates, self.limit, self.rng)
        return PartnerDealSelection(
            origin_store_id=store_id,
            store_name=store.store_name,
            deals=to_partner_offers(chosen, self.expiry_days),
        )
