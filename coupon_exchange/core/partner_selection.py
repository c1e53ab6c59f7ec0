"""Partner Selection - pure helpers behind the partner deal selector.

Invariants:
    - Partner ids never include the requesting store itself
    - Sampling is without replacement and never returns more than `limit` deals
    - Fewer candidates than `limit` returns all of them

Design Decisions:
    - random.Random injected by the caller: tests seed it, production uses a
      process-wide instance (uniform, not cryptographic)
"""

import random
from typing import Iterable

from coupon_exchange.core.domain_types import (
    AffiliationPair, DealTemplateRecord, PartnerOffer, StoreId,
)


def partner_ids(store_id: StoreId, pairs: Iterable[AffiliationPair]) -> list[StoreId]:
    """Partner side of every pair involving `store_id`, first-seen order, no duplicates."""
    partners: list[StoreId] = []
    for pair in pairs:
        if store_id not in (pair.store_a_id, pair.store_b_id):
            continue
        partner = pair.partner_of(store_id)
        if partner != store_id and partner not in partners:
            partners.append(partner)
    return partners


def sample_deals(
    deals: list[DealTemplateRecord], limit: int, rng: random.Random,
) -> list[DealTemplateRecord]:
    if limit <= 0:
        return []
    if len(deals) <= limit:
        return list(deals)
    return rng.sample(deals, limit)


def to_partner_offers(
    deals: Iterable[DealTemplateRecord], expiry_days: int,
) -> list[PartnerOffer]:
    """Attach the fixed expiry window and partner display metadata."""
    return [
        PartnerOffer(
            deal_id=deal.id,
            store_id=deal.store_id,
            description=deal.description,
            conditions=deal.conditions,
            store_name=deal.store_name,
            map_url=deal.map_url,
            expiry_days=expiry_days,
        )
        for deal in deals
    ]
