"""Deal Templates - store self-service creation of offer templates."""

import logging

from coupon_exchange.core.domain_types import DealId, StoreId
from coupon_exchange.core.errors import ErrorContext, ResourceNotFoundError
from coupon_exchange.core.repository_protocols import DealCatalog, StoreDirectory

logger = logging.getLogger(__name__)


class DealTemplateService:
    """Create deal templates owned by an existing store."""

    def __init__(self, stores: StoreDirectory, deals: DealCatalog):
        self.stores = stores
        self.deals = deals

    async def create(
        self, store_id: StoreId, description: str, conditions: str | None,
    ) -> DealId:
        # store_id must reference an existing store; SQLite does not enforce the FK
        if await self.stores.get_store(store_id) is None:
            raise ResourceNotFoundError(
                "Store", str(store_id), ErrorContext(store_id=str(store_id)),
            )
        deal_id = await self.deals.insert_deal_template(store_id, description, conditions)
        logger.info(
            "Deal template created",
            extra={"deal_id": deal_id, "store_id": store_id},
        )
        return deal_id
