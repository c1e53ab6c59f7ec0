"""Shop Routes - store page with partner deals, directory listing, deal self-service.

Invariants:
    - GET /{store_id} returns at most partner_deal_limit deals, each with expiryDays
    - Unknown or malformed store id -> 404
"""

from fastapi import APIRouter, Depends, status

from coupon_exchange.api.dependencies import get_services
from coupon_exchange.core.coupon_lifecycle import parse_uuid
from coupon_exchange.core.domain_types import StoreId
from coupon_exchange.core.errors import ResourceNotFoundError
from coupon_exchange.schemas.shop import (
    DealCreate, DealCreatedResponse, PartnerDealResponse, ShopPageResponse,
    StoreSummary,
)
from coupon_exchange.services.wiring import Services

router = APIRouter(prefix="/api/v1/shops", tags=["shops"])


def _store_id_or_404(raw: str) -> StoreId:
    parsed = parse_uuid(raw)
    if parsed is None:
        raise ResourceNotFoundError("Store", raw)
    return StoreId(parsed)


@router.get("", response_model=list[StoreSummary])
async def list_shops(services: Services = Depends(get_services)):
    stores = await services.stores.list_stores()
    return [StoreSummary.from_record(s) for s in stores]


@router.get("/{store_id}", response_model=ShopPageResponse)
async def get_shop_page(
    store_id: str, services: Services = Depends(get_services),
):
    """Store page: display name plus a random sample of partner deals."""
    selection = await services.partner_deals.select(_store_id_or_404(store_id))
    return ShopPageResponse(
        origin_store_id=selection.origin_store_id,
        store_name=selection.store_name,
        deals=[PartnerDealResponse.from_offer(o) for o in selection.deals],
    )


@router.post(
    "/{store_id}/deals", response_model=DealCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_deal(
    store_id: str, body: DealCreate,
    services: Services = Depends(get_services),
):
    owner = _store_id_or_404(store_id)
    deal_id = await services.deal_templates.create(
        owner, body.description, body.conditions,
    )
    return DealCreatedResponse(id=deal_id, store_id=owner)
