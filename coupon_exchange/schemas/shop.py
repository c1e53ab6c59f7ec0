"""Shop Schemas - store page, directory listing and deal self-service.

Invariants:
    - DealCreate.description: 1-2000 chars, stripped, non-empty
    - ShopPageResponse.deals never exceeds the configured partner deal limit
"""

from uuid import UUID

from pydantic import Field, field_validator

from coupon_exchange.core.domain_types import PartnerOffer, StoreRecord
from coupon_exchange.schemas.base import CamelModel


class PartnerDealResponse(CamelModel):
    id: int
    description: str
    conditions: str | None = None
    store_id: UUID
    store_name: str | None = None
    map_url: str | None = None
    expiry_days: int

    @classmethod
    def from_offer(cls, offer: PartnerOffer) -> "PartnerDealResponse":
        return cls(
            id=offer.deal_id,
            description=offer.description,
            conditions=offer.conditions,
            store_id=offer.store_id,
            store_name=offer.store_name,
            map_url=offer.map_url,
            expiry_days=offer.expiry_days,
        )


class ShopPageResponse(CamelModel):
    origin_store_id: UUID
    store_name: str
    deals: list[PartnerDealResponse]


class StoreSummary(CamelModel):
    id: UUID
    store_name: str
    category: str | None = None
    map_url: str | None = None
    address: str | None = None
    region: str | None = None

    @classmethod
    def from_record(cls, store: StoreRecord) -> "StoreSummary":
        return cls(
            id=store.id,
            store_name=store.store_name,
            category=store.category,
            map_url=store.map_url,
            address=store.address,
            region=store.region,
        )


class DealCreate(CamelModel):
    """Deal creation - validates description length and whitespace."""
    description: str = Field(min_length=1, max_length=2000)
    conditions: str | None = Field(None, max_length=2000)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("description cannot be empty or whitespace")
        return v


class DealCreatedResponse(CamelModel):
    id: int
    store_id: UUID
