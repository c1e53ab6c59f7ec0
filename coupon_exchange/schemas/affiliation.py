"""Affiliation Schemas - regeneration report."""

from coupon_exchange.schemas.base import CamelModel


class RegenerationResponse(CamelModel):
    store_count: int
    candidate_pairs: int
    inserted: int
