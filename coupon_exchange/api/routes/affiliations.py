"""Affiliation Routes - trigger a full partner graph regeneration.

Invariants:
    - Safe to call repeatedly: only missing pairs are inserted
    - A failed write returns 503; callers re-run the whole regeneration
"""

from fastapi import APIRouter, Depends

from coupon_exchange.api.dependencies import get_services
from coupon_exchange.schemas.affiliation import RegenerationResponse
from coupon_exchange.services.wiring import Services

router = APIRouter(prefix="/api/v1/affiliations", tags=["affiliations"])


@router.post("/regenerate", response_model=RegenerationResponse)
async def regenerate_affiliations(services: Services = Depends(get_services)):
    result = await services.graph_builder.regenerate()
    return RegenerationResponse(
        store_count=result.store_count,
        candidate_pairs=result.candidate_pairs,
        inserted=result.inserted,
    )
