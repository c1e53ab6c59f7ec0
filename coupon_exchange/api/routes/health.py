"""Health Probes - liveness and database readiness.

Invariants:
    - GET /health/ answers 200 whenever the process serves requests
    - GET /health/ready answers 503 while the database is unreachable
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from coupon_exchange.api.dependencies import get_services
from coupon_exchange.services.wiring import Services

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": "coupon-exchange-api", "version": "1.0.0"}


@router.get("/ready")
async def readiness(services: Services = Depends(get_services)):
    if not await services.database.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
