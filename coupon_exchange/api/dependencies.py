"""Route Dependencies - hand the process-wide Services to route handlers.

Invariants:
    - Services are read from app.state, set once in the lifespan
    - Tests override get_services instead of patching modules
"""

from fastapi import Request

from coupon_exchange.services.wiring import Services


def get_services(request: Request) -> Services:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized")
    return services
