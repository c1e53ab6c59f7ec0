"""Coupon Exchange API - FastAPI application.

Invariants:
    - Routers registered explicitly, in one place
    - One session manager and one Services bundle per process, created in
      the lifespan and disposed on shutdown
    - The Settings given to create_app drive CORS and the lifespan alike

Run with `uvicorn coupon_exchange.main:app`.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coupon_exchange.api.error_handlers import register_error_handlers
from coupon_exchange.api.routes import affiliations, coupons, health, shops
from coupon_exchange.config import Settings, get_settings
from coupon_exchange.infrastructure.observability import setup_logging
from coupon_exchange.services.wiring import open_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    manager, app.state.services = open_services(settings)
    logger.info("Coupon Exchange API started")
    try:
        yield
    finally:
        logger.info("Coupon Exchange API shutting down")
        await manager.dispose()


def create_app(settings: Settings) -> FastAPI:
    application = FastAPI(
        title="Coupon Exchange API", version="1.0.0", lifespan=lifespan,
    )
    application.state.settings = settings
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    for module in (health, shops, coupons, affiliations):
        application.include_router(module.router)
    register_error_handlers(application)
    return application


app = create_app(get_settings())
