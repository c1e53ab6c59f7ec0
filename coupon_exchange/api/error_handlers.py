"""Error Handlers - every failed request answers with the CouponExchangeError envelope.

Invariants:
    - CouponExchangeError -> its own http_status and to_response() body
    - RequestValidationError (bad JSON body, wrong types) -> 400 VALIDATION_ERROR
      with per-field details
    - Anything else -> 500 INTERNAL_ERROR, message never includes the exception
    - 5xx are logged at ERROR, 4xx at WARNING

Design Decisions:
    - Kept out of main.py: main wires, this module formats
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from coupon_exchange.core.errors import CouponExchangeError, InputValidationError

logger = logging.getLogger(__name__)


def _error_response(request: Request, exc: CouponExchangeError, body: dict | None = None):
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.http_status, content=body or exc.to_response(),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the domain, request-validation and catch-all handlers."""

    @app.exception_handler(CouponExchangeError)
    async def coupon_exchange_error_handler(
        request: Request, exc: CouponExchangeError,
    ):
        return _error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        error = InputValidationError("Invalid request data", "body")
        body = error.to_response()
        body["error"]["details"] = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ]
        return _error_response(request, error, body)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.url.path}",
            exc_info=exc,
        )
        return _error_response(
            request, CouponExchangeError("An unexpected error occurred"),
        )
