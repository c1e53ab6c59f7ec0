"""Affiliation regeneration entry point - `python -m coupon_exchange.regenerate_affiliations`.

Run after the store directory changes (new stores, new categories). Exits
non-zero when a batch write fails so schedulers retry the full run.
"""

import asyncio
import logging
import sys

from coupon_exchange.config import get_settings
from coupon_exchange.core.errors import DatabaseError
from coupon_exchange.infrastructure.observability import setup_logging
from coupon_exchange.services.wiring import open_services

logger = logging.getLogger(__name__)


async def run() -> int:
    manager, services = open_services(get_settings())
    try:
        result = await services.graph_builder.regenerate()
    except DatabaseError as e:
        logger.error(f"Affiliation regeneration failed: {e.message}")
        return 1
    finally:
        await manager.dispose()

    logger.info(
        f"{result.inserted} new affiliations "
        f"({result.candidate_pairs} pairs from {result.store_count} stores)",
    )
    return 0


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
