"""Affiliation Graph Builder - regenerates the partner graph from the store directory.

Invariants:
    - Regeneration only adds missing pairs; existing rows are never rewritten
    - Empty directory returns a zero result without touching the database
    - A failed batch aborts the run with DatabaseError; earlier batches stay committed

Design Decisions:
    - Writes in batches of affiliation_batch_size rows, one commit per batch:
      safe because the upsert is idempotent, so callers simply re-run on failure
"""

import logging
from dataclasses import dataclass

from coupon_exchange.core.affiliation_graph import build_affiliations, chunked
from coupon_exchange.core.errors import DatabaseError
from coupon_exchange.core.repository_protocols import (
    AffiliationRepository, StoreDirectory,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegenerationResult:
    store_count: int
    candidate_pairs: int
    inserted: int


class AffiliationGraphBuilder:
    """Derive and persist every cross-category store pair."""

    def __init__(
        self,
        stores: StoreDirectory,
        affiliations: AffiliationRepository,
        batch_size: int = 300,
    ):
        self.stores = stores
        self.affiliations = affiliations
        self.batch_size = batch_size

    async def regenerate(self) -> RegenerationResult:
        all_stores = await self.stores.list_stores()
        if not all_stores:
            logger.warning("No stores found; skipping affiliation regeneration")
            return RegenerationResult(store_count=0, candidate_pairs=0, inserted=0)

        pairs = build_affiliations(all_stores)
        inserted = 0
        for batch_number, batch in enumerate(chunked(pairs, self.batch_size), start=1):
            try:
                inserted += await self.affiliations.upsert_affiliations(batch)
            except DatabaseError:
                logger.error(
                    f"Affiliation batch {batch_number} failed; regeneration aborted",
                    extra={"inserted": inserted},
                )
                raise

        result = RegenerationResult(
            store_count=len(all_stores),
            candidate_pairs=len(pairs),
            inserted=inserted,
        )
        logger.info(
            "Affiliation graph regenerated",
            extra={
                "store_count": result.store_count,
                "candidate_pairs": result.candidate_pairs,
                "inserted": result.inserted,
            },
        )
        return result
