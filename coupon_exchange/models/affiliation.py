"""Affiliation ORM - derived, canonical pair of stores allowed to cross-promote.

Invariants:
    - store_a_id < store_b_id (canonical orientation, enforced by CHECK)
    - At most one row per unordered pair (composite primary key)
    - Rows are never updated; regeneration only inserts missing pairs

Design Decisions:
    - The pair is the identity, no surrogate id: ON CONFLICT targets the primary key
    - Index on store_b_id: lookups match either side of the pair
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from coupon_exchange.db.base import Base


class Affiliation(Base):
    """Undirected partner relation between two differently-categorized stores."""
    __tablename__ = "affiliations"
    __table_args__ = (
        CheckConstraint("store_a_id < store_b_id", name="ck_affiliations_canonical"),
    )

    store_a_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stores.id"), primary_key=True,
    )
    store_b_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stores.id"), primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
