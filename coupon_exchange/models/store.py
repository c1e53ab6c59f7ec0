"""Store ORM - a neighborhood business that issues and accepts partner coupons.

Invariants:
    - id is a UUID primary key, immutable once created
    - map_url is unique (natural key of the directory listing)
    - category is nullable; stores without one never form affiliations

Design Decisions:
    - Display and ranking metadata kept as plain columns: read by listings,
      never by the affiliation or coupon logic
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from coupon_exchange.db.base import Base


class Store(Base):
    """Store directory entry."""
    __tablename__ = "stores"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    store_name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    map_url: Mapped[str | None] = mapped_column(
        String(500), nullable=True, unique=True,
    )
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    contact: Mapped[str | None] = mapped_column(String(200), nullable=True)
    review_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    follower_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    rf_index: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    plan: Mapped[str | None] = mapped_column(String(50), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
