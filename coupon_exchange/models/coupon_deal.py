"""CouponDeal ORM - reusable offer template owned by one store.

Invariants:
    - store_id references an existing Store
    - Immutable after creation (no update path exists)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from coupon_exchange.db.base import Base


class CouponDeal(Base):
    """Deal template offered by its owning store."""
    __tablename__ = "coupon_deals"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    store_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stores.id"), nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    conditions: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
