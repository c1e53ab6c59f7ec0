"""IssuedCoupon ORM - single-use coupon instance with a one-way status machine.

Invariants:
    - status transitions unused -> used exactly once, never back
    - used_at is set iff status == "used"
    - expires_at is fixed at insert and never updated
    - Rows are never deleted (audit record)

Design Decisions:
    - Only writer of status/used_at is the conditional UPDATE in
      SqlIssuedCouponRepository.conditional_mark_used
    - origin_store_id is the issuing page's store, distinct from the
      deal-owning partner reached through deal_id
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from coupon_exchange.db.base import Base


class IssuedCoupon(Base):
    """Issued single-use coupon."""
    __tablename__ = "issued_coupons"
    __table_args__ = (
        CheckConstraint("status IN ('unused', 'used')", name="ck_issued_coupons_status"),
        CheckConstraint(
            "(status = 'used') = (used_at IS NOT NULL)",
            name="ck_issued_coupons_used_at",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    deal_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("coupon_deals.id"), nullable=False,
    )
    origin_store_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stores.id"), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(10), nullable=False, default="unused",
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
