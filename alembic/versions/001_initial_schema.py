"""Initial schema - stores, coupon_deals, affiliations, issued_coupons.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "stores",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("store_name", sa.String(200), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("map_url", sa.String(500), nullable=True, unique=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("contact", sa.String(200), nullable=True),
        sa.Column("review_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("follower_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("rf_index", sa.Float, nullable=False, server_default="0"),
        sa.Column("note", sa.Text, nullable=True),
        sa.Column("plan", sa.String(50), nullable=True),
        sa.Column("region", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "coupon_deals",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("store_id", UUID(as_uuid=True), sa.ForeignKey("stores.id"), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("conditions", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_coupon_deals_store_id", "coupon_deals", ["store_id"])

    op.create_table(
        "affiliations",
        sa.Column("store_a_id", UUID(as_uuid=True), sa.ForeignKey("stores.id"), primary_key=True),
        sa.Column("store_b_id", UUID(as_uuid=True), sa.ForeignKey("stores.id"), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("store_a_id < store_b_id", name="ck_affiliations_canonical"),
    )
    op.create_index("ix_affiliations_store_b_id", "affiliations", ["store_b_id"])

    op.create_table(
        "issued_coupons",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("deal_id", sa.Integer, sa.ForeignKey("coupon_deals.id"), nullable=False),
        sa.Column("origin_store_id", UUID(as_uuid=True), sa.ForeignKey("stores.id"), nullable=False),
        sa.Column("status", sa.String(10), nullable=False, server_default="unused"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("status IN ('unused', 'used')", name="ck_issued_coupons_status"),
        sa.CheckConstraint(
            "(status = 'used') = (used_at IS NOT NULL)",
            name="ck_issued_coupons_used_at",
        ),
    )


def downgrade() -> None:
    op.drop_table("issued_coupons")
    op.drop_table("affiliations")
    op.drop_index("ix_coupon_deals_store_id", table_name="coupon_deals")
    op.drop_table("coupon_deals")
    op.drop_table("stores")
