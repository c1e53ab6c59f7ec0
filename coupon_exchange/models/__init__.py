"""ORM Models - SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Store is the root; deals, affiliations and coupons reference stores.id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before
      create_all() or alembic autogenerate runs
"""

from coupon_exchange.models.store import Store  # noqa: F401
from coupon_exchange.models.coupon_deal import CouponDeal  # noqa: F401
from coupon_exchange.models.affiliation import Affiliation  # noqa: F401
from coupon_exchange.models.issued_coupon import IssuedCoupon  # noqa: F401
