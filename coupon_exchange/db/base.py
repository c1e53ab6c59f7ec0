"""SQLAlchemy Declarative Base - shared base class for all coupon exchange ORM models.

Invariants:
    - Base.metadata is the single source of truth for table definitions
      (create_all in tests, alembic migrations in deployments)
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for stores, deals, affiliations and issued coupons."""
