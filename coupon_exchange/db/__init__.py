"""Database Package - SQLAlchemy declarative base shared by all ORM models."""
