"""Database infrastructure - async SQLAlchemy engine, sessions and base model."""

from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
]
