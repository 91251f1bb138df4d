"""SQLAlchemy ORM model for the domains table.

Domains are tenants: the top-level isolation boundary. Deleting a domain
removes its departments and projects with it; users must be removed first.
"""

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class DomainModel(Base, TimestampMixin):
    """ORM model for domains table.

    Note: Domain names are globally unique across the entire system.
    """

    __tablename__ = "domains"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # "metadata" is reserved on declarative classes
    domain_metadata: Mapped[dict[str, str]] = mapped_column(
        "metadata", JSONB, nullable=False, default=dict
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<DomainModel(id={self.id}, name={self.name})>"
