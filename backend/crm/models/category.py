"""Category ORM — top-level service category.

Invariants:
    - id is a UUID primary key generated on insert
    - name is non-nullable and unique case-insensitively (functional index on lower(name))
    - url defaults to empty string, never NULL

Design Decisions:
    - Functional unique index over a shadow lowercase column: the storage backstop
      for the check-then-insert race, without a second field to keep in sync
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from crm.db.base import Base


class Category(Base):
    """Service category — groups subcategories and customers."""
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    url: Mapped[str] = mapped_column(
        String(500), nullable=False, default="",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


Index("uq_categories_name_lower", func.lower(Category.name), unique=True)
