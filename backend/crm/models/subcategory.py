"""SubCategory ORM — a service offered within one category.

Invariants:
    - Always belongs to a Category (category_id FK, non-nullable)
    - (lower(name), category_id) is unique: the same name may repeat across categories
    - description defaults to empty string

Design Decisions:
    - category loaded with selectin: every read returns the populated parent
      {id, name, url}, which async sessions cannot lazy-load later
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crm.db.base import Base


class SubCategory(Base):
    """Service subcategory scoped to a category."""
    __tablename__ = "subcategories"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("categories.id"), nullable=False, index=True,
    )
    description: Mapped[str] = mapped_column(
        Text, nullable=False, default="",
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

    category: Mapped["Category"] = relationship("Category", lazy="selectin")


Index(
    "uq_subcategories_name_lower_category",
    func.lower(SubCategory.name),
    SubCategory.category_id,
    unique=True,
)
