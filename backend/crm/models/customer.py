"""Customer ORM — a client subscribed to one service category.

Invariants:
    - name, phone, address, service_category_id, service_category_name are non-nullable
    - status / gst_status / delivery_status hold CustomerStatus / GstStatus /
      DeliveryStatus values (validated before insert, not by a DB enum)
    - fees is never negative (normalized to 0 before insert)
    - updated_at is set explicitly by the service on every mutation

Design Decisions:
    - service_category_name / service_sub_category_name are point-in-time snapshots
      taken at write time; reads resolve current names through the relationships
    - String columns over native enums: adding a status needs no migration
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crm.db.base import Base
from crm.core.domain_types import (
    MAX_ADDRESS_LENGTH, MAX_CODE_LENGTH, MAX_NAME_LENGTH,
    MAX_REGION_LENGTH, MAX_ZIP_CODE_LENGTH,
    CustomerStatus, DeliveryStatus, GstStatus,
)


class Customer(Base):
    """Customer record with service, billing and delivery details."""
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )

    # Basic information
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    date_of_birth: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    phone: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    address: Mapped[str] = mapped_column(
        String(MAX_ADDRESS_LENGTH), nullable=False,
    )
    city: Mapped[str | None] = mapped_column(String(MAX_REGION_LENGTH), nullable=True)
    state: Mapped[str | None] = mapped_column(String(MAX_REGION_LENGTH), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(
        String(MAX_ZIP_CODE_LENGTH), nullable=True,
    )

    # Service information
    service_category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("categories.id"), nullable=False, index=True,
    )
    service_category_name: Mapped[str] = mapped_column(String(200), nullable=False)
    service_sub_category_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("subcategories.id"), nullable=True, index=True,
    )
    service_sub_category_name: Mapped[str | None] = mapped_column(
        String(200), nullable=True,
    )
    service_number: Mapped[str | None] = mapped_column(
        String(MAX_CODE_LENGTH), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CustomerStatus.ACTIVE.value, index=True,
    )

    # Financial information
    fees: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    gst_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=GstStatus.NOT_PAID.value,
    )
    gst_number: Mapped[str | None] = mapped_column(
        String(MAX_CODE_LENGTH), nullable=True,
    )

    # Dates
    delivery_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    next_renewal_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    delivery_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DeliveryStatus.PENDING.value,
    )

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

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

    # Read-time resolution of the referenced display names
    service_category: Mapped["Category"] = relationship(
        "Category", lazy="selectin",
    )
    service_sub_category: Mapped["SubCategory | None"] = relationship(
        "SubCategory", lazy="selectin",
    )
