"""Customer Schemas — the customer normalization pipeline and API response shape.

Invariants:
    - Create requires name, phone, address, serviceCategory, serviceCategoryName
    - phone is exactly 10 digits; email (if any) matches the address pattern, lower-cased
    - dateOfBirth may not be in the future; other dates are parsed, never checked
    - fees: invalid or negative → 0; status / gstStatus / deliveryStatus: unknown → default
    - Empty or absent serviceSubCategory → serviceSubCategory and its name are both None
    - CustomerUpdate.to_changes() only touches fields the caller sent; a required
      field sent blank is ignored rather than cleared

Design Decisions:
    - Field names match ORM attributes; aliases match the camelCase wire names, so
      model_dump() output goes straight into the repository
    - Snapshot names (serviceCategoryName, serviceSubCategoryName) are accepted
      as given: they record what the user saw at write time
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from crm.core.domain_types import (
    MAX_ADDRESS_LENGTH, MAX_CODE_LENGTH, MAX_NAME_LENGTH, MAX_NOTES_LENGTH,
    MAX_REGION_LENGTH, MAX_ZIP_CODE_LENGTH,
    CustomerStatus, DeliveryStatus, GstStatus,
)
from crm.schemas.catalog import CategoryRef
from crm.schemas.normalize import (
    BirthDate, Fees, OptionalDate, OptionalEmail, OptionalPhone, OptionalText,
    RequiredPhone, RequiredText, enum_or_default, reference,
)

Status = Annotated[CustomerStatus, BeforeValidator(enum_or_default(CustomerStatus))]
Gst = Annotated[GstStatus, BeforeValidator(enum_or_default(GstStatus))]
Delivery = Annotated[DeliveryStatus, BeforeValidator(enum_or_default(DeliveryStatus))]

ServiceCategoryRef = Annotated[UUID, reference("service category")]
OptionalServiceCategoryRef = Annotated[
    UUID | None, reference("service category", required=False),
]
ServiceSubCategoryRef = Annotated[
    UUID | None, reference("service subcategory", required=False),
]

# Fields whose blank value on update means "leave unchanged"
_REQUIRED_ON_CREATE = frozenset({
    "name", "phone", "address", "service_category_id", "service_category_name",
})
_ENUM_FIELDS = {
    "status": CustomerStatus.ACTIVE,
    "gst_status": GstStatus.NOT_PAID,
    "delivery_status": DeliveryStatus.PENDING,
}

_INPUT_CONFIG = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, extra="ignore",
)


class CustomerCreate(BaseModel):
    """Full customer payload; every omitted optional field gets its default."""
    model_config = _INPUT_CONFIG

    # Basic information
    name: RequiredText = Field(max_length=MAX_NAME_LENGTH)
    date_of_birth: BirthDate = None
    email: OptionalEmail = None
    phone: RequiredPhone
    address: RequiredText = Field(max_length=MAX_ADDRESS_LENGTH)
    city: OptionalText = Field(None, max_length=MAX_REGION_LENGTH)
    state: OptionalText = Field(None, max_length=MAX_REGION_LENGTH)
    zip_code: OptionalText = Field(None, max_length=MAX_ZIP_CODE_LENGTH)

    # Service information
    service_category_id: ServiceCategoryRef = Field(alias="serviceCategory")
    service_category_name: RequiredText = Field(max_length=200)
    service_sub_category_id: ServiceSubCategoryRef = Field(
        None, alias="serviceSubCategory",
    )
    service_sub_category_name: OptionalText = Field(None, max_length=200)
    service_number: OptionalText = Field(None, max_length=MAX_CODE_LENGTH)
    status: Status = CustomerStatus.ACTIVE

    # Financial information
    fees: Fees = 0.0
    gst_status: Gst = GstStatus.NOT_PAID
    gst_number: OptionalText = Field(None, max_length=MAX_CODE_LENGTH)

    # Dates
    delivery_date: OptionalDate = None
    next_renewal_date: OptionalDate = None
    delivery_status: Delivery = DeliveryStatus.PENDING

    notes: OptionalText = Field(None, max_length=MAX_NOTES_LENGTH)

    def to_record(self) -> dict:
        record = self.model_dump()
        if record["service_sub_category_id"] is None:
            record["service_sub_category_name"] = None
        for key in _ENUM_FIELDS:
            record[key] = record[key].value
        return record


class CustomerUpdate(BaseModel):
    """Partial customer payload; nothing is defaulted for omitted fields."""
    model_config = _INPUT_CONFIG

    name: OptionalText = Field(None, max_length=MAX_NAME_LENGTH)
    date_of_birth: BirthDate = None
    email: OptionalEmail = None
    phone: OptionalPhone = None
    address: OptionalText = Field(None, max_length=MAX_ADDRESS_LENGTH)
    city: OptionalText = Field(None, max_length=MAX_REGION_LENGTH)
    state: OptionalText = Field(None, max_length=MAX_REGION_LENGTH)
    zip_code: OptionalText = Field(None, max_length=MAX_ZIP_CODE_LENGTH)

    service_category_id: OptionalServiceCategoryRef = Field(
        None, alias="serviceCategory",
    )
    service_category_name: OptionalText = Field(None, max_length=200)
    service_sub_category_id: ServiceSubCategoryRef = Field(
        None, alias="serviceSubCategory",
    )
    service_sub_category_name: OptionalText = Field(None, max_length=200)
    service_number: OptionalText = Field(None, max_length=MAX_CODE_LENGTH)
    status: Status = None

    fees: Fees = None
    gst_status: Gst = None
    gst_number: OptionalText = Field(None, max_length=MAX_CODE_LENGTH)

    delivery_date: OptionalDate = None
    next_renewal_date: OptionalDate = None
    delivery_status: Delivery = None

    notes: OptionalText = Field(None, max_length=MAX_NOTES_LENGTH)

    def to_changes(self, reset_statuses: bool = False) -> dict:
        """Fields to write. reset_statuses re-applies enum defaults when omitted."""
        changes = self.model_dump(exclude_unset=True)
        for key in _REQUIRED_ON_CREATE:
            if key in changes and changes[key] is None:
                del changes[key]
        if "service_sub_category_id" in changes and changes["service_sub_category_id"] is None:
            changes["service_sub_category_name"] = None
        for key, default in _ENUM_FIELDS.items():
            if key in changes:
                changes[key] = changes[key].value
            elif reset_statuses:
                changes[key] = default.value
        return changes


# --- Responses ----------------------------------------------------------------

class SubCategoryRef(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    name: str


class CustomerResponse(BaseModel):
    """Customer as returned by the API, with references resolved at read time."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    name: str
    date_of_birth: datetime | None = None
    email: str | None = None
    phone: str
    address: str
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    service_category: CategoryRef | None = None
    service_category_name: str
    service_sub_category: SubCategoryRef | None = None
    service_sub_category_name: str | None = None
    service_number: str | None = None
    status: str
    fees: float = 0
    gst_status: str
    gst_number: str | None = None
    delivery_date: datetime | None = None
    next_renewal_date: datetime | None = None
    delivery_status: str
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
