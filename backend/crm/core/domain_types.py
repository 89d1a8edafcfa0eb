"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CategoryId, SubCategoryId, CustomerId, UserId wrap UUIDs — never bare strings in services
    - Every enumerated customer field has exactly one default member
    - All valid states encoded as Enums — no raw string matching outside this module

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Enum values keep the exact spelling the frontend sends ("Not Paid", "In Progress")
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CategoryId = NewType("CategoryId", UUID)
SubCategoryId = NewType("SubCategoryId", UUID)
CustomerId = NewType("CustomerId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class CustomerStatus(str, Enum):
    """Account state of a customer — maps to the `status` column."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    PENDING = "Pending"
    SUSPENDED = "Suspended"


class GstStatus(str, Enum):
    """Whether GST on the service fee has been settled."""
    PAID = "Paid"
    NOT_PAID = "Not Paid"
    PAY_LATER = "Pay Later"


class DeliveryStatus(str, Enum):
    """Progress of the service delivery."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    REJECTED = "Rejected"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Fallback member used whenever an enumerated input is absent or unknown
ENUM_DEFAULTS: dict[type[Enum], Enum] = {
    CustomerStatus: CustomerStatus.ACTIVE,
    GstStatus: GstStatus.NOT_PAID,
    DeliveryStatus: DeliveryStatus.PENDING,
}


# ─── Field Constraints ───────────────────────────────────────────

PHONE_PATTERN = r"^\d{10}$"
EMAIL_PATTERN = r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$"

MAX_NAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 500
MAX_REGION_LENGTH = 100      # city, state
MAX_ZIP_CODE_LENGTH = 20
MAX_CODE_LENGTH = 50         # serviceNumber, gstNumber
MAX_NOTES_LENGTH = 2000

# Customer columns a free-text search scans (API names)
CUSTOMER_SEARCH_FIELDS = ("name", "email", "phone", "serviceNumber")

DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = SortOrder.DESC
