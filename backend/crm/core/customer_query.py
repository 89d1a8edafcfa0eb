"""Customer Query Builder — turns optional listing parameters into a query value.

Invariants:
    - PURE: no IO; the storage layer translates CustomerQuery into its own dialect
    - Absent (None or blank) parameters impose no constraint
    - Filter = (OR of substring matches over search_fields) AND (each equality)
    - sort_by is passed through uninterpreted; only sort_order is normalized
      ("desc" → descending, anything else → ascending)

Design Decisions:
    - Frozen dataclass over a raw dict: hashable, comparable in tests, and the
      repository cannot mutate a caller's query
    - `service` is an identifier, so a malformed value fails with
      InvalidIdentifierError instead of silently matching nothing
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from crm.core.domain_types import (
    CUSTOMER_SEARCH_FIELDS,
    DEFAULT_SORT_BY,
    DEFAULT_SORT_ORDER,
    SortOrder,
)
from crm.core.identifiers import parse_identifier


@dataclass(frozen=True)
class CustomerQuery:
    """Storage-agnostic description of a customer listing."""
    search: str | None = None
    search_fields: tuple[str, ...] = field(default=CUSTOMER_SEARCH_FIELDS)
    status: str | None = None
    service_category_id: UUID | None = None
    sort_by: str = DEFAULT_SORT_BY
    sort_order: SortOrder = DEFAULT_SORT_ORDER

    @property
    def equals(self) -> dict[str, Any]:
        """Exact-match clauses keyed by API field name."""
        clauses: dict[str, Any] = {}
        if self.status is not None:
            clauses["status"] = self.status
        if self.service_category_id is not None:
            clauses["serviceCategory"] = self.service_category_id
        return clauses

    @property
    def descending(self) -> bool:
        return self.sort_order is SortOrder.DESC

    @property
    def is_unfiltered(self) -> bool:
        return self.search is None and not self.equals


def _present(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def build_customer_query(
    search: str | None = None,
    status: str | None = None,
    service: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> CustomerQuery:
    """Build a CustomerQuery from raw query-string values."""
    service_value = _present(service)
    order_value = _present(sort_order)
    return CustomerQuery(
        search=_present(search),
        status=_present(status),
        service_category_id=(
            parse_identifier(service_value, "service category")
            if service_value else None
        ),
        sort_by=_present(sort_by) or DEFAULT_SORT_BY,
        sort_order=(
            DEFAULT_SORT_ORDER if order_value is None
            else SortOrder.DESC if order_value == SortOrder.DESC.value
            else SortOrder.ASC
        ),
    )
