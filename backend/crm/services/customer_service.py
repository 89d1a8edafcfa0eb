"""Customer Service — customer listing, CRUD and the statuses lookup.

Invariants:
    - Listing goes through build_customer_query(); a malformed `service` id fails
      before the repository is called
    - serviceCategory must exist; serviceSubCategory must exist when set
    - On update, references are re-checked only when they change
    - Customer deletion is unconditional (nothing references customers)
    - updated_at advances on every successful update

Design Decisions:
    - reset_statuses comes from Settings.reset_statuses_on_update: when True an
      update that omits status / gstStatus / deliveryStatus puts them back to
      their defaults; when False the update is strictly partial
"""

import logging
from datetime import datetime, timezone

from crm.core.customer_query import build_customer_query
from crm.core.enforce_integrity import reference_changed
from crm.core.errors import ResourceNotFoundError
from crm.core.identifiers import parse_identifier
from crm.core.repository_protocols import (
    CategoryRepository,
    CustomerRepository,
    SubCategoryRepository,
)
from crm.schemas.customer import CustomerCreate, CustomerUpdate
from crm.schemas.normalize import validate_record
from crm.services.integrity_guard import IntegrityGuard

logger = logging.getLogger(__name__)


class CustomerService:
    """Customer operations over the repository protocols."""

    def __init__(
        self,
        customers: CustomerRepository,
        categories: CategoryRepository,
        subcategories: SubCategoryRepository,
        reset_statuses: bool = False,
    ):
        self.customers = customers
        self.guard = IntegrityGuard(categories, subcategories, customers)
        self.reset_statuses = reset_statuses

    async def list_customers(
        self,
        search: str | None = None,
        status: str | None = None,
        service: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> list[dict]:
        query = build_customer_query(search, status, service, sort_by, sort_order)
        return await self.customers.search(query)

    async def get_customer(self, raw_id) -> dict:
        customer_id = parse_identifier(raw_id, "customer")
        customer = await self.customers.get_by_id(customer_id)
        if customer is None:
            raise ResourceNotFoundError("Customer", customer_id)
        return customer

    async def _check_references(self, record: dict) -> None:
        if record.get("service_category_id") is not None:
            await self.guard.require_category(
                record["service_category_id"], "Service category",
            )
        if record.get("service_sub_category_id") is not None:
            await self.guard.require_subcategory(
                record["service_sub_category_id"], "Service subcategory",
            )

    async def create_customer(self, payload) -> dict:
        data = validate_record(CustomerCreate, payload).to_record()
        await self._check_references(data)
        customer = await self.customers.insert(data)
        logger.info(
            "Customer created",
            extra={"resource": "customer", "resource_id": str(customer["id"])},
        )
        return customer

    async def update_customer(self, raw_id, payload) -> dict:
        current = await self.get_customer(raw_id)
        changes = validate_record(CustomerUpdate, payload).to_changes(
            reset_statuses=self.reset_statuses,
        )
        await self._check_references({
            key: changes[key]
            for key in ("service_category_id", "service_sub_category_id")
            if reference_changed(current, changes, key)
        })
        changes["updated_at"] = datetime.now(timezone.utc)
        customer = await self.customers.update(current["id"], changes)
        logger.info(
            "Customer updated",
            extra={"resource": "customer", "resource_id": str(current["id"])},
        )
        return customer

    async def delete_customer(self, raw_id) -> dict:
        current = await self.get_customer(raw_id)
        await self.customers.delete(current["id"])
        logger.info(
            "Customer deleted",
            extra={"resource": "customer", "resource_id": str(current["id"])},
        )
        return {"message": "Customer deleted successfully"}

    async def list_statuses(self) -> list[str]:
        return await self.customers.distinct_statuses()
