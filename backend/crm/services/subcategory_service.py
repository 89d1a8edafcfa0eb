"""SubCategory Service — subcategory CRUD scoped under a parent category.

Invariants:
    - The parent category must exist on create, and on update when it changes
    - (lower(name), category) is unique; re-checked when either part changes
    - A subcategory referenced by any customer cannot be deleted
    - list_by_category() is 404 for an unknown category, [] for an empty one
"""

import logging
from datetime import datetime, timezone

from crm.core.enforce_integrity import name_or_parent_changed, reference_changed
from crm.core.errors import ResourceNotFoundError
from crm.core.identifiers import parse_identifier
from crm.core.repository_protocols import (
    CategoryRepository,
    CustomerRepository,
    SubCategoryRepository,
)
from crm.schemas.catalog import SubCategoryCreate, SubCategoryUpdate
from crm.schemas.normalize import validate_record
from crm.services.integrity_guard import IntegrityGuard

logger = logging.getLogger(__name__)


class SubCategoryService:
    """SubCategory operations over the repository protocols."""

    def __init__(
        self,
        categories: CategoryRepository,
        subcategories: SubCategoryRepository,
        customers: CustomerRepository,
    ):
        self.categories = categories
        self.subcategories = subcategories
        self.guard = IntegrityGuard(categories, subcategories, customers)

    async def list_subcategories(self) -> list[dict]:
        return await self.subcategories.list_all()

    async def list_by_category(self, raw_category_id) -> list[dict]:
        category_id = parse_identifier(raw_category_id, "category")
        if await self.categories.get_by_id(category_id) is None:
            raise ResourceNotFoundError("Category", category_id)
        return await self.subcategories.list_by_category(category_id)

    async def get_subcategory(self, raw_id) -> dict:
        subcategory_id = parse_identifier(raw_id, "subcategory")
        subcategory = await self.subcategories.get_by_id(subcategory_id)
        if subcategory is None:
            raise ResourceNotFoundError("Subcategory", subcategory_id)
        return subcategory

    async def create_subcategory(self, payload) -> dict:
        data = validate_record(SubCategoryCreate, payload).model_dump()
        await self.guard.require_category(data["category_id"])
        await self.guard.ensure_subcategory_name_free(
            data["name"], data["category_id"],
        )
        subcategory = await self.subcategories.insert(data)
        logger.info(
            f"Subcategory created: {subcategory['name']}",
            extra={"resource": "subcategory", "resource_id": str(subcategory["id"])},
        )
        return subcategory

    async def update_subcategory(self, raw_id, payload) -> dict:
        current = await self.get_subcategory(raw_id)
        changes = validate_record(SubCategoryUpdate, payload).to_changes()

        if reference_changed(current, changes, "category_id"):
            await self.guard.require_category(changes["category_id"])
        if name_or_parent_changed(current, changes, parent_key="category_id"):
            await self.guard.ensure_subcategory_name_free(
                changes.get("name", current["name"]),
                changes.get("category_id", current["category_id"]),
                exclude_id=current["id"],
            )

        changes["updated_at"] = datetime.now(timezone.utc)
        subcategory = await self.subcategories.update(current["id"], changes)
        logger.info(
            "Subcategory updated",
            extra={"resource": "subcategory", "resource_id": str(current["id"])},
        )
        return subcategory

    async def delete_subcategory(self, raw_id) -> dict:
        current = await self.get_subcategory(raw_id)
        await self.guard.ensure_subcategory_deletable(current["id"])
        await self.subcategories.delete(current["id"])
        logger.info(
            "Subcategory deleted",
            extra={"resource": "subcategory", "resource_id": str(current["id"])},
        )
        return {"message": "Subcategory deleted successfully"}
