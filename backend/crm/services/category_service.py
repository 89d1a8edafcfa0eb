"""Category Service — list, read, create, update and delete categories.

Invariants:
    - Identifiers are parsed before any repository call (InvalidIdentifierError)
    - Names are unique case-insensitively; checked here, unique index as backstop
    - A category with subcategories, or referenced by customers, cannot be deleted
    - updated_at advances on every successful update
"""

import logging
from datetime import datetime, timezone

from crm.core.errors import ResourceNotFoundError
from crm.core.identifiers import parse_identifier
from crm.core.enforce_integrity import name_or_parent_changed
from crm.core.repository_protocols import (
    CategoryRepository, CustomerRepository, SubCategoryRepository,
)
from crm.schemas.catalog import CategoryCreate, CategoryUpdate
from crm.schemas.normalize import validate_record
from crm.services.integrity_guard import IntegrityGuard

logger = logging.getLogger(__name__)


class CategoryService:
    """Category operations over the repository protocols."""

    def __init__(
        self,
        categories: CategoryRepository,
        subcategories: SubCategoryRepository,
        customers: CustomerRepository,
    ):
        self.categories = categories
        self.guard = IntegrityGuard(categories, subcategories, customers)

    async def list_categories(self) -> list[dict]:
        return await self.categories.list_all()

    async def get_category(self, raw_id) -> dict:
        category_id = parse_identifier(raw_id, "category")
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise ResourceNotFoundError("Category", category_id)
        return category

    async def create_category(self, payload) -> dict:
        data = validate_record(CategoryCreate, payload).model_dump()
        await self.guard.ensure_category_name_free(data["name"])
        category = await self.categories.insert(data)
        logger.info(
            f"Category created: {category['name']}",
            extra={"resource": "category", "resource_id": str(category["id"])},
        )
        return category

    async def update_category(self, raw_id, payload) -> dict:
        current = await self.get_category(raw_id)
        changes = validate_record(CategoryUpdate, payload).to_changes()
        if name_or_parent_changed(current, changes):
            await self.guard.ensure_category_name_free(
                changes["name"], exclude_id=current["id"],
            )
        changes["updated_at"] = datetime.now(timezone.utc)
        category = await self.categories.update(current["id"], changes)
        logger.info(
            "Category updated",
            extra={"resource": "category", "resource_id": str(current["id"])},
        )
        return category

    async def delete_category(self, raw_id) -> dict:
        current = await self.get_category(raw_id)
        await self.guard.ensure_category_deletable(current["id"])
        await self.categories.delete(current["id"])
        logger.info(
            "Category deleted",
            extra={"resource": "category", "resource_id": str(current["id"])},
        )
        return {"message": "Category deleted successfully"}
