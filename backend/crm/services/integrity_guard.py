"""Integrity Guard — performs the lookups that referential rules judge.

Invariants:
    - Every public method either returns normally or raises the CrmError that
      core/enforce_integrity.py decided on
    - Lookups only; the guard never writes

Design Decisions:
    - Thin async shell over pure functions (same split as the core/ enforce_* rules):
      the decision logic stays testable without a database
"""

from uuid import UUID

from crm.core.enforce_integrity import (
    check_category_has_no_customers,
    check_category_has_no_subcategories,
    check_category_name_unique,
    check_reference_exists,
    check_subcategory_has_no_customers,
    check_subcategory_name_unique,
)
from crm.core.repository_protocols import (
    CategoryRepository,
    CustomerRepository,
    SubCategoryRepository,
)


def _raise_if(error) -> None:
    if error is not None:
        raise error


class IntegrityGuard:
    """Async referential checks shared by the entity services."""

    def __init__(
        self,
        categories: CategoryRepository,
        subcategories: SubCategoryRepository,
        customers: CustomerRepository | None = None,
    ):
        self.categories = categories
        self.subcategories = subcategories
        self.customers = customers

    async def require_category(
        self, category_id: UUID, label: str = "Category",
    ) -> dict:
        category = await self.categories.get_by_id(category_id)
        _raise_if(check_reference_exists(category, label, category_id))
        return category

    async def require_subcategory(
        self, subcategory_id: UUID, label: str = "Subcategory",
    ) -> dict:
        subcategory = await self.subcategories.get_by_id(subcategory_id)
        _raise_if(check_reference_exists(subcategory, label, subcategory_id))
        return subcategory

    async def ensure_category_name_free(
        self, name: str, exclude_id: UUID | None = None,
    ) -> None:
        conflict = await self.categories.find_by_name(name, exclude_id)
        _raise_if(check_category_name_unique(conflict))

    async def ensure_subcategory_name_free(
        self, name: str, category_id: UUID, exclude_id: UUID | None = None,
    ) -> None:
        conflict = await self.subcategories.find_by_name(
            name, category_id, exclude_id,
        )
        _raise_if(check_subcategory_name_unique(conflict))

    async def ensure_category_deletable(self, category_id: UUID) -> None:
        count = await self.subcategories.count_by_category(category_id)
        _raise_if(check_category_has_no_subcategories(count))
        count = await self.customers.count_by_category(category_id)
        _raise_if(check_category_has_no_customers(count))

    async def ensure_subcategory_deletable(self, subcategory_id: UUID) -> None:
        count = await self.customers.count_by_subcategory(subcategory_id)
        _raise_if(check_subcategory_has_no_customers(count))
