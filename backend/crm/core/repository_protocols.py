"""Boundary Protocols — contracts between services and storage.

Invariants:
    - Services NEVER import a storage driver; they depend on these Protocols
    - Records cross the boundary as plain dicts with snake_case keys
    - Lookups return None when nothing matches; they never raise NotFound themselves
    - insert/update return the stored record with references resolved

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods: implementations do IO; the pure decisions in core/ never await
"""

from typing import Protocol
from uuid import UUID

from crm.core.customer_query import CustomerQuery
from crm.core.domain_types import CategoryId, CustomerId, SubCategoryId


class CategoryRepository(Protocol):
    """Contract for category persistence."""
    async def list_all(self) -> list[dict]: ...
    async def get_by_id(self, category_id: CategoryId) -> dict | None: ...
    async def find_by_name(
        self, name: str, exclude_id: CategoryId | None = None,
    ) -> dict | None: ...
    async def insert(self, data: dict) -> dict: ...
    async def update(self, category_id: CategoryId, changes: dict) -> dict: ...
    async def delete(self, category_id: CategoryId) -> None: ...


class SubCategoryRepository(Protocol):
    """Contract for subcategory persistence."""
    async def list_all(self) -> list[dict]: ...
    async def list_by_category(self, category_id: CategoryId) -> list[dict]: ...
    async def get_by_id(self, subcategory_id: SubCategoryId) -> dict | None: ...
    async def find_by_name(
        self,
        name: str,
        category_id: CategoryId,
        exclude_id: SubCategoryId | None = None,
    ) -> dict | None: ...
    async def count_by_category(self, category_id: CategoryId) -> int: ...
    async def insert(self, data: dict) -> dict: ...
    async def update(self, subcategory_id: SubCategoryId, changes: dict) -> dict: ...
    async def delete(self, subcategory_id: SubCategoryId) -> None: ...


class CustomerRepository(Protocol):
    """Contract for customer persistence."""
    async def search(self, query: CustomerQuery) -> list[dict]: ...
    async def get_by_id(self, customer_id: CustomerId) -> dict | None: ...
    async def count_by_category(self, category_id: CategoryId) -> int: ...
    async def count_by_subcategory(self, subcategory_id: SubCategoryId) -> int: ...
    async def distinct_statuses(self) -> list[str]: ...
    async def insert(self, data: dict) -> dict: ...
    async def update(self, customer_id: CustomerId, changes: dict) -> dict: ...
    async def delete(self, customer_id: CustomerId) -> None: ...


class UserRepository(Protocol):
    """Contract for login-subject persistence."""
    async def get_by_username(self, username: str) -> dict | None: ...
    async def get_by_id(self, user_id: UUID) -> dict | None: ...
    async def insert(self, data: dict) -> dict: ...
