"""SQL Catalog Repositories — categories and subcategories on SQLAlchemy async.

Invariants:
    - Implements CategoryRepository / SubCategoryRepository (core/repository_protocols.py)
    - Name lookups compare lower(name), matching the functional unique indexes
    - Every write commits inside translate_db_errors: a unique-index hit surfaces as
      DuplicateKeyError, never as a raw IntegrityError
    - Reads after a write use populate_existing so relationships are never stale

Design Decisions:
    - Listings newest-first by created_at: new entries show at the top of admin screens
"""

import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from crm.infrastructure.database import translate_db_errors
from crm.infrastructure.records import category_record, subcategory_record
from crm.models.category import Category
from crm.models.subcategory import SubCategory

logger = logging.getLogger(__name__)


class SqlCategoryRepository:
    """Category persistence backed by the `categories` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _fetch(self, category_id: UUID) -> Category | None:
        result = await self.db.execute(
            select(Category)
            .where(Category.id == category_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[dict]:
        result = await self.db.execute(
            select(Category).order_by(Category.created_at.desc()),
        )
        return [category_record(c) for c in result.scalars().all()]

    async def get_by_id(self, category_id: UUID) -> dict | None:
        category = await self._fetch(category_id)
        return category_record(category) if category else None

    async def find_by_name(
        self, name: str, exclude_id: UUID | None = None,
    ) -> dict | None:
        query = select(Category).where(
            func.lower(Category.name) == name.lower(),
        )
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        category = result.scalar_one_or_none()
        return category_record(category) if category else None

    async def insert(self, data: dict) -> dict:
        category = Category(**data)
        self.db.add(category)
        async with translate_db_errors(self.db, "insert", "Category"):
            await self.db.commit()
        return await self.get_by_id(category.id)

    async def update(self, category_id: UUID, changes: dict) -> dict:
        category = await self._fetch(category_id)
        for key, value in changes.items():
            setattr(category, key, value)
        async with translate_db_errors(self.db, "update", "Category"):
            await self.db.commit()
        return await self.get_by_id(category_id)

    async def delete(self, category_id: UUID) -> None:
        async with translate_db_errors(self.db, "delete", "Category"):
            await self.db.execute(
                delete(Category).where(Category.id == category_id),
            )
            await self.db.commit()


class SqlSubCategoryRepository:
    """SubCategory persistence backed by the `subcategories` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _fetch(self, subcategory_id: UUID) -> SubCategory | None:
        result = await self.db.execute(
            select(SubCategory)
            .where(SubCategory.id == subcategory_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[dict]:
        result = await self.db.execute(
            select(SubCategory).order_by(SubCategory.created_at.desc()),
        )
        return [subcategory_record(s) for s in result.scalars().all()]

    async def list_by_category(self, category_id: UUID) -> list[dict]:
        result = await self.db.execute(
            select(SubCategory)
            .where(SubCategory.category_id == category_id)
            .order_by(SubCategory.created_at.desc()),
        )
        return [subcategory_record(s) for s in result.scalars().all()]

    async def get_by_id(self, subcategory_id: UUID) -> dict | None:
        subcategory = await self._fetch(subcategory_id)
        return subcategory_record(subcategory) if subcategory else None

    async def find_by_name(
        self,
        name: str,
        category_id: UUID,
        exclude_id: UUID | None = None,
    ) -> dict | None:
        query = (
            select(SubCategory)
            .where(func.lower(SubCategory.name) == name.lower())
            .where(SubCategory.category_id == category_id)
        )
        if exclude_id is not None:
            query = query.where(SubCategory.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        subcategory = result.scalar_one_or_none()
        return subcategory_record(subcategory) if subcategory else None

    async def count_by_category(self, category_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(SubCategory)
            .where(SubCategory.category_id == category_id),
        )
        return result.scalar_one()

    async def insert(self, data: dict) -> dict:
        subcategory = SubCategory(**data)
        self.db.add(subcategory)
        async with translate_db_errors(self.db, "insert", "Subcategory"):
            await self.db.commit()
        return await self.get_by_id(subcategory.id)

    async def update(self, subcategory_id: UUID, changes: dict) -> dict:
        subcategory = await self._fetch(subcategory_id)
        for key, value in changes.items():
            setattr(subcategory, key, value)
        async with translate_db_errors(self.db, "update", "Subcategory"):
            await self.db.commit()
        return await self.get_by_id(subcategory_id)

    async def delete(self, subcategory_id: UUID) -> None:
        async with translate_db_errors(self.db, "delete", "Subcategory"):
            await self.db.execute(
                delete(SubCategory).where(SubCategory.id == subcategory_id),
            )
            await self.db.commit()
