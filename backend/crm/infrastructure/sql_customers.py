"""SQL Customer Repository — customers on SQLAlchemy async, plus query translation.

Invariants:
    - Implements CustomerRepository (core/repository_protocols.py)
    - CustomerQuery → select(): search is an OR of case-insensitive, literal
      substring matches; equality clauses are ANDed; absent parts add nothing
    - sortBy names are resolved to columns by snake-casing; a name with no column
      imposes no ordering instead of failing
    - Rows come back with serviceCategory / serviceSubCategory resolved from the
      current referenced rows, not from the snapshot name fields

Design Decisions:
    - icontains(autoescape=True): user input never acts as a LIKE pattern
"""

import logging
from uuid import UUID

from pydantic.alias_generators import to_snake
from sqlalchemy import ColumnElement, Select, delete, distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from crm.core.customer_query import CustomerQuery
from crm.infrastructure.database import translate_db_errors
from crm.infrastructure.records import customer_record
from crm.models.customer import Customer

logger = logging.getLogger(__name__)

# API names whose column is not the plain snake_case form
_COLUMN_ALIASES = {
    "_id": "id",
    "serviceCategory": "service_category_id",
    "serviceSubCategory": "service_sub_category_id",
}


def resolve_column(api_name: str) -> ColumnElement | None:
    """Map an API field name to a Customer column, or None when there is none."""
    column_name = _COLUMN_ALIASES.get(api_name) or to_snake(api_name)
    return Customer.__table__.c.get(column_name)


def apply_customer_query(query: Select, criteria: CustomerQuery) -> Select:
    """Translate a CustomerQuery into WHERE / ORDER BY clauses."""
    if criteria.search is not None:
        columns = [resolve_column(name) for name in criteria.search_fields]
        query = query.where(or_(*(
            column.icontains(criteria.search, autoescape=True)
            for column in columns if column is not None
        )))
    for api_name, value in criteria.equals.items():
        query = query.where(resolve_column(api_name) == value)

    sort_column = resolve_column(criteria.sort_by)
    if sort_column is not None:
        query = query.order_by(
            sort_column.desc() if criteria.descending else sort_column.asc(),
        )
    return query


class SqlCustomerRepository:
    """Customer persistence backed by the `customers` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _fetch(self, customer_id: UUID) -> Customer | None:
        result = await self.db.execute(
            select(Customer)
            .where(Customer.id == customer_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def search(self, query: CustomerQuery) -> list[dict]:
        result = await self.db.execute(
            apply_customer_query(select(Customer), query),
        )
        return [customer_record(c) for c in result.scalars().all()]

    async def get_by_id(self, customer_id: UUID) -> dict | None:
        customer = await self._fetch(customer_id)
        return customer_record(customer) if customer else None

    async def count_by_category(self, category_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Customer)
            .where(Customer.service_category_id == category_id),
        )
        return result.scalar_one()

    async def count_by_subcategory(self, subcategory_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Customer)
            .where(Customer.service_sub_category_id == subcategory_id),
        )
        return result.scalar_one()

    async def distinct_statuses(self) -> list[str]:
        result = await self.db.execute(
            select(distinct(Customer.status)).order_by(Customer.status),
        )
        return list(result.scalars().all())

    async def insert(self, data: dict) -> dict:
        customer = Customer(**data)
        self.db.add(customer)
        async with translate_db_errors(self.db, "insert", "Customer"):
            await self.db.commit()
        return await self.get_by_id(customer.id)

    async def update(self, customer_id: UUID, changes: dict) -> dict:
        customer = await self._fetch(customer_id)
        for key, value in changes.items():
            setattr(customer, key, value)
        async with translate_db_errors(self.db, "update", "Customer"):
            await self.db.commit()
        return await self.get_by_id(customer_id)

    async def delete(self, customer_id: UUID) -> None:
        async with translate_db_errors(self.db, "delete", "Customer"):
            await self.db.execute(
                delete(Customer).where(Customer.id == customer_id),
            )
            await self.db.commit()
