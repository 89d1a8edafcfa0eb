"""ORM → Record Conversion — the only place ORM instances become plain dicts.

Invariants:
    - Records carry every mapped column under its attribute name (snake_case)
    - Referenced entities appear as small nested dicts resolved at read time,
      or None when the reference is empty
"""

from sqlalchemy import inspect

from crm.models.category import Category
from crm.models.customer import Customer
from crm.models.subcategory import SubCategory
from crm.models.user import User


def _columns(obj) -> dict:
    return {
        attr.key: getattr(obj, attr.key)
        for attr in inspect(obj).mapper.column_attrs
    }


def category_ref(category: Category | None) -> dict | None:
    if category is None:
        return None
    return {"id": category.id, "name": category.name, "url": category.url}


def category_record(category: Category) -> dict:
    return _columns(category)


def subcategory_record(subcategory: SubCategory) -> dict:
    record = _columns(subcategory)
    record["category"] = category_ref(subcategory.category)
    return record


def customer_record(customer: Customer) -> dict:
    record = _columns(customer)
    record["service_category"] = category_ref(customer.service_category)
    sub = customer.service_sub_category
    record["service_sub_category"] = (
        {"id": sub.id, "name": sub.name} if sub is not None else None
    )
    return record


def user_record(user: User) -> dict:
    return _columns(user)
