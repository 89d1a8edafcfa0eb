"""ORM Models — SQLAlchemy declarative models for all CRM entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Entities reference each other by id foreign keys; nothing is embedded

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from crm.models.category import Category  # noqa: F401
from crm.models.subcategory import SubCategory  # noqa: F401
from crm.models.customer import Customer  # noqa: F401
from crm.models.user import User  # noqa: F401
