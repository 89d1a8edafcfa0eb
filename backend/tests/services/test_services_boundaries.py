"""Service boundaries — identifier parsing happens before any storage access.

Invariants:
    - A malformed id raises InvalidIdentifierError and no repository method runs
    - A well-formed unknown id reaches storage once and raises ResourceNotFoundError
    - Guard failures stop the write: insert/update/delete are never called

Design Decisions:
    - AsyncMock repositories: the Protocols make storage swappable, so these tests
      observe calls directly instead of inspecting a database
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from crm.core.errors import (
    HasDependentsError, InvalidIdentifierError, ReferenceNotFoundError,
    ResourceNotFoundError,
)
from crm.services.category_service import CategoryService
from crm.services.customer_service import CustomerService
from crm.services.subcategory_service import SubCategoryService


@pytest.fixture
def mocks():
    return {
        "categories": AsyncMock(),
        "subcategories": AsyncMock(),
        "customers": AsyncMock(),
    }


def _services(m):
    return {
        "category": CategoryService(
            m["categories"], m["subcategories"], m["customers"],
        ),
        "subcategory": SubCategoryService(
            m["categories"], m["subcategories"], m["customers"],
        ),
        "customer": CustomerService(
            m["customers"], m["categories"], m["subcategories"],
        ),
    }


@pytest.mark.parametrize("service_name, method, args", [
    ("category", "get_category", ("bad",)),
    ("category", "update_category", ("bad", {"name": "x"})),
    ("category", "delete_category", ("bad",)),
    ("subcategory", "get_subcategory", ("bad",)),
    ("subcategory", "list_by_category", ("bad",)),
    ("subcategory", "delete_subcategory", ("bad",)),
    ("customer", "get_customer", ("bad",)),
    ("customer", "update_customer", ("bad", {"notes": "x"})),
    ("customer", "delete_customer", ("bad",)),
    ("customer", "list_customers", (None, None, "bad")),
])
async def test_malformed_id_never_touches_storage(mocks, service_name, method, args):
    service = _services(mocks)[service_name]
    with pytest.raises(InvalidIdentifierError):
        await getattr(service, method)(*args)
    for repo in mocks.values():
        assert repo.mock_calls == []


async def test_unknown_id_is_not_found(mocks):
    mocks["customers"].get_by_id.return_value = None
    service = _services(mocks)["customer"]
    customer_id = uuid4()
    with pytest.raises(ResourceNotFoundError):
        await service.get_customer(str(customer_id))
    mocks["customers"].get_by_id.assert_awaited_once_with(customer_id)


async def test_category_delete_blocked_before_delete_call(mocks):
    category_id = uuid4()
    mocks["categories"].get_by_id.return_value = {"id": category_id, "name": "Web"}
    mocks["subcategories"].count_by_category.return_value = 3
    with pytest.raises(HasDependentsError) as exc_info:
        await _services(mocks)["category"].delete_category(str(category_id))
    assert exc_info.value.dependents == 3
    mocks["categories"].delete.assert_not_called()


async def test_category_delete_blocked_by_customers_without_subcategories(mocks):
    category_id = uuid4()
    mocks["categories"].get_by_id.return_value = {"id": category_id, "name": "Web"}
    mocks["subcategories"].count_by_category.return_value = 0
    mocks["customers"].count_by_category.return_value = 2
    with pytest.raises(HasDependentsError) as exc_info:
        await _services(mocks)["category"].delete_category(str(category_id))
    assert exc_info.value.dependents == 2
    mocks["customers"].count_by_category.assert_awaited_once_with(category_id)
    mocks["categories"].delete.assert_not_called()


async def test_subcategory_create_with_missing_parent_never_inserts(mocks):
    mocks["categories"].get_by_id.return_value = None
    with pytest.raises(ReferenceNotFoundError):
        await _services(mocks)["subcategory"].create_subcategory(
            {"name": "Hosting", "category": str(uuid4())},
        )
    mocks["subcategories"].insert.assert_not_called()


async def test_customer_update_rechecks_only_changed_references(mocks):
    customer_id, category_id = uuid4(), uuid4()
    current = {
        "id": customer_id,
        "service_category_id": category_id,
        "service_sub_category_id": None,
    }
    mocks["customers"].get_by_id.return_value = current
    mocks["customers"].update.return_value = current

    await _services(mocks)["customer"].update_customer(
        str(customer_id), {"serviceCategory": str(category_id), "notes": "x"},
    )
    mocks["categories"].get_by_id.assert_not_called()
    changes = mocks["customers"].update.await_args.args[1]
    assert changes["notes"] == "x"
    assert "updated_at" in changes
