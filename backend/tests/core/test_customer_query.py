"""Customer Query Builder — tests for the pure listing-parameter translation.

Tests cover:
    - No parameters → unfiltered query sorted by createdAt descending
    - Blank strings count as absent
    - status and service become equality clauses; service must be a valid id
    - sortOrder: "desc" → descending, anything else → ascending
"""

from uuid import uuid4

import pytest

from crm.core.customer_query import CustomerQuery, build_customer_query
from crm.core.domain_types import CUSTOMER_SEARCH_FIELDS, SortOrder
from crm.core.errors import InvalidIdentifierError


def test_defaults_when_no_parameters():
    query = build_customer_query()
    assert query == CustomerQuery()
    assert query.is_unfiltered
    assert query.sort_by == "createdAt"
    assert query.descending


def test_blank_parameters_are_absent():
    query = build_customer_query(search="  ", status="", service="", sort_by="")
    assert query.is_unfiltered
    assert query.search is None
    assert query.sort_by == "createdAt"


def test_search_is_trimmed_and_scans_default_fields():
    query = build_customer_query(search=" 555 ")
    assert query.search == "555"
    assert query.search_fields == CUSTOMER_SEARCH_FIELDS
    assert not query.is_unfiltered


def test_status_and_service_become_equality_clauses():
    category_id = uuid4()
    query = build_customer_query(status="Active", service=str(category_id))
    assert query.equals == {"status": "Active", "serviceCategory": category_id}


def test_malformed_service_raises_invalid_identifier():
    with pytest.raises(InvalidIdentifierError):
        build_customer_query(service="not-an-id")


@pytest.mark.parametrize("raw, expected", [
    ("desc", SortOrder.DESC),
    ("asc", SortOrder.ASC),
    ("DESC", SortOrder.ASC),
    ("random", SortOrder.ASC),
])
def test_sort_order_normalization(raw, expected):
    assert build_customer_query(sort_order=raw).sort_order is expected


def test_sort_by_passed_through_uninterpreted():
    assert build_customer_query(sort_by="noSuchField").sort_by == "noSuchField"
