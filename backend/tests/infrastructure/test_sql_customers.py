"""Customer query translation — CustomerQuery → SQL select.

Tests cover:
    - API field names resolve to columns (camelCase, aliases, unknown → None)
    - Unknown sortBy adds no ORDER BY
    - Search is escaped: LIKE wildcards are matched literally
"""

from sqlalchemy import select

from crm.core.customer_query import build_customer_query
from crm.infrastructure.sql_customers import apply_customer_query, resolve_column
from crm.models.customer import Customer


def test_resolve_column():
    assert resolve_column("createdAt").name == "created_at"
    assert resolve_column("serviceCategory").name == "service_category_id"
    assert resolve_column("_id").name == "id"
    assert resolve_column("fees").name == "fees"
    assert resolve_column("shoeSize") is None


def test_unknown_sort_field_adds_no_order_by():
    query = apply_customer_query(
        select(Customer), build_customer_query(sort_by="shoeSize"),
    )
    assert "ORDER BY" not in str(query)


def test_default_sort_is_created_at_desc():
    sql = str(apply_customer_query(select(Customer), build_customer_query()))
    assert "ORDER BY customers.created_at DESC" in sql


def test_search_is_escaped():
    query = apply_customer_query(
        select(Customer), build_customer_query(search="100%"),
    )
    compiled = query.compile()
    assert "ESCAPE" in str(compiled)
    assert any("100/%" in str(value) for value in compiled.params.values())
