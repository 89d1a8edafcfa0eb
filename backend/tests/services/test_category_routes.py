"""Category Routes — create, list, read, update and guarded delete.

Invariants:
    - A unique category appears exactly once in the listing
    - Names are unique case-insensitively (400 DuplicateName)
    - A category with subcategories or customers cannot be deleted; without
      either, it is removed
    - Malformed ids are 400, well-formed unknown ids are 404
"""

from uuid import uuid4


async def test_create_category_returns_201(client):
    res = await client.post("/api/categories", json={"name": "  Web Design "})
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Web Design"
    assert body["url"] == ""
    assert "createdAt" in body and "updatedAt" in body


async def test_created_category_listed_once(client, create_category):
    created = await create_category("SEO")
    res = await client.get("/api/categories")
    assert res.status_code == 200
    ids = [c["id"] for c in res.json()]
    assert ids.count(created["id"]) == 1


async def test_listing_is_newest_first(client, create_category):
    first = await create_category("First")
    second = await create_category("Second")
    ids = [c["id"] for c in (await client.get("/api/categories")).json()]
    assert ids.index(second["id"]) < ids.index(first["id"])


async def test_duplicate_name_differing_only_in_case(client, create_category):
    await create_category("Web Design")
    res = await client.post("/api/categories", json={"name": "web design"})
    assert res.status_code == 400
    assert res.json() == {"error": "Category with this name already exists"}


async def test_missing_name_reports_validation_errors(client):
    res = await client.post("/api/categories", json={"url": "x"})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Validation failed"
    assert body["errors"] == [{"param": "name", "msg": "name is required", "value": None}]


async def test_get_category(client, create_category):
    created = await create_category()
    res = await client.get(f"/api/categories/{created['id']}")
    assert res.status_code == 200
    assert res.json()["name"] == "Web Design"


async def test_get_malformed_id_is_400(client):
    res = await client.get("/api/categories/not-an-id")
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid category ID format"}


async def test_get_unknown_id_is_404(client):
    res = await client.get(f"/api/categories/{uuid4()}")
    assert res.status_code == 404
    assert res.json() == {"error": "Category not found"}


async def test_update_category(client, create_category):
    created = await create_category()
    res = await client.put(
        f"/api/categories/{created['id']}", json={"url": "https://example.com"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Web Design"
    assert body["url"] == "https://example.com"
    assert body["updatedAt"] >= created["updatedAt"]


async def test_update_case_of_own_name_allowed(client, create_category):
    created = await create_category("Web Design")
    res = await client.put(f"/api/categories/{created['id']}", json={"name": "WEB DESIGN"})
    assert res.status_code == 200
    assert res.json()["name"] == "WEB DESIGN"


async def test_update_to_another_categorys_name_rejected(client, create_category):
    await create_category("SEO")
    other = await create_category("Ads")
    res = await client.put(f"/api/categories/{other['id']}", json={"name": "seo"})
    assert res.status_code == 400
    assert res.json()["error"] == "Category with this name already exists"


async def test_update_with_blank_name_rejected(client, create_category):
    created = await create_category()
    res = await client.put(f"/api/categories/{created['id']}", json={"name": " "})
    assert res.status_code == 400
    assert res.json()["errors"][0]["param"] == "name"


async def test_delete_category_with_subcategories_blocked(
    client, create_category, create_subcategory,
):
    category = await create_category()
    await create_subcategory(category["id"])
    res = await client.delete(f"/api/categories/{category['id']}")
    assert res.status_code == 400
    assert res.json()["error"] == (
        "Cannot delete category with existing subcategories. "
        "Please delete subcategories first."
    )


async def test_delete_category_used_by_customer_blocked(
    client, create_category, create_customer,
):
    category = await create_category()
    await create_customer(category)
    res = await client.delete(f"/api/categories/{category['id']}")
    assert res.status_code == 400
    assert res.json()["error"] == (
        "Cannot delete category as it is being used by one or more customers"
    )

    fetched = await client.get(f"/api/categories/{category['id']}")
    assert fetched.status_code == 200


async def test_delete_empty_category(client, create_category):
    category = await create_category()
    res = await client.delete(f"/api/categories/{category['id']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Category deleted successfully"}

    listed = (await client.get("/api/categories")).json()
    assert category["id"] not in [c["id"] for c in listed]


async def test_delete_unknown_category_is_404(client):
    res = await client.delete(f"/api/categories/{uuid4()}")
    assert res.status_code == 404
