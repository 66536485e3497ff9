import pytest


def _create(client, name, category_ids, quantity=5, description=""):
    return client.post("/api/products", json={
        "name": name,
        "description": description,
        "quantity": quantity,
        "categoryIds": category_ids,
    })


def test_create_product(client, make_category):
    tools = make_category("Tools")
    garden = make_category("Garden")

    response = _create(client, "  Rake  ", [tools.id, garden.id, tools.id], quantity=4)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Product created successfully"
    assert body["data"]["name"] == "Rake"
    assert body["data"]["categories"] == ["Garden", "Tools"]
    assert body["data"]["category_ids"] == [garden.id, tools.id]


def test_create_product_validation(client):
    response = _create(client, "Rake", [], quantity=-1)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    fields = {error["field"] for error in body["errors"]}
    assert {"quantity", "categoryIds"} <= fields


def test_create_product_unknown_category(client, make_category):
    tools = make_category("Tools")
    response = _create(client, "Rake", [tools.id, 999])
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "One or more category IDs are invalid"}


def test_create_product_duplicate(client, make_category, make_product):
    tools = make_category("Tools")
    make_product("Rake", [tools.id])
    response = _create(client, "Rake", [tools.id])
    assert response.status_code == 400
    assert response.json()["message"] == "A product with this name already exists"


def test_list_products_envelope(client, make_category, make_product):
    tools = make_category("Tools")
    for i in range(1, 16):
        make_product(f"widget-{i}", [tools.id])

    response = client.get("/api/products", params={"search": "widget", "page": 1, "limit": 10})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Products retrieved successfully"
    assert len(body["data"]) == 10
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 2,
        "totalCount": 15,
        "limit": 10,
        "hasNextPage": True,
        "hasPrevPage": False,
    }


def test_list_products_category_filter_forms(client, make_category, make_product):
    a = make_category("A")
    b = make_category("B")
    c = make_category("C")
    make_product("in-a", [a.id])
    make_product("in-b", [b.id])
    make_product("in-c", [c.id])

    comma = client.get(f"/api/products?categoryIds={a.id},{b.id}").json()
    repeated = client.get(f"/api/products?categoryIds[]={a.id}&categoryIds[]={b.id}").json()

    assert sorted(p["name"] for p in comma["data"]) == ["in-a", "in-b"]
    assert sorted(p["name"] for p in repeated["data"]) == ["in-a", "in-b"]
    assert comma["pagination"]["totalCount"] == 2


def test_list_products_limit_out_of_range(client):
    response = client.get("/api/products", params={"limit": 101})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


@pytest.mark.parametrize("raw", ["abc", "0", "1,-2"])
def test_list_products_rejects_bad_category_ids(client, make_category, make_product, raw):
    tools = make_category("Tools")
    make_product("Rake", [tools.id])

    response = client.get("/api/products", params={"categoryIds": raw})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"][0]["field"] == "categoryIds"
    assert "data" not in body


def test_list_products_rejects_bad_bracket_category_ids(client):
    response = client.get("/api/products?categoryIds[]=1&categoryIds[]=zero")
    assert response.status_code == 400


def test_get_product(client, make_category, make_product):
    tools = make_category("Tools")
    product = make_product("Rake", [tools.id])

    response = client.get(f"/api/products/{product.id}")
    assert response.status_code == 200
    assert response.json()["data"]["id"] == product.id

    missing = client.get("/api/products/999")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Product not found"}


def test_get_product_bad_id(client):
    assert client.get("/api/products/0").status_code == 400
    assert client.get("/api/products/abc").status_code == 400


def test_update_product_replaces_categories(client, make_category, make_product):
    a = make_category("A")
    b = make_category("B")
    product = make_product("Rake", [a.id])

    response = client.put(f"/api/products/{product.id}", json={
        "name": "Rake", "description": "steel", "quantity": 8, "categoryIds": [b.id],
    })

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["category_ids"] == [b.id]
    assert data["description"] == "steel"
    assert response.json()["message"] == "Product updated successfully"


def test_delete_product(client, make_category, make_product):
    tools = make_category("Tools")
    product = make_product("Rake", [tools.id])

    response = client.delete(f"/api/products/{product.id}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Product deleted successfully", "data": None}

    assert client.delete(f"/api/products/{product.id}").status_code == 404


def test_bulk_delete(client, make_category, make_product):
    tools = make_category("Tools")
    one = make_product("one", [tools.id])
    two = make_product("two", [tools.id])

    response = client.post("/api/products/bulk-delete", json={"ids": [one.id, two.id, 404]})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "2 products deleted successfully"
    assert body["data"]["deletedCount"] == 2
    assert body["data"]["totalRequested"] == 3


def test_search_products(client, make_category, make_product):
    tools = make_category("Tools")
    make_product("Hand saw", [tools.id])
    make_product("Hammer", [tools.id])

    response = client.get("/api/products/search", params={"q": "SAW"})
    assert [item["name"] for item in response.json()["data"]] == ["Hand saw"]


def test_search_products_requires_query(client):
    response = client.get("/api/products/search", params={"q": "   "})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Search query is required"}


def test_product_stats(client, make_category, make_product):
    tools = make_category("Tools")
    make_product("a", [tools.id], quantity=2)
    make_product("b", [tools.id], quantity=30)

    data = client.get("/api/products/stats").json()["data"]

    assert data["total_products"] == 2
    assert data["total_quantity"] == 32
    assert data["low_stock_count"] == 1
