"""Integration tests for the category endpoints via TestClient."""


def test_list_categories_with_subcategories(client, make_category):
    books = make_category("Books")
    make_category("Fiction", parent_id=books)

    response = client.get("/categories")
    body = response.json()

    assert response.status_code == 200
    assert body["count"] == 1
    assert body["data"][0]["name"] == "Books"
    assert [child["name"] for child in body["data"][0]["subcategories"]] == ["Fiction"]


def test_get_category(client, make_category):
    books = make_category("Books", description="Reading")

    response = client.get(f"/categories/{books}")
    assert response.json()["data"]["description"] == "Reading"


def test_admin_creates_subcategory(client, admin_headers, make_category):
    books = make_category("Books")

    response = client.post("/categories", json={"name": "Fiction", "parent": books}, headers=admin_headers)
    data = response.json()["data"]

    assert response.status_code == 201
    assert data["parent"] == books
    assert data["ancestors"] == [books]


def test_duplicate_category_name(client, admin_headers, make_category):
    make_category("Books")

    response = client.post("/categories", json={"name": "Books"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "name: Category already exists"


def test_unknown_parent(client, admin_headers):
    response = client.post("/categories", json={"name": "Fiction", "parent": "missing"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Parent category not found"


def test_customer_cannot_manage_categories(client, customer_headers):
    response = client.post("/categories", json={"name": "Books"}, headers=customer_headers)
    assert response.status_code == 403


def test_update_category(client, admin_headers, make_category):
    books = make_category("Books")

    response = client.put(f"/categories/{books}", json={"name": "Reading", "isActive": False}, headers=admin_headers)
    data = response.json()["data"]

    assert data["name"] == "Reading"
    assert data["isActive"] is False
    assert client.get("/categories").json()["count"] == 0
    assert client.get("/categories/admin", headers=admin_headers).json()["count"] == 1


def test_delete_blocked_by_products(client, admin_headers, make_product, subcategory_id):
    make_product()

    response = client.delete(f"/categories/{subcategory_id}", headers=admin_headers)
    assert response.status_code == 400
    assert "1 product(s)" in response.json()["message"]


def test_delete_category(client, admin_headers, make_category):
    books = make_category("Books")

    response = client.delete(f"/categories/{books}", headers=admin_headers)
    assert response.json()["message"] == "Category deleted successfully"
    assert client.get(f"/categories/{books}").status_code == 404
