"""Integration tests for the discount code administration endpoints."""


def test_requires_admin(client, customer_headers):
    assert client.get("/discount-codes").status_code == 401
    assert client.get("/discount-codes", headers=customer_headers).status_code == 403


def test_create_and_list(client, admin_headers):
    response = client.post("/discount-codes", json={"code": "SAVE20", "discount": 20}, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["data"]["discount"] == 20.0

    listed = client.get("/discount-codes", headers=admin_headers).json()["data"]
    assert [code["code"] for code in listed] == ["SAVE20"]


def test_zero_discount_is_rejected(client, admin_headers):
    response = client.post("/discount-codes", json={"code": "ZERO", "discount": 0}, headers=admin_headers)
    assert response.status_code == 400


def test_update_and_delete(client, admin_headers, make_discount):
    discount_id = make_discount("SAVE20", 20.0)

    updated = client.put(f"/discount-codes/{discount_id}", json={"isActive": False}, headers=admin_headers)
    assert updated.json()["data"]["isActive"] is False

    deleted = client.delete(f"/discount-codes/{discount_id}", headers=admin_headers)
    assert deleted.json() == {"success": True, "message": "Discount code deleted"}
    assert client.get(f"/discount-codes/{discount_id}", headers=admin_headers).status_code == 404
