"""Integration tests for account self-service, saved addresses and user administration."""

ADDRESS = {"phone": "+15550100", "address": {"street": "1 Main St", "city": "Springfield"}}


def test_update_own_profile(client, customer_headers):
    response = client.put("/users/me", json={"fullName": "Jane Doe", "password": "n3w-pass"}, headers=customer_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Profile updated"
    assert response.json()["data"]["fullName"] == "Jane Doe"
    login = client.post("/auth/login", json={"username": "jane", "password": "n3w-pass"})
    assert login.status_code == 200


def test_rename_to_taken_username(client, make_customer, customer_headers):
    make_customer("john")
    response = client.put("/users/me", json={"username": "john"}, headers=customer_headers)
    assert response.status_code == 400


def test_deactivate_own_account(client, customer_headers):
    response = client.delete("/users/me", headers=customer_headers)
    assert response.json() == {"success": True, "message": "Account deactivated"}

    after = client.get("/users/me", headers=customer_headers)
    assert after.status_code == 401
    assert after.json()["message"] == "User account is inactive"
    login = client.post("/auth/login", json={"username": "jane", "password": "s3cret-pass"})
    assert login.status_code == 401


def test_address_book(client, customer_headers):
    created = client.post("/users/me/addresses", json=ADDRESS, headers=customer_headers)
    assert created.status_code == 201
    address = created.json()["data"]
    assert address["address"] == {"street": "1 Main St", "city": "Springfield"}

    updated = client.put(
        f"/users/me/addresses/{address['id']}",
        json={"address": {"city": "Shelbyville"}},
        headers=customer_headers,
    )
    assert updated.json()["data"]["address"] == {"street": "1 Main St", "city": "Shelbyville"}
    assert updated.json()["data"]["phone"] == "+15550100"

    listed = client.get("/users/me/addresses", headers=customer_headers).json()["data"]
    assert [item["id"] for item in listed] == [address["id"]]

    deleted = client.delete(f"/users/me/addresses/{address['id']}", headers=customer_headers)
    assert deleted.json()["message"] == "Address deleted successfully"
    assert client.get("/users/me/addresses", headers=customer_headers).json()["data"] == []


def test_address_needs_street_and_city(client, customer_headers):
    response = client.post("/users/me/addresses", json={"phone": "+15550100"}, headers=customer_headers)
    assert response.status_code == 400


def test_unknown_address(client, customer_headers):
    response = client.delete("/users/me/addresses/missing", headers=customer_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Address not found"


def test_addresses_are_for_customers_only(client, admin_headers):
    response = client.get("/users/me/addresses", headers=admin_headers)
    assert response.status_code == 403


def test_admin_lists_and_reads_users(client, admin_headers, customer_id):
    listed = client.get("/users", headers=admin_headers).json()["data"]
    assert {user["username"] for user in listed} == {"admin", "jane"}
    assert all("passwordHash" not in user for user in listed)

    response = client.get(f"/users/{customer_id}", headers=admin_headers)
    assert response.json()["data"]["username"] == "jane"


def test_admin_deactivates_and_reactivates(client, admin_headers, customer_id):
    response = client.delete(f"/users/{customer_id}", headers=admin_headers)
    assert response.json()["message"] == "User deactivated"
    assert client.get(f"/users/{customer_id}", headers=admin_headers).json()["data"]["isActive"] is False

    response = client.put(f"/users/{customer_id}", json={"isActive": True, "fullName": "Jane"}, headers=admin_headers)
    assert response.json()["data"]["isActive"] is True
    assert response.json()["data"]["fullName"] == "Jane"


def test_unknown_user(client, admin_headers):
    response = client.get("/users/missing", headers=admin_headers)
    assert response.status_code == 404


def test_user_administration_is_for_admins(client, customer_headers, customer_id):
    assert client.get("/users", headers=customer_headers).status_code == 403
    assert client.delete(f"/users/{customer_id}", headers=customer_headers).status_code == 403
