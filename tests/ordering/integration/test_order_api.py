"""Integration tests for placing, tracking and previewing orders via TestClient."""

CUSTOMER_INFO = {
    "name": "Jane Doe",
    "email": "jane@example.com",
    "phone": "+15550100",
    "address": {"street": "1 Main St", "city": "Springfield"},
}


def _order_payload(product_id, quantity=1, **overrides):
    payload = {"customerInfo": CUSTOMER_INFO, "items": [{"product": product_id, "quantity": quantity}]}
    payload.update(overrides)
    return payload


def _stock(client, product_id):
    return client.get(f"/products/{product_id}").json()["data"]["stock"]


class TestPlaceOrder:
    def test_guest_places_order(self, client, make_product):
        product_id = make_product(price=50.0, stock=10)

        response = client.post("/orders", json=_order_payload(product_id, 3, deliveryFee=5))
        body = response.json()

        assert response.status_code == 201
        assert body["message"] == "Order created successfully"
        assert body["data"]["totalAmount"] == 155.0
        assert body["data"]["status"] == "pending"
        assert _stock(client, product_id) == 7

    def test_insufficient_stock(self, client, make_product):
        product_id = make_product(stock=10)

        response = client.post("/orders", json=_order_payload(product_id, 11))
        body = response.json()

        assert response.status_code == 400
        assert body["success"] is False
        assert body["available"] == 10
        assert body["requested"] == 11
        assert _stock(client, product_id) == 10

    def test_empty_order(self, client):
        response = client.post("/orders", json={"customerInfo": CUSTOMER_INFO, "items": []})
        assert response.status_code == 400
        assert response.json()["message"] == "items: Order must contain at least one item"

    def test_missing_contact(self, client, make_product):
        product_id = make_product()
        response = client.post("/orders", json={"items": [{"product": product_id, "quantity": 1}]})
        assert response.status_code == 400

    def test_unknown_product(self, client):
        response = client.post("/orders", json=_order_payload("missing"))
        assert response.status_code == 400
        assert response.json()["message"] == "Product missing not found or inactive"

    def test_customer_token_links_order(self, client, make_product, customer_headers):
        product_id = make_product()
        client.post("/orders", json=_order_payload(product_id), headers=customer_headers)

        response = client.get("/orders/user", headers=customer_headers)
        assert len(response.json()["data"]) == 1

    def test_admin_order_is_not_linked(self, client, make_product, admin_headers):
        product_id = make_product()
        placed = client.post("/orders", json=_order_payload(product_id), headers=admin_headers).json()["data"]

        order = client.get(f"/orders/{placed['orderId']}", headers=admin_headers).json()["data"]
        assert "userId" not in order

    def test_bad_token_is_rejected_even_for_guest_checkout(self, client, make_product):
        product_id = make_product()
        response = client.post(
            "/orders", json=_order_payload(product_id), headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401


class TestDiscountsAtCheckout:
    def test_discount_applied(self, client, make_product, make_discount):
        make_discount("SAVE20", 20.0)
        product_id = make_product(price=50.0)

        response = client.post("/orders", json=_order_payload(product_id, 2, discountCode="SAVE20"))
        assert response.json()["data"]["totalAmount"] == 80.0

    def test_customer_reuse_is_rejected(self, client, make_product, make_discount, customer_headers):
        make_discount("SAVE20", 20.0)
        product_id = make_product(stock=10)
        payload = _order_payload(product_id, 1, discountCode="SAVE20")

        first = client.post("/orders", json=payload, headers=customer_headers)
        second = client.post("/orders", json=payload, headers=customer_headers)

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json()["message"] == "You have already used this discount code"
        assert _stock(client, product_id) == 9

    def test_check_discount(self, client, make_discount, customer_headers):
        make_discount("SAVE20", 20.0)

        response = client.post(
            "/orders/check-discount",
            json={"discountCode": "SAVE20", "totalAmount": 100.0},
            headers=customer_headers,
        )
        body = response.json()

        assert response.status_code == 200
        assert body["message"] == "Discount code is valid"
        assert body["data"] == {
            "discountCode": "SAVE20",
            "discountValue": 20.0,
            "discountAmount": "20.00",
            "originalAmount": "100.00",
            "finalAmount": "80.00",
        }

    def test_check_discount_requires_token(self, client):
        response = client.post("/orders/check-discount", json={"discountCode": "SAVE20", "totalAmount": 100.0})
        assert response.status_code == 401

    def test_check_discount_requires_code_and_amount(self, client, customer_headers):
        missing_code = client.post("/orders/check-discount", json={"totalAmount": 100.0}, headers=customer_headers)
        bad_amount = client.post(
            "/orders/check-discount", json={"discountCode": "SAVE20", "totalAmount": 0}, headers=customer_headers
        )

        assert missing_code.json()["message"] == "discount_code: Discount code is required"
        assert bad_amount.json()["message"] == "total_amount: Valid total amount is required"

    def test_check_unknown_code(self, client, customer_headers):
        response = client.post(
            "/orders/check-discount", json={"discountCode": "NOPE", "totalAmount": 10.0}, headers=customer_headers
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Invalid discount code"


class TestTracking:
    def test_track_hides_contact_details(self, client, make_product):
        product_id = make_product(name="Lamp")
        placed = client.post("/orders", json=_order_payload(product_id, 2)).json()["data"]

        response = client.get(f"/orders/track/{placed['orderNumber']}")
        data = response.json()["data"]

        assert response.status_code == 200
        assert data["customerName"] == "Jane Doe"
        assert "customerInfo" not in data
        assert data["items"][0]["productName"] == "Lamp"
        assert data["items"][0]["quantity"] == 2

    def test_track_unknown_number(self, client):
        response = client.get("/orders/track/ORD000")
        assert response.status_code == 404
        assert response.json()["message"] == "Order not found"


class TestReadingOrders:
    def test_owner_can_read_order(self, client, make_product, customer_headers):
        product_id = make_product()
        placed = client.post("/orders", json=_order_payload(product_id), headers=customer_headers).json()["data"]

        response = client.get(f"/orders/{placed['orderId']}", headers=customer_headers)
        assert response.json()["data"]["customerInfo"]["email"] == "jane@example.com"

    def test_other_customer_cannot_read_order(self, client, make_product, make_customer, token_for):
        product_id = make_product()
        placed = client.post("/orders", json=_order_payload(product_id)).json()["data"]
        stranger = {"Authorization": f"Bearer {token_for(make_customer('mallory'))}"}

        response = client.get(f"/orders/{placed['orderId']}", headers=stranger)
        assert response.status_code == 403

    def test_my_orders_is_for_customers(self, client, admin_headers):
        assert client.get("/orders/user", headers=admin_headers).status_code == 403
