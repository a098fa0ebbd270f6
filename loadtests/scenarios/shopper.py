"""Shopper journeys: catalogue browsing and the signed-in checkout flow."""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import order_data, search_term, signup_data
from loadtests.helpers.response import extract_error_detail, is_stock_rejection
from loadtests.helpers.state import ShopperState


class BrowsingJourney(SequentialTaskSet):
    """Categories -> Product list -> Search -> Product detail.

    Read-only traffic that never touches stock.
    """

    def on_start(self):
        self.state = ShopperState()

    @task
    def list_categories(self):
        with self.client.get("/categories", catch_response=True, name="GET /categories") as resp:
            if resp.status_code != 200:
                resp.failure(f"List categories failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def list_products(self):
        with self.client.get("/products?limit=24", catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.state.product_ids = [product["id"] for product in resp.json()["data"]]
            else:
                resp.failure(f"List products failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def search_products(self):
        self.client.get(f"/products?search={search_term()}&sort=price", name="GET /products?search")

    @task
    def view_product(self):
        if not self.state.product_ids:
            self.interrupt()
            return
        product_id = random.choice(self.state.product_ids)
        self.client.get(f"/products/{product_id}", name="GET /products/{id}")

    @task
    def done(self):
        self.interrupt()


class CheckoutJourney(SequentialTaskSet):
    """Signup -> Login -> Browse -> Check discount -> Place order -> Track -> My orders.

    Each completed journey debits stock and consumes the shopper's discount code.
    """

    def on_start(self):
        self.state = ShopperState()

    @task
    def signup(self):
        payload = signup_data()
        with self.client.post("/auth/signup", json=payload, catch_response=True, name="POST /auth/signup") as resp:
            if resp.status_code == 201:
                self.state.username = payload["username"]
                self.state.password = payload["password"]
            else:
                resp.failure(f"Signup failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def login(self):
        credentials = {"username": self.state.username, "password": self.state.password}
        with self.client.post("/auth/login", json=credentials, catch_response=True, name="POST /auth/login") as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["data"]["token"]
            else:
                resp.failure(f"Login failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get("/products?limit=24", catch_response=True, name="GET /products") as resp:
            products = resp.json().get("data", []) if resp.status_code == 200 else []
            self.state.product_ids = [product["id"] for product in products if product.get("stock", 0) > 2]
            if not self.state.product_ids:
                resp.failure("No products with stock left to order")
                self.interrupt()

    @task
    def check_discount(self):
        with self.client.post(
            "/orders/check-discount",
            json={"discountCode": "SAVE20", "totalAmount": 100.0},
            headers=self.state.auth_headers,
            catch_response=True,
            name="POST /orders/check-discount",
        ) as resp:
            if resp.status_code not in (200, 404):
                resp.failure(f"Check discount failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.product_ids, with_discount=random.random() < 0.3),
            headers=self.state.auth_headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_numbers.append(resp.json()["data"]["orderNumber"])
            elif is_stock_rejection(resp):
                resp.success()
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def track_order(self):
        if not self.state.order_numbers:
            return
        order_number = self.state.order_numbers[-1]
        self.client.get(f"/orders/track/{order_number}", name="GET /orders/track/{orderNumber}")

    @task
    def my_orders(self):
        self.client.get("/orders/user", headers=self.state.auth_headers, name="GET /orders/user")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Mostly browsing, with a share of shoppers who check out."""

    wait_time = between(0.5, 2)
    tasks = {BrowsingJourney: 3, CheckoutJourney: 1}
