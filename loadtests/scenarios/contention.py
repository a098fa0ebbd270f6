"""Stock contention: many guests ordering the same product at once.

Every user targets the first product of the catalogue. Orders either land
(201) or are refused with an insufficient-stock error (400 carrying
``available``/``requested``); anything else is a failure. Once the product
runs out, the stock seen on ``GET /products/{id}`` must stay at 0.
"""

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import customer_info
from loadtests.helpers.response import extract_error_detail, is_stock_rejection
from loadtests.helpers.state import ContentionState


class HotProductBuyer(HttpUser):
    wait_time = constant_pacing(0.2)

    def on_start(self):
        self.state = ContentionState()
        resp = self.client.get("/products?limit=1&sort=-createdAt", name="GET /products")
        products = resp.json().get("data", []) if resp.status_code == 200 else []
        if products:
            self.state.product_id = products[0]["id"]

    @task(5)
    def buy(self):
        if self.state.product_id is None:
            return
        payload = {
            "customerInfo": customer_info(),
            "items": [{"product": self.state.product_id, "quantity": 1}],
        }
        with self.client.post("/orders", json=payload, catch_response=True, name="POST /orders (hot)") as resp:
            if resp.status_code == 201:
                self.state.placed += 1
            elif is_stock_rejection(resp):
                self.state.rejected += 1
                resp.success()
            else:
                resp.failure(f"Hot order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def watch_stock(self):
        if self.state.product_id is None:
            return
        with self.client.get(
            f"/products/{self.state.product_id}", catch_response=True, name="GET /products/{id} (hot)"
        ) as resp:
            if resp.status_code == 200 and resp.json()["data"]["stock"] < 0:
                resp.failure("Stock went negative")
