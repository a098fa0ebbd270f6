"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's validation rules and
use the camelCase field names the request schemas expect.
"""

import random
import uuid

from faker import Faker

fake = Faker()

DISCOUNT_CODES = ["SAVE20"]


def signup_data() -> dict:
    """Generate a SignupRequest payload with a unique username and email."""
    suffix = uuid.uuid4().hex[:8]
    return {
        "username": f"{fake.user_name()[:20]}_{suffix}",
        "email": f"{fake.user_name()[:20]}.{suffix}@{fake.free_email_domain()}",
        "password": fake.password(length=12),
        "fullName": fake.name(),
    }


def customer_info() -> dict:
    """Generate the ``customerInfo`` block of a PlaceOrderRequest."""
    return {
        "name": fake.name(),
        "email": f"{uuid.uuid4().hex[:8]}@{fake.free_email_domain()}",
        "phone": fake.numerify("+1555#######"),
        "address": {"street": fake.street_address(), "city": fake.city()},
    }


def order_items(product_ids: list[str], max_lines: int = 3) -> list[dict]:
    """Pick a few distinct products with small quantities."""
    picked = random.sample(product_ids, k=min(len(product_ids), random.randint(1, max_lines)))
    return [{"product": product_id, "quantity": random.randint(1, 2)} for product_id in picked]


def order_data(product_ids: list[str], with_discount: bool = False) -> dict:
    """Generate a PlaceOrderRequest payload."""
    payload = {
        "customerInfo": customer_info(),
        "items": order_items(product_ids),
        "notes": fake.sentence(nb_words=6),
        "deliveryFee": random.choice([0.0, 5.0, 9.99]),
    }
    if with_discount:
        payload["discountCode"] = random.choice(DISCOUNT_CODES)
    return payload


def search_term() -> str:
    return random.choice(["phone", "shirt", "guide", "garden", "jacket", "laptop"])
