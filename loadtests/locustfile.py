"""Storefront Load Testing - Locust entry point.

Run against a seeded server (``python src/manage.py seed``).

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Browsing and checkout only:
    locust -f loadtests/locustfile.py ShopperUser

    # Stock contention on one product:
    locust -f loadtests/locustfile.py HotProductBuyer

    # Headless (CI mode):
    locust -f loadtests/locustfile.py ShopperUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.contention import HotProductBuyer  # noqa: F401
from loadtests.scenarios.shopper import ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 500:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker and check that the target has a catalogue to order from."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    try:
        resp = requests.get(f"{environment.host}/products?limit=1", timeout=5)
        total = resp.json().get("pagination", {}).get("total", 0)
        print(f"[LOADTEST] Products available: {total}")
        if not total:
            print("[LOADTEST] Catalogue is empty; run `python src/manage.py seed` first")
    except (requests.RequestException, ValueError) as e:
        print(f"[LOADTEST] Could not reach target: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print request totals when the test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    stats = environment.stats.total
    print(f"[LOADTEST] Requests: {stats.num_requests}, failures: {stats.num_failures}\n")
