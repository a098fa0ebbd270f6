"""Order number generation.

Numbers look like ``ORD1718030405123042``: the prefix, the current time in
milliseconds and a three digit random suffix.
"""

import random
import time

from storefront.shared.errors import PersistenceError

PREFIX = "ORD"
MAX_ATTEMPTS = 5


def generate_order_number(now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{PREFIX}{now_ms}{random.randint(0, 999):03d}"


def next_free_order_number(repository, generate=generate_order_number) -> str:
    """Generate numbers until one is not used by an existing order."""
    for _ in range(MAX_ATTEMPTS):
        candidate = generate()
        if repository.find_by_number(candidate) is None:
            return candidate
    raise PersistenceError("Could not allocate a unique order number")
