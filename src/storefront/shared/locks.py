"""In-process locks around read-decide-write sequences.

Placement, cancellation and deletion of an order read product stock, decide,
and write it back. Placement also reads and records the customer's redeemed
discount codes. Two requests touching the same product or the same customer
must not interleave between the read and the commit, so callers hold one lock
per key for the whole unit of work. Keys are product ids or
``customer_key(user_id)``, always locked in sorted order to avoid deadlocks
between requests that share several keys.

A lock stays in the registry only while someone holds or waits for it.
"""

import threading
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager

_registry_guard = threading.Lock()
_locks: dict[str, list] = {}  # key -> [lock, holders and waiters]


def customer_key(user_id) -> str:
    return f"customer:{user_id}"


def _checkout(key: str) -> threading.Lock:
    with _registry_guard:
        entry = _locks.get(key)
        if entry is None:
            entry = _locks[key] = [threading.Lock(), 0]
        entry[1] += 1
        return entry[0]


def _checkin(key: str) -> None:
    with _registry_guard:
        entry = _locks[key]
        entry[1] -= 1
        if entry[1] == 0:
            del _locks[key]


@contextmanager
def hold_locks(keys: Iterable[str]) -> Iterator[None]:
    ordered = sorted({str(key) for key in keys if key})
    with ExitStack() as stack:
        for key in ordered:
            lock = _checkout(key)
            stack.callback(_checkin, key)
            stack.enter_context(lock)
        yield
