"""Tests for the keyed locks held around stock and redemption updates."""

import threading

from storefront.shared import locks
from storefront.shared.locks import customer_key, hold_locks


def _held(key):
    return locks._locks[key][0].locked()


def test_locks_are_held_inside_and_dropped_after():
    with hold_locks(["prod-x", "prod-y"]):
        assert _held("prod-x")
        assert _held("prod-y")
    assert "prod-x" not in locks._locks
    assert "prod-y" not in locks._locks


def test_duplicate_keys_are_locked_once():
    with hold_locks(["prod-dup", "prod-dup"]):
        assert locks._locks["prod-dup"][1] == 1
    assert "prod-dup" not in locks._locks


def test_empty_keys_are_ignored():
    with hold_locks(["", None, "prod-z"]):
        assert set(locks._locks) == {"prod-z"}


def test_locks_are_released_when_the_body_raises():
    try:
        with hold_locks(["prod-err"]):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert "prod-err" not in locks._locks


def test_customer_keys_do_not_collide_with_product_ids():
    assert customer_key("abc") == "customer:abc"
    with hold_locks(["abc", customer_key("abc")]):
        assert _held("abc")
        assert _held("customer:abc")


def test_second_holder_waits_for_the_first():
    order = []
    first_holding = threading.Event()
    release_first = threading.Event()

    def first():
        with hold_locks(["prod-wait"]):
            first_holding.set()
            release_first.wait(timeout=5)
            order.append("first")

    def second():
        first_holding.wait(timeout=5)
        with hold_locks(["prod-wait"]):
            order.append("second")

    threads = [threading.Thread(target=first), threading.Thread(target=second)]
    for thread in threads:
        thread.start()
    first_holding.wait(timeout=5)
    release_first.set()
    for thread in threads:
        thread.join(timeout=5)

    assert order == ["first", "second"]
    assert "prod-wait" not in locks._locks
