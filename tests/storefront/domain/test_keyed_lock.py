"""Tests for per-key locks used by cart mutations and stock checks."""

import threading

from storefront.product.stock import KeyedLock


class TestKeyedLock:
    def test_entry_is_dropped_after_release(self):
        locks = KeyedLock("test")
        with locks.hold("sess-1", "sess-2"):
            assert locks.keys_in_use() == 2
        assert locks.keys_in_use() == 0

    def test_many_distinct_keys_do_not_accumulate(self):
        locks = KeyedLock("test")
        for n in range(50):
            with locks.hold(f"sess-{n}"):
                pass
        assert locks.keys_in_use() == 0

    def test_reentrant_hold_keeps_entry_until_outermost_release(self):
        locks = KeyedLock("test")
        with locks.hold("prod-1"):
            with locks.hold("prod-1"):
                assert locks.keys_in_use() == 1
            assert locks.keys_in_use() == 1
        assert locks.keys_in_use() == 0

    def test_entry_is_dropped_when_body_raises(self):
        locks = KeyedLock("test")
        try:
            with locks.hold("sess-1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert locks.keys_in_use() == 0

    def test_waiter_gets_the_same_lock(self):
        locks = KeyedLock("test")
        order = []
        entered = threading.Event()

        def _second():
            entered.set()
            with locks.hold("prod-1"):
                order.append("second")

        with locks.hold("prod-1"):
            worker = threading.Thread(target=_second)
            worker.start()
            entered.wait(timeout=5)
            order.append("first")
        worker.join(timeout=5)

        assert order == ["first", "second"]
        assert locks.keys_in_use() == 0
