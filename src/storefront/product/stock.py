"""Stock reservation.

``try_reserve`` is the single place that answers "can this product supply this
many units?". Cart mutations and order placement both go through it while
holding the product's lock, so a check and the decrement that depends on it
cannot interleave with another checkout for the same product.

Locks are per process. Across processes, order placement relies on the
aggregates' optimistic version check and retries the whole unit of work on a
conflict (see ``storefront.utils.retry``).
"""

import threading
from contextlib import ExitStack, contextmanager

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import NotFound
from storefront.product.product import Product


class KeyedLock:
    """A re-entrant lock per key, acquired in sorted key order.

    An entry lives only while some thread holds or waits for it, so the map
    stays as small as the number of keys currently in use.
    """

    def __init__(self, name: str):
        self.name = name
        self._guard = threading.Lock()
        self._locks: dict[str, list] = {}  # key -> [RLock, holders]

    def _checkout(self, key: str) -> threading.RLock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.RLock(), 0]
            entry[1] += 1
            return entry[0]

    def _checkin(self, key: str) -> None:
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    def _release(self, key: str, lock: threading.RLock) -> None:
        lock.release()
        self._checkin(key)

    def keys_in_use(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, *keys):
        # A fixed acquisition order keeps two multi-key holders from deadlocking
        with ExitStack() as stack:
            for key in sorted({str(k) for k in keys}):
                lock = self._checkout(key)
                try:
                    lock.acquire()
                except BaseException:
                    self._checkin(key)
                    raise
                stack.callback(self._release, key, lock)
            yield


product_locks = KeyedLock("product")
cart_locks = KeyedLock("cart")


def try_reserve(product_id, quantity: int) -> bool:
    """Return True if ``product_id`` currently has ``quantity`` units in stock.

    Raises ``NotFound`` for an unknown product.
    """
    with product_locks.hold(product_id):
        try:
            product = current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found", product_id=str(product_id)) from None
        return product.has_stock_for(quantity)
