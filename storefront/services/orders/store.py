"""
In-process order store.

Orders are only ever appended. Identifier allocation and the append happen
under one lock, so concurrent writers get distinct, gap-free ids. Readers
take a snapshot under the same lock.
"""
import threading

from storefront.errors import OrderNotFound
from storefront.models import COMPLETED, PENDING, Order

SEED_ORDERS = (
    Order(id=1, user_id=1, product_ids=(1, 2), total=1015.98, status=COMPLETED,
          created="2024-01-15T10:30:00Z"),
    Order(id=2, user_id=2, product_ids=(3,), total=29.99, status=PENDING,
          created="2024-01-15T11:15:00Z"),
)


class OrderStore:
    def __init__(self, seed=SEED_ORDERS):
        self._lock = threading.Lock()
        self._orders = list(seed)
        self._next_id = max((o.id for o in self._orders), default=0) + 1

    @property
    def next_id(self):
        with self._lock:
            return self._next_id

    def append(self, order):
        """Assign the next id to order, store it and return the stored copy."""
        with self._lock:
            stored = order.with_id(self._next_id)
            self._orders.append(stored)
            self._next_id += 1
            return stored

    def list(self):
        with self._lock:
            return tuple(self._orders)

    def get(self, order_id):
        for order in self.list():
            if order.id == order_id:
                return order
        raise OrderNotFound()

    def __len__(self):
        with self._lock:
            return len(self._orders)
