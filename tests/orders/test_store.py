import threading

import pytest
from storefront.errors import OrderNotFound
from storefront.models import PENDING, Order
from storefront.services.orders.store import SEED_ORDERS, OrderStore


def make_order(user_id=1, product_ids=(1,), total=999.99):
    return Order(user_id=user_id, product_ids=product_ids, total=total,
                 created="2026-01-01T00:00:00Z")


# ----------------------------
# Seed data
# ----------------------------


def test_store_starts_with_seed_orders():
    store = OrderStore()
    assert store.list() == SEED_ORDERS
    assert store.next_id == 3


def test_empty_store_starts_at_one():
    store = OrderStore(seed=())
    assert len(store) == 0
    assert store.next_id == 1


# ----------------------------
# Append / get
# ----------------------------


def test_append_assigns_next_id_and_keeps_insertion_order():
    store = OrderStore()
    first = store.append(make_order(user_id=3))
    second = store.append(make_order(user_id=1))

    assert (first.id, second.id) == (3, 4)
    assert store.next_id == 5
    assert [o.id for o in store.list()] == [1, 2, 3, 4]
    assert store.get(3) == first
    assert first.status == PENDING


def test_get_unknown_id_raises():
    with pytest.raises(OrderNotFound):
        OrderStore().get(42)


def test_list_is_a_snapshot():
    store = OrderStore()
    snapshot = store.list()
    store.append(make_order())
    assert len(snapshot) == 2
    assert len(store.list()) == 3


def test_concurrent_appends_get_distinct_sequential_ids():
    store = OrderStore()
    barrier = threading.Barrier(50)
    assigned = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        order = store.append(make_order())
        with lock:
            assigned.append(order.id)

    threads = [threading.Thread(target=worker) for _ in range(50)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(assigned) == list(range(3, 53))
    assert [o.id for o in store.list()] == list(range(1, 53))
