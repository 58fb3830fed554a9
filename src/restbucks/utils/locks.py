"""Per-order mutual exclusion for workflow operations."""

import threading
from contextlib import contextmanager
from weakref import WeakValueDictionary

_registry_lock = threading.Lock()
_order_locks: WeakValueDictionary = WeakValueDictionary()


def _lock_for(order_id) -> threading.Lock:
    with _registry_lock:
        lock = _order_locks.get(str(order_id))
        if lock is None:
            lock = threading.Lock()
            _order_locks[str(order_id)] = lock
        return lock


@contextmanager
def order_lock(order_id):
    """
    Serialize operations on one order within this process.

    Usage:
        with order_lock(order_id):
            # read, check and commit the order
            pass
    """
    lock = _lock_for(order_id)
    with lock:
        yield
