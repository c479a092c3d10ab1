"""
Per-customer mutual exclusion.

Ledger read-modify-write sequences for the same customer must not interleave.
Inside one process this is a keyed lock; across processes the ledger row is
also locked with select_for_update() (see LedgerService.read_snapshot).

Usage:
    with customer_lock(customer.pk):
        with transaction.atomic():
            ...

Locks are created on first use and dropped when no thread holds or waits on
them, so the registry only grows with concurrently active customers.
"""

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class KeyedLock:
    """Registry of reference-counted locks, one per key."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}
        self._refs: dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._refs[key] = self._refs.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._refs[key] -= 1
                if not self._refs[key]:
                    del self._refs[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def is_held(self, key: Hashable) -> bool:
        with self._guard:
            lock = self._locks.get(key)
        return lock is not None and lock.locked()


customer_locks = KeyedLock()


def customer_lock(customer_id: int):
    """Serialize loyalty work for one customer."""
    return customer_locks.hold(customer_id)
