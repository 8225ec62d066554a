"""Per-owner cart serialization.

Every cart mutation runs its read, stock check and write while holding the
owner's lock, so two concurrent requests for the same user can never both
pass a stock check against the same starting quantity. Different owners
never contend.

The lock is process-local. Deployments running several worker processes
against one store need every request for a given user routed to the same
worker.
"""

import os
from contextlib import contextmanager
from threading import Lock
from weakref import WeakValueDictionary

import structlog

from ordering.cart.errors import CartBusy

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0

_guard = Lock()
_locks: "WeakValueDictionary[str, Lock]" = WeakValueDictionary()


def lock_timeout() -> float:
    """Seconds to wait for a busy cart, from CART_LOCK_TIMEOUT_SECONDS."""
    return float(os.environ.get("CART_LOCK_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))


def _lock_for(owner: str) -> Lock:
    with _guard:
        lock = _locks.get(owner)
        if lock is None:
            lock = Lock()
            _locks[owner] = lock
        return lock


@contextmanager
def cart_lock(owner, timeout: float | None = None):
    """Hold ``owner``'s cart lock for the duration of the block.

    Raises:
        CartBusy: the lock was not free within ``timeout`` seconds.
    """
    owner = str(owner)
    timeout = lock_timeout() if timeout is None else timeout
    lock = _lock_for(owner)

    if not lock.acquire(timeout=timeout):
        logger.warning("Cart lock wait timed out", owner=owner, timeout=timeout)
        raise CartBusy(owner, timeout)
    try:
        yield
    finally:
        lock.release()


def reset_locks() -> None:
    """Forget every owner lock. Only safe while no cart operation is running."""
    with _guard:
        _locks.clear()
