"""Reentrancy guard for mutating ledger operations.

One mutating call runs at a time per guard. A second call from the thread
already inside the guard (e.g. a payment recipient calling back into the
ledger) fails fast with ReentrancyError; calls from other threads wait for
the lock instead of interleaving.
"""
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from src.dl_common.errors import ReentrancyError


class ReentrancyGuard:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._owner: int | None = None
        self._operation: str | None = None

    @property
    def entered(self) -> bool:
        return self._owner is not None

    @contextmanager
    def enter(self, operation: str) -> Iterator[None]:
        me = threading.get_ident()
        if self._owner == me:
            raise ReentrancyError(f"{operation} during {self._operation}")
        with self._lock:
            self._owner = me
            self._operation = operation
            try:
                yield
            finally:
                self._owner = None
                self._operation = None
