"""Undo journal — in-memory savepoints for ledger state.

Every state write made while a transaction is open records the value it
replaced. Leaving a transaction with an exception undoes that transaction's
writes in reverse order, so a failed operation leaves no partial state.
Transactions nest: an inner failure only unwinds back to the inner
savepoint, the outer transaction keeps going.

Undo cost is proportional to the entries written, never to the number of
accounts held in state.
"""
import logging
from collections.abc import Callable, Iterator, MutableMapping
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


class Journal:
    def __init__(self) -> None:
        self._undo: list[Callable[[], None]] = []
        self._depth = 0

    @property
    def active(self) -> bool:
        return self._depth > 0

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Open a (possibly nested) savepoint around a block of writes."""
        mark = len(self._undo)
        self._depth += 1
        try:
            yield
        except BaseException:
            self._rollback_to(mark)
            raise
        finally:
            self._depth -= 1
            if self._depth == 0:
                self._undo.clear()

    def set_attr(self, obj: object, name: str, value: Any) -> None:
        if self._depth:
            old = getattr(obj, name)
            self._undo.append(lambda: setattr(obj, name, old))
        setattr(obj, name, value)

    def set_item(self, mapping: MutableMapping[Any, Any], key: Any, value: Any) -> None:
        if self._depth:
            old = mapping.get(key, _MISSING)
            self._undo.append(lambda: _restore_item(mapping, key, old))
        mapping[key] = value

    def append(self, items: list[Any], item: Any) -> None:
        if self._depth:
            self._undo.append(items.pop)
        items.append(item)

    def _rollback_to(self, mark: int) -> None:
        undone = len(self._undo) - mark
        while len(self._undo) > mark:
            self._undo.pop()()
        logger.debug("Journal rolled back %d writes", undone)


def _restore_item(mapping: MutableMapping[Any, Any], key: Any, old: Any) -> None:
    if old is _MISSING:
        mapping.pop(key, None)
    else:
        mapping[key] = old
