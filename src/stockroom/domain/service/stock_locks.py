"""Per-product mutual exclusion.

Holds one lock per product id so that read-check-write sequences on the
same product run one at a time while different products never wait on
each other. An entry lives only while some caller holds or waits for it,
so ids of deleted or unknown products do not accumulate.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class ProductLocks:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, product_id: str) -> Iterator[None]:
        entry = self._checkout(product_id)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(product_id, entry)

    def _checkout(self, product_id: str) -> _Entry:
        with self._guard:
            entry = self._entries.get(product_id)
            if entry is None:
                entry = _Entry()
                self._entries[product_id] = entry
            entry.users += 1
            return entry

    def _checkin(self, product_id: str, entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[product_id]
