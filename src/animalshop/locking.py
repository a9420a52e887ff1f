"""In-process keyed locks.

Writers that touch the same cart owner, order or product take the same lock;
writers on unrelated keys never contend. Keys are acquired in sorted order so
two callers asking for overlapping sets cannot deadlock.

An entry lives only while some caller holds or waits on it, so keys taken from
request headers do not accumulate.
"""

import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.RLock()
        self.users = 0


class KeyedLocks:
    def __init__(self):
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def _checkout(self, keys: list[str]) -> list[_Entry]:
        with self._guard:
            entries = []
            for key in keys:
                entry = self._entries.get(key)
                if entry is None:
                    entry = self._entries[key] = _Entry()
                entry.users += 1
                entries.append(entry)
            return entries

    def _checkin(self, keys: list[str]) -> None:
        with self._guard:
            for key in keys:
                entry = self._entries[key]
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        """Hold every lock in ``keys`` for the duration of the block."""
        ordered = sorted(set(keys))
        entries = self._checkout(ordered)
        try:
            with ExitStack() as stack:
                for entry in entries:
                    stack.enter_context(entry.lock)
                yield
        finally:
            self._checkin(ordered)


def cart_key(owner_key: str) -> str:
    return f"cart:{owner_key}"


def categories_key() -> str:
    # Slugs are unique across the catalogue, so category writes share one key
    return "categories"


def product_key(product_id) -> str:
    return f"product:{product_id}"


def order_key(order_id) -> str:
    return f"order:{order_id}"


def addresses_key(user_id) -> str:
    return f"addresses:{user_id}"


locks = KeyedLocks()
