"""Per-user ownership of notification stores for the HTTP shell."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from .store import NotificationStore


@dataclass
class _StoreSlot:
    store: NotificationStore = field(default_factory=NotificationStore)
    lock: threading.Lock = field(default_factory=threading.Lock)


class NotificationStoreRegistry:
    """Keep one :class:`NotificationStore` per user, each guarded by its own lock."""

    def __init__(self) -> None:
        self._slots: dict[str, _StoreSlot] = {}
        self._guard = threading.Lock()

    @contextmanager
    def session(self, user_id: str) -> Iterator[NotificationStore]:
        """Yield the store for ``user_id`` while holding its lock, creating it if needed."""

        slot = self._slot_for(user_id)
        with slot.lock:
            yield slot.store

    @contextmanager
    def existing_session(self, user_id: str) -> Iterator[NotificationStore | None]:
        """Like :meth:`session` but yield ``None`` instead of creating a store."""

        with self._guard:
            slot = self._slots.get(user_id)
        if slot is None:
            yield None
            return
        with slot.lock:
            yield slot.store

    def discard(self, user_id: str) -> None:
        """Forget the store for ``user_id`` together with its read state."""

        with self._guard:
            self._slots.pop(user_id, None)

    def clear(self) -> None:
        with self._guard:
            self._slots.clear()

    def __contains__(self, user_id: object) -> bool:
        with self._guard:
            return user_id in self._slots

    def _slot_for(self, user_id: str) -> _StoreSlot:
        with self._guard:
            slot = self._slots.get(user_id)
            if slot is None:
                slot = _StoreSlot()
                self._slots[user_id] = slot
            return slot


notification_store_registry = NotificationStoreRegistry()


__all__ = ["NotificationStoreRegistry", "notification_store_registry"]
