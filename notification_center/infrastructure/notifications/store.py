"""In-memory notification set with per-id read state."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from typing import Callable

from notification_center.domain.entities import Notification

logger = logging.getLogger(__name__)

StoreListener = Callable[["NotificationStore"], None]


def _sort_key(notification: Notification) -> tuple[float, int, str]:
    return (
        -notification.created_at.timestamp(),
        -notification.priority.rank,
        notification.id,
    )


class NotificationStore:
    """Hold the current notifications and remember which ones were read.

    The store is the only owner of read state. Candidates coming from the rule
    evaluator are merged on :meth:`recompute`, keeping the read flag of every
    id that survives and forgetting ids that disappear. Instances are not
    thread-safe; callers sharing one across threads must serialize access.
    """

    def __init__(self) -> None:
        self._notifications: dict[str, Notification] = {}
        self._read_ids: set[str] = set()
        self._listeners: list[StoreListener] = []

    def recompute(self, candidates: Iterable[Notification]) -> None:
        """Replace the working set with ``candidates``."""

        if candidates is None:
            raise TypeError("recompute() requires a candidate collection, got None")

        notifications: dict[str, Notification] = {}
        read_ids: set[str] = set()
        for candidate in candidates:
            if candidate.id in notifications:
                continue
            notifications[candidate.id] = candidate
            if candidate.read or candidate.id in self._read_ids:
                read_ids.add(candidate.id)

        dropped = len(self._notifications.keys() - notifications.keys())
        self._notifications = notifications
        self._read_ids = read_ids
        logger.debug(
            "Recomputed notification store: %d current, %d dropped, %d read",
            len(notifications),
            dropped,
            len(read_ids),
        )
        self._notify_listeners()

    def mark_read(self, notification_id: str) -> None:
        """Mark ``notification_id`` as read; unknown ids are ignored."""

        if notification_id not in self._notifications or notification_id in self._read_ids:
            return
        self._read_ids.add(notification_id)
        self._notify_listeners()

    def mark_all_read(self) -> None:
        """Mark every current notification as read."""

        unread = self._notifications.keys() - self._read_ids
        if not unread:
            return
        self._read_ids.update(unread)
        self._notify_listeners()

    def list(self) -> list[Notification]:
        """Return the notifications, newest first then most pressing first."""

        return sorted(
            (self._with_read_state(notification) for notification in self._notifications.values()),
            key=_sort_key,
        )

    def unread_count(self) -> int:
        return sum(1 for notification_id in self._notifications if notification_id not in self._read_ids)

    def get(self, notification_id: str) -> Notification | None:
        notification = self._notifications.get(notification_id)
        if notification is None:
            return None
        return self._with_read_state(notification)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register ``listener`` for change events and return an unsubscribe callable."""

        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._notifications)

    def __contains__(self, notification_id: object) -> bool:
        return notification_id in self._notifications

    def _with_read_state(self, notification: Notification) -> Notification:
        read = notification.id in self._read_ids
        if notification.read == read:
            return notification
        return dataclasses.replace(notification, read=read)

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Notification store listener %r failed", listener)


__all__ = ["NotificationStore", "StoreListener"]
