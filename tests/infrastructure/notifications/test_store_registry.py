"""Tests for the per-user store registry."""

from __future__ import annotations

import threading
from datetime import datetime, timezone

from notification_center.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from notification_center.infrastructure.notifications import NotificationStoreRegistry


def _notification(notification_id: str) -> Notification:
    return Notification(
        id=notification_id,
        type=NotificationType.SYSTEM,
        priority=NotificationPriority.LOW,
        title="Digest",
        message="...",
        created_at=datetime(2026, 10, 19, tzinfo=timezone.utc),
    )


def test_session_returns_the_same_store_for_a_user() -> None:
    registry = NotificationStoreRegistry()

    with registry.session("u1") as store:
        store.recompute([_notification("a")])
    with registry.session("u1") as store:
        assert "a" in store

    assert "u1" in registry


def test_users_are_isolated() -> None:
    registry = NotificationStoreRegistry()

    with registry.session("u1") as store:
        store.recompute([_notification("a")])
    with registry.session("u2") as other:
        assert len(other) == 0


def test_discard_and_clear_forget_read_state() -> None:
    registry = NotificationStoreRegistry()
    with registry.session("u1") as store:
        store.recompute([_notification("a")])
        store.mark_read("a")

    registry.discard("u1")
    assert "u1" not in registry
    with registry.session("u1") as store:
        assert len(store) == 0

    registry.clear()
    assert "u1" not in registry


def test_session_serializes_concurrent_writers() -> None:
    registry = NotificationStoreRegistry()
    with registry.session("u1") as store:
        store.recompute([_notification(str(i)) for i in range(50)])

    def mark(ids):
        for notification_id in ids:
            with registry.session("u1") as current:
                current.mark_read(notification_id)

    threads = [
        threading.Thread(target=mark, args=([str(i) for i in range(start, 50, 5)],))
        for start in range(5)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    with registry.session("u1") as store:
        assert store.unread_count() == 0


def test_existing_session_never_creates_a_store() -> None:
    registry = NotificationStoreRegistry()

    with registry.existing_session("ghost") as store:
        assert store is None
    assert "ghost" not in registry

    with registry.session("u1") as store:
        store.recompute([_notification("a")])
    with registry.existing_session("u1") as store:
        assert store is not None
        assert "a" in store
