"""Use case recomputing a user's notification store from a domain snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from notification_center.domain.entities import (
    ActingUser,
    Customer,
    Notification,
    Partner,
    Renewal,
    Task,
)
from notification_center.infrastructure.notifications import NotificationStore

from .generate import generate_notifications
from .policy import NotificationPolicy

logger = logging.getLogger(__name__)


def refresh_notifications(
    store: NotificationStore,
    *,
    acting_user: ActingUser,
    tasks: Iterable[Task] = (),
    renewals: Iterable[Renewal] = (),
    customers: Iterable[Customer] = (),
    partners: Iterable[Partner] = (),
    now: datetime | None = None,
    policy: NotificationPolicy | None = None,
) -> list[Notification]:
    """Evaluate the rules for ``acting_user`` and merge the result into ``store``."""

    candidates = generate_notifications(
        tasks,
        renewals,
        customers,
        partners,
        acting_user.role,
        acting_user.user_id,
        now=now,
        policy=policy,
    )
    store.recompute(candidates)
    logger.info(
        "Refreshed notifications for user %s: %d total, %d unread",
        acting_user.user_id,
        len(store),
        store.unread_count(),
    )
    return store.list()


__all__ = ["refresh_notifications"]
