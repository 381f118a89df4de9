"""Endpoints exposing a user's notification center."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from notification_center.application.use_cases.navigation import resolve_notification_target
from notification_center.application.use_cases.notifications import (
    NotificationPolicy,
    refresh_notifications,
)
from notification_center.domain.entities import ActingUser, Notification
from notification_center.infrastructure.notifications import NotificationStoreRegistry
from notification_center.interfaces.api.dependencies import (
    get_acting_user,
    get_notification_policy,
    get_store_registry,
)
from notification_center.interfaces.api.schemas import (
    NavigationTargetRead,
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationSnapshot,
    UnreadCountRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        type=notification.type,
        priority=notification.priority,
        title=notification.title,
        message=notification.message,
        created_at=notification.created_at,
        read=notification.read,
        action_url=notification.action_url,
        related_id=notification.related_id,
        related_type=notification.related_type,
        metadata=dict(notification.metadata),
    )


@router.post("/recompute", response_model=list[NotificationRead])
def recompute_notifications(
    snapshot: NotificationSnapshot,
    current_user: ActingUser = Depends(get_acting_user),
    policy: NotificationPolicy = Depends(get_notification_policy),
    registry: NotificationStoreRegistry = Depends(get_store_registry),
) -> list[NotificationRead]:
    """Re-evaluate the rules against ``snapshot`` and return the merged list."""

    with registry.session(current_user.user_id) as store:
        notifications = refresh_notifications(
            store,
            acting_user=current_user,
            tasks=[task.to_entity() for task in snapshot.tasks],
            renewals=[renewal.to_entity() for renewal in snapshot.renewals],
            customers=[customer.to_entity() for customer in snapshot.customers],
            partners=[partner.to_entity() for partner in snapshot.partners],
            policy=policy,
        )
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    current_user: ActingUser = Depends(get_acting_user),
    registry: NotificationStoreRegistry = Depends(get_store_registry),
) -> list[NotificationRead]:
    """Return the current notifications, newest first."""

    with registry.existing_session(current_user.user_id) as store:
        notifications = store.list() if store is not None else []
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def read_unread_count(
    current_user: ActingUser = Depends(get_acting_user),
    registry: NotificationStoreRegistry = Depends(get_store_registry),
) -> UnreadCountRead:
    with registry.existing_session(current_user.user_id) as store:
        unread_count = store.unread_count() if store is not None else 0
    return UnreadCountRead(unread_count=unread_count)


@router.post("/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    current_user: ActingUser = Depends(get_acting_user),
    registry: NotificationStoreRegistry = Depends(get_store_registry),
):
    """Mark a batch of notifications as read; unknown ids are ignored."""

    with registry.existing_session(current_user.user_id) as store:
        if store is not None:
            for notification_id in payload.unique_ids():
                store.mark_read(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/read-all", status_code=status.HTTP_204_NO_CONTENT)
def mark_all_notifications_read(
    current_user: ActingUser = Depends(get_acting_user),
    registry: NotificationStoreRegistry = Depends(get_store_registry),
):
    with registry.existing_session(current_user.user_id) as store:
        if store is not None:
            store.mark_all_read()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_read(
    notification_id: str,
    current_user: ActingUser = Depends(get_acting_user),
    registry: NotificationStoreRegistry = Depends(get_store_registry),
):
    with registry.existing_session(current_user.user_id) as store:
        if store is not None:
            store.mark_read(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{notification_id}/target", response_model=NavigationTargetRead)
def read_notification_target(
    notification_id: str,
    current_user: ActingUser = Depends(get_acting_user),
    registry: NotificationStoreRegistry = Depends(get_store_registry),
) -> NavigationTargetRead:
    """Return where a click on the notification should take the user."""

    with registry.existing_session(current_user.user_id) as store:
        notification = store.get(notification_id) if store is not None else None
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )
    target = resolve_notification_target(notification)
    if target.is_empty:
        logger.warning(
            "Notification %s has a non-navigable action URL %r",
            notification.id,
            notification.action_url,
        )
    return NavigationTargetRead.from_entity(target)


__all__ = ["router"]
