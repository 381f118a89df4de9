"""FastAPI dependency utilities."""

from fastapi import Header, HTTPException, status

from notification_center.application.use_cases.notifications import NotificationPolicy
from notification_center.config import get_settings
from notification_center.domain.entities import ActingUser
from notification_center.infrastructure.notifications import (
    NotificationStoreRegistry,
    notification_store_registry,
)


def get_acting_user(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> ActingUser:
    """Return the user identified by the authentication proxy headers."""

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    role = (x_user_role or "").strip() or None
    return ActingUser(user_id=user_id, role=role)


def get_notification_policy() -> NotificationPolicy:
    """Return the rule thresholds configured for this deployment."""

    return NotificationPolicy.from_settings(get_settings())


def get_store_registry() -> NotificationStoreRegistry:
    return notification_store_registry
