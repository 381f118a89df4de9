"""Aggregate application use cases."""

from .navigation import decode_action_url, encode_target, resolve_notification_target
from .notifications import (
    NotificationPolicy,
    generate_notifications,
    is_visible,
    refresh_notifications,
)

__all__ = [
    "NotificationPolicy",
    "decode_action_url",
    "encode_target",
    "generate_notifications",
    "is_visible",
    "refresh_notifications",
    "resolve_notification_target",
]
