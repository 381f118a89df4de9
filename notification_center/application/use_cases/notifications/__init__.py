"""Public helpers for evaluating notification rules."""

from .generate import generate_notifications
from .policy import NotificationPolicy
from .refresh import refresh_notifications
from .visibility import is_visible

__all__ = [
    "NotificationPolicy",
    "generate_notifications",
    "is_visible",
    "refresh_notifications",
]
