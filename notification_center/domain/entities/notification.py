"""Domain entity representing a dashboard notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class NotificationType(str, Enum):
    """Closed set of notification kinds produced by the rule evaluator."""

    TASK = "task"
    RENEWAL = "renewal"
    PARTNER_ONBOARDING = "partner-onboarding"
    CUSTOMER_ACTIVITY = "customer-activity"
    SYSTEM = "system"
    ESCALATION = "escalation"


class NotificationPriority(str, Enum):
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Return the ordering weight, higher meaning more pressing."""

        return PRIORITY_RANK[self]


PRIORITY_RANK: Mapping[NotificationPriority, int] = MappingProxyType(
    {
        NotificationPriority.URGENT: 4,
        NotificationPriority.HIGH: 3,
        NotificationPriority.MEDIUM: 2,
        NotificationPriority.LOW: 1,
    }
)


def build_notification_id(
    notification_type: NotificationType | str,
    discriminator: str,
    entity_id: str,
) -> str:
    """Return the stable identifier for a notification instance.

    The identifier only depends on its arguments, so evaluating the same
    snapshot twice yields the same ids for the same conditions.
    """

    type_value = (
        notification_type.value
        if isinstance(notification_type, NotificationType)
        else notification_type
    )
    return f"{type_value}-{discriminator}-{entity_id}"


@dataclass(frozen=True)
class Notification:
    """Typed, prioritized event shown in the notification center."""

    id: str
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    created_at: datetime
    read: bool = False
    action_url: str | None = None
    related_id: str | None = None
    related_type: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        # Read-only copy: callers of the store must not reach into its state.
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


__all__ = [
    "Notification",
    "NotificationPriority",
    "NotificationType",
    "PRIORITY_RANK",
    "build_notification_id",
]
