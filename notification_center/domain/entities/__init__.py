"""Domain entities exposed by the application."""

from .acting_user import ActingUser
from .customer import (
    CUSTOMER_STATUS_ACTIVE,
    CUSTOMER_STATUS_INACTIVE,
    CUSTOMER_STATUS_PENDING,
    Customer,
)
from .navigation import QUERY_PARAMETERS, NavigationTarget
from .notification import (
    PRIORITY_RANK,
    Notification,
    NotificationPriority,
    NotificationType,
    build_notification_id,
)
from .partner import (
    ONBOARDING_STAGE_ONBOARDED,
    ONBOARDING_STAGES,
    ONBOARDING_STATUS_BLOCKED,
    ONBOARDING_STATUS_COMPLETED,
    ONBOARDING_STATUS_IN_PROGRESS,
    ONBOARDING_STATUS_PENDING,
    Partner,
)
from .renewal import (
    RENEWAL_RESOLVED_STATUSES,
    RENEWAL_STATUS_CANCELLED,
    RENEWAL_STATUS_DUE,
    RENEWAL_STATUS_LOST,
    RENEWAL_STATUS_OVERDUE,
    RENEWAL_STATUS_RENEWED,
    RENEWAL_STATUS_UPCOMING,
    Renewal,
)
from .task import (
    TASK_CLOSED_STATUSES,
    TASK_STATUS_CANCELLED,
    TASK_STATUS_COMPLETED,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_OVERDUE,
    TASK_STATUS_PENDING,
    Task,
)

__all__ = [
    "ActingUser",
    "Customer",
    "CUSTOMER_STATUS_ACTIVE",
    "CUSTOMER_STATUS_INACTIVE",
    "CUSTOMER_STATUS_PENDING",
    "NavigationTarget",
    "QUERY_PARAMETERS",
    "Notification",
    "NotificationPriority",
    "NotificationType",
    "PRIORITY_RANK",
    "build_notification_id",
    "Partner",
    "ONBOARDING_STAGES",
    "ONBOARDING_STAGE_ONBOARDED",
    "ONBOARDING_STATUS_PENDING",
    "ONBOARDING_STATUS_IN_PROGRESS",
    "ONBOARDING_STATUS_COMPLETED",
    "ONBOARDING_STATUS_BLOCKED",
    "Renewal",
    "RENEWAL_STATUS_UPCOMING",
    "RENEWAL_STATUS_DUE",
    "RENEWAL_STATUS_OVERDUE",
    "RENEWAL_STATUS_RENEWED",
    "RENEWAL_STATUS_CANCELLED",
    "RENEWAL_STATUS_LOST",
    "RENEWAL_RESOLVED_STATUSES",
    "Task",
    "TASK_STATUS_PENDING",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_OVERDUE",
    "TASK_STATUS_COMPLETED",
    "TASK_STATUS_CANCELLED",
    "TASK_CLOSED_STATUSES",
]
