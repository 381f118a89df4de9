from .navigation import ActionUrlRead, NavigationTargetPayload, NavigationTargetRead
from .notification import NotificationMarkReadRequest, NotificationRead, UnreadCountRead
from .snapshot import (
    CustomerSnapshot,
    NotificationSnapshot,
    PartnerSnapshot,
    RenewalSnapshot,
    TaskSnapshot,
)

__all__ = [
    "ActionUrlRead",
    "CustomerSnapshot",
    "NavigationTargetPayload",
    "NavigationTargetRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationSnapshot",
    "PartnerSnapshot",
    "RenewalSnapshot",
    "TaskSnapshot",
    "UnreadCountRead",
]
