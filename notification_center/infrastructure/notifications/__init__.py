"""In-memory notification state for the infrastructure layer."""

from .registry import NotificationStoreRegistry, notification_store_registry
from .store import NotificationStore, StoreListener

__all__ = [
    "NotificationStore",
    "NotificationStoreRegistry",
    "StoreListener",
    "notification_store_registry",
]
