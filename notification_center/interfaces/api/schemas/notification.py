"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from notification_center.domain.entities import NotificationPriority, NotificationType


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[str] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[str]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[str] = []
        seen: set[str] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    created_at: datetime
    read: bool
    action_url: str | None = None
    related_id: str | None = None
    related_type: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class UnreadCountRead(BaseModel):
    unread_count: int


__all__ = ["NotificationMarkReadRequest", "NotificationRead", "UnreadCountRead"]
