"""Role based visibility predicate for source entities."""

from __future__ import annotations

from notification_center.application.use_cases.notifications.policy import NotificationPolicy


def is_visible(
    owner_id: str | None,
    role: str | None,
    user_id: str | None,
    *,
    policy: NotificationPolicy | None = None,
) -> bool:
    """Return ``True`` when ``user_id`` acting as ``role`` may see the entity.

    Elevated roles see every entity. Anyone else only sees entities whose
    owner matches their own identifier; unowned entities stay hidden.
    """

    policy = policy or NotificationPolicy.from_settings()
    if policy.is_elevated(role):
        return True
    if not owner_id or not user_id:
        return False
    return str(owner_id) == str(user_id)


__all__ = ["is_visible"]
