"""Thresholds that drive notification generation."""

from __future__ import annotations

from dataclasses import dataclass

from notification_center.config import Settings, get_settings

TASK_LEAD_DAYS = 1
TASK_HIGH_OVERDUE_DAYS = 0
TASK_URGENT_OVERDUE_DAYS = 5
TASK_ESCALATION_OVERDUE_DAYS = 14

RENEWAL_LEAD_DAYS = 30
RENEWAL_HIGH_DAYS = 7
RENEWAL_URGENT_DAYS = 1
RENEWAL_ESCALATION_OVERDUE_DAYS = 7

PARTNER_STALL_DAYS = 7
PARTNER_AGREEMENT_GRACE_DAYS = 14
PARTNER_ESCALATION_STALL_DAYS = 30

CUSTOMER_RECENT_INACTIVE_DAYS = 30
CUSTOMER_HIGH_VALUE_THRESHOLD = 30000.0

ELEVATED_ROLES = frozenset({"admin", "manager"})
RESTRICTED_ROLES = frozenset({"fsr", "bde"})


@dataclass(frozen=True)
class NotificationPolicy:
    """Tunable thresholds consumed by :func:`generate_notifications`.

    Day counts are calendar days in the application timezone. Overdue counts
    are zero on the due date itself.
    """

    task_lead_days: int = TASK_LEAD_DAYS
    task_high_overdue_days: int = TASK_HIGH_OVERDUE_DAYS
    task_urgent_overdue_days: int = TASK_URGENT_OVERDUE_DAYS
    task_escalation_overdue_days: int = TASK_ESCALATION_OVERDUE_DAYS
    renewal_lead_days: int = RENEWAL_LEAD_DAYS
    renewal_high_days: int = RENEWAL_HIGH_DAYS
    renewal_urgent_days: int = RENEWAL_URGENT_DAYS
    renewal_escalation_overdue_days: int = RENEWAL_ESCALATION_OVERDUE_DAYS
    partner_stall_days: int = PARTNER_STALL_DAYS
    partner_agreement_grace_days: int = PARTNER_AGREEMENT_GRACE_DAYS
    partner_escalation_stall_days: int = PARTNER_ESCALATION_STALL_DAYS
    customer_recent_inactive_days: int = CUSTOMER_RECENT_INACTIVE_DAYS
    customer_high_value_threshold: float = CUSTOMER_HIGH_VALUE_THRESHOLD
    elevated_roles: frozenset[str] = ELEVATED_ROLES
    restricted_roles: frozenset[str] = RESTRICTED_ROLES

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "NotificationPolicy":
        """Build a policy from the ``NOTIFICATION_*`` settings."""

        settings = settings or get_settings()
        return cls(
            task_lead_days=settings.notification_task_lead_days,
            task_high_overdue_days=settings.notification_task_high_overdue_days,
            task_urgent_overdue_days=settings.notification_task_urgent_overdue_days,
            task_escalation_overdue_days=settings.notification_task_escalation_overdue_days,
            renewal_lead_days=settings.notification_renewal_lead_days,
            renewal_high_days=settings.notification_renewal_high_days,
            renewal_urgent_days=settings.notification_renewal_urgent_days,
            renewal_escalation_overdue_days=settings.notification_renewal_escalation_overdue_days,
            partner_stall_days=settings.notification_partner_stall_days,
            partner_agreement_grace_days=settings.notification_partner_agreement_grace_days,
            partner_escalation_stall_days=settings.notification_partner_escalation_stall_days,
            customer_recent_inactive_days=settings.notification_customer_recent_inactive_days,
            customer_high_value_threshold=settings.notification_customer_high_value_threshold,
            elevated_roles=_normalize_roles(settings.notification_elevated_roles),
            restricted_roles=_normalize_roles(settings.notification_restricted_roles),
        )

    def is_elevated(self, role: str | None) -> bool:
        return _normalize_role(role) in self.elevated_roles

    def is_restricted(self, role: str | None) -> bool:
        return _normalize_role(role) in self.restricted_roles


def _normalize_role(role: str | None) -> str:
    return (role or "").strip().lower()


def _normalize_roles(roles: list[str]) -> frozenset[str]:
    return frozenset(_normalize_role(role) for role in roles if _normalize_role(role))


__all__ = [
    "NotificationPolicy",
    "TASK_LEAD_DAYS",
    "TASK_HIGH_OVERDUE_DAYS",
    "TASK_URGENT_OVERDUE_DAYS",
    "TASK_ESCALATION_OVERDUE_DAYS",
    "RENEWAL_LEAD_DAYS",
    "RENEWAL_HIGH_DAYS",
    "RENEWAL_URGENT_DAYS",
    "RENEWAL_ESCALATION_OVERDUE_DAYS",
    "PARTNER_STALL_DAYS",
    "PARTNER_AGREEMENT_GRACE_DAYS",
    "PARTNER_ESCALATION_STALL_DAYS",
    "CUSTOMER_RECENT_INACTIVE_DAYS",
    "CUSTOMER_HIGH_VALUE_THRESHOLD",
    "ELEVATED_ROLES",
    "RESTRICTED_ROLES",
]
