"""Domain entity representing a customer contract renewal."""

from dataclasses import dataclass
from typing import Any

RENEWAL_STATUS_UPCOMING = "upcoming"
RENEWAL_STATUS_DUE = "due"
RENEWAL_STATUS_OVERDUE = "overdue"
RENEWAL_STATUS_RENEWED = "renewed"
RENEWAL_STATUS_CANCELLED = "cancelled"
RENEWAL_STATUS_LOST = "lost"

RENEWAL_RESOLVED_STATUSES = frozenset(
    {RENEWAL_STATUS_RENEWED, RENEWAL_STATUS_CANCELLED, RENEWAL_STATUS_LOST}
)


@dataclass(frozen=True)
class Renewal:
    """Read-only view of a renewal supplied by the renewals data hook."""

    id: str
    customer_id: str | None = None
    expiry_date: Any = None
    status: str | None = None
    contract_value: float | None = None

    def is_resolved(self) -> bool:
        """Return ``True`` when the renewal was closed one way or another."""

        return (self.status or "").lower() in RENEWAL_RESOLVED_STATUSES


__all__ = [
    "Renewal",
    "RENEWAL_STATUS_UPCOMING",
    "RENEWAL_STATUS_DUE",
    "RENEWAL_STATUS_OVERDUE",
    "RENEWAL_STATUS_RENEWED",
    "RENEWAL_STATUS_CANCELLED",
    "RENEWAL_STATUS_LOST",
    "RENEWAL_RESOLVED_STATUSES",
]
