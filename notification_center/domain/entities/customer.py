"""Domain entity representing a customer account."""

from dataclasses import dataclass
from typing import Any

CUSTOMER_STATUS_ACTIVE = "active"
CUSTOMER_STATUS_INACTIVE = "inactive"
CUSTOMER_STATUS_PENDING = "pending"


@dataclass(frozen=True)
class Customer:
    """Read-only view of a customer supplied by the customers data hook."""

    id: str
    name: str | None = None
    status: str | None = None
    owner_id: str | None = None
    created_at: Any = None
    value: float | None = None
    churn_risk: bool = False


__all__ = [
    "Customer",
    "CUSTOMER_STATUS_ACTIVE",
    "CUSTOMER_STATUS_INACTIVE",
    "CUSTOMER_STATUS_PENDING",
]
