"""Domain entity representing a channel partner going through onboarding."""

from dataclasses import dataclass
from typing import Any

ONBOARDING_STAGES = (
    "outreach",
    "product-overview",
    "partner-program",
    "kyc",
    "agreement",
    "onboarded",
)
ONBOARDING_STAGE_ONBOARDED = "onboarded"

ONBOARDING_STATUS_PENDING = "pending"
ONBOARDING_STATUS_IN_PROGRESS = "in-progress"
ONBOARDING_STATUS_COMPLETED = "completed"
ONBOARDING_STATUS_BLOCKED = "blocked"


@dataclass(frozen=True)
class Partner:
    """Read-only view of a partner supplied by the partners data hook."""

    id: str
    name: str | None = None
    onboarding_stage: str | None = None
    onboarding_status: str | None = None
    owner_id: str | None = None
    stage_started_at: Any = None
    agreement_signed: bool | None = None
    created_at: Any = None

    def is_onboarded(self) -> bool:
        """Return ``True`` once onboarding has finished."""

        return (
            (self.onboarding_status or "").lower() == ONBOARDING_STATUS_COMPLETED
            or (self.onboarding_stage or "").lower() == ONBOARDING_STAGE_ONBOARDED
        )


__all__ = [
    "Partner",
    "ONBOARDING_STAGES",
    "ONBOARDING_STAGE_ONBOARDED",
    "ONBOARDING_STATUS_PENDING",
    "ONBOARDING_STATUS_IN_PROGRESS",
    "ONBOARDING_STATUS_COMPLETED",
    "ONBOARDING_STATUS_BLOCKED",
]
