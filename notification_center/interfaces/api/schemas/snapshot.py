"""Pydantic models describing the domain snapshot posted by the dashboard.

Every field besides the collections themselves is optional: incomplete records
are accepted here and silently skipped by the rules that need the missing
data. Field names follow the dashboard's camelCase payloads.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from notification_center.domain.entities import Customer, Partner, Renewal, Task

DateLike = datetime | date | str | None
Identifier = str | int | None


def _as_text(value: Identifier) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TaskSnapshot(_SnapshotModel):
    id: Identifier = None
    title: str | None = None
    assignee_id: Identifier = Field(
        default=None,
        validation_alias=AliasChoices("assigneeId", "assignedTo", "assignee_id"),
    )
    due_date: DateLike = Field(
        default=None, validation_alias=AliasChoices("dueDate", "due_date")
    )
    status: str | None = None

    def to_entity(self) -> Task:
        return Task(
            id=_as_text(self.id),
            title=self.title,
            assignee_id=_as_text(self.assignee_id),
            due_date=self.due_date,
            status=self.status,
        )


class RenewalSnapshot(_SnapshotModel):
    id: Identifier = None
    customer_id: Identifier = Field(
        default=None, validation_alias=AliasChoices("customerId", "customer_id")
    )
    expiry_date: DateLike = Field(
        default=None,
        validation_alias=AliasChoices("expiryDate", "renewalDate", "expiry_date"),
    )
    status: str | None = None
    contract_value: float | None = Field(
        default=None, validation_alias=AliasChoices("contractValue", "contract_value")
    )

    def to_entity(self) -> Renewal:
        return Renewal(
            id=_as_text(self.id),
            customer_id=_as_text(self.customer_id),
            expiry_date=self.expiry_date,
            status=self.status,
            contract_value=self.contract_value,
        )


class CustomerSnapshot(_SnapshotModel):
    id: Identifier = None
    name: str | None = None
    status: str | None = None
    owner_id: Identifier = Field(
        default=None, validation_alias=AliasChoices("ownerId", "owner_id")
    )
    created_at: DateLike = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )
    value: float | str | None = None
    churn_risk: bool = Field(
        default=False, validation_alias=AliasChoices("churnRisk", "churn_risk")
    )

    def to_entity(self) -> Customer:
        return Customer(
            id=_as_text(self.id),
            name=self.name,
            status=self.status,
            owner_id=_as_text(self.owner_id),
            created_at=self.created_at,
            value=self.value,
            churn_risk=self.churn_risk,
        )


class PartnerSnapshot(_SnapshotModel):
    id: Identifier = None
    name: str | None = None
    onboarding_stage: str | None = Field(
        default=None,
        validation_alias=AliasChoices("onboardingStage", "currentStage", "onboarding_stage"),
    )
    onboarding_status: str | None = Field(
        default=None,
        validation_alias=AliasChoices("onboardingStatus", "onboarding_status"),
    )
    owner_id: Identifier = Field(
        default=None, validation_alias=AliasChoices("ownerId", "owner_id")
    )
    stage_started_at: DateLike = Field(
        default=None, validation_alias=AliasChoices("stageStartedAt", "stage_started_at")
    )
    agreement_signed: bool | None = Field(
        default=None, validation_alias=AliasChoices("agreementSigned", "agreement_signed")
    )
    created_at: DateLike = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )

    def to_entity(self) -> Partner:
        return Partner(
            id=_as_text(self.id),
            name=self.name,
            onboarding_stage=self.onboarding_stage,
            onboarding_status=self.onboarding_status,
            owner_id=_as_text(self.owner_id),
            stage_started_at=self.stage_started_at,
            agreement_signed=self.agreement_signed,
            created_at=self.created_at,
        )


class NotificationSnapshot(_SnapshotModel):
    """Collections the notification rules are evaluated against."""

    tasks: list[TaskSnapshot] = Field(default_factory=list)
    renewals: list[RenewalSnapshot] = Field(default_factory=list)
    customers: list[CustomerSnapshot] = Field(default_factory=list)
    partners: list[PartnerSnapshot] = Field(default_factory=list)


__all__ = [
    "CustomerSnapshot",
    "NotificationSnapshot",
    "PartnerSnapshot",
    "RenewalSnapshot",
    "TaskSnapshot",
]
