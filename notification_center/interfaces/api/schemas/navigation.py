"""Pydantic models describing deep-link navigation targets."""

from __future__ import annotations

from pydantic import BaseModel, Field

from notification_center.domain.entities import NavigationTarget


class NavigationTargetPayload(BaseModel):
    """Target the dashboard shell should navigate to."""

    tab: str | None = None
    task_id: str | None = None
    customer_id: str | None = None
    partner_id: str | None = None
    renewal_id: str | None = None

    def to_entity(self) -> NavigationTarget:
        return NavigationTarget(
            tab=self.tab or None,
            task_id=self.task_id or None,
            customer_id=self.customer_id or None,
            partner_id=self.partner_id or None,
            renewal_id=self.renewal_id or None,
        )


class NavigationTargetRead(NavigationTargetPayload):
    """Decoded target plus the query parameters the shell should apply."""

    navigable: bool
    query_params: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_entity(cls, target: NavigationTarget) -> "NavigationTargetRead":
        return cls(
            tab=target.tab,
            task_id=target.task_id,
            customer_id=target.customer_id,
            partner_id=target.partner_id,
            renewal_id=target.renewal_id,
            navigable=not target.is_empty,
            query_params=target.to_query_params(),
        )


class ActionUrlRead(BaseModel):
    action_url: str


__all__ = ["ActionUrlRead", "NavigationTargetPayload", "NavigationTargetRead"]
