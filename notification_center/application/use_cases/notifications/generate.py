"""Rule evaluator turning domain snapshots into candidate notifications."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta
from itertools import chain
from typing import Any, Mapping

from notification_center.application.use_cases.navigation import encode_target
from notification_center.application.use_cases.notifications.policy import NotificationPolicy
from notification_center.application.use_cases.notifications.visibility import is_visible
from notification_center.domain.entities import (
    CUSTOMER_STATUS_INACTIVE,
    CUSTOMER_STATUS_PENDING,
    ONBOARDING_STATUS_BLOCKED,
    ONBOARDING_STATUS_IN_PROGRESS,
    RENEWAL_STATUS_DUE,
    RENEWAL_STATUS_OVERDUE,
    Customer,
    NavigationTarget,
    Notification,
    NotificationPriority,
    NotificationType,
    Partner,
    Renewal,
    Task,
    build_notification_id,
)
from notification_center.utils import (
    calendar_days_between,
    coerce_app_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
    start_of_day,
)

logger = logging.getLogger(__name__)

_DIGEST_LABELS: tuple[tuple[NotificationType, str], ...] = (
    (NotificationType.ESCALATION, "escalation(s)"),
    (NotificationType.TASK, "task alert(s)"),
    (NotificationType.RENEWAL, "renewal alert(s)"),
    (NotificationType.PARTNER_ONBOARDING, "partner onboarding alert(s)"),
    (NotificationType.CUSTOMER_ACTIVITY, "customer update(s)"),
)


@dataclass(frozen=True)
class _EvaluationContext:
    now: datetime
    role: str | None
    user_id: str | None
    policy: NotificationPolicy

    def can_see(self, owner_id: Any) -> bool:
        owner = str(owner_id) if owner_id not in (None, "") else None
        return is_visible(owner, self.role, self.user_id, policy=self.policy)

    def created_at(self, trigger: datetime | None) -> datetime:
        """Return the earlier of the evaluation time and the rule's trigger moment.

        Rules without a trigger moment are stamped at the start of the
        evaluation day, so repeated evaluations on one day agree.
        """

        if trigger is None:
            return start_of_day(self.now)
        return min(self.now, trigger)


def generate_notifications(
    tasks: Iterable[Task] | None,
    renewals: Iterable[Renewal] | None,
    customers: Iterable[Customer] | None,
    partners: Iterable[Partner] | None,
    role: str | None,
    user_id: str | None,
    *,
    now: datetime | None = None,
    policy: NotificationPolicy | None = None,
) -> list[Notification]:
    """Return the notifications implied by the given domain snapshot.

    The evaluation is pure: the same snapshot, role, user and ``now`` always
    produce the same notifications, ordered by id. Entities lacking a field a
    rule depends on are skipped by that rule instead of raising.
    """

    context = _EvaluationContext(
        now=ensure_app_timezone(now) if now is not None else now_in_app_timezone(),
        role=role,
        user_id=str(user_id) if user_id not in (None, "") else None,
        policy=policy or NotificationPolicy.from_settings(),
    )
    customer_list = list(customers or ())

    generated: dict[str, Notification] = {}
    for notification in chain(
        _task_notifications(tasks or (), context),
        _renewal_notifications(renewals or (), customer_list, context),
        _partner_notifications(partners or (), context),
        _customer_notifications(customer_list, context),
    ):
        generated.setdefault(notification.id, notification)

    for notification in _system_notifications(list(generated.values()), context):
        generated.setdefault(notification.id, notification)

    logger.debug(
        "Generated %d notifications for user %s with role %s",
        len(generated),
        context.user_id,
        role,
    )
    return [generated[notification_id] for notification_id in sorted(generated)]


def _task_notifications(tasks: Iterable[Task], context: _EvaluationContext) -> Iterator[Notification]:
    policy = context.policy
    for task in tasks:
        task_id = _entity_id(task)
        if task_id is None or task.is_closed():
            continue
        if not context.can_see(task.assignee_id):
            continue
        due = coerce_app_datetime(task.due_date)
        if due is None:
            logger.debug("Skipping task %s without a usable due date", task_id)
            continue

        days_until = calendar_days_between(context.now, due)
        if days_until > policy.task_lead_days:
            continue

        label = task.title or "Untitled task"
        due_day = start_of_day(due)
        days_overdue = -days_until
        if days_until > 0:
            discriminator = "due-soon"
            title = "Task Due Tomorrow" if days_until == 1 else "Task Due Soon"
            message = (
                f'"{label}" is due tomorrow'
                if days_until == 1
                else f'"{label}" is due in {days_until} day(s)'
            )
            trigger = due_day - timedelta(days=policy.task_lead_days)
        elif days_until == 0:
            discriminator = "due-today"
            title = "Task Due Today"
            message = f'"{label}" is due today'
            trigger = due_day
        else:
            discriminator = "overdue"
            title = "Overdue Task"
            message = f'"{label}" is {days_overdue} day(s) overdue'
            trigger = due_day + timedelta(days=1)

        target = NavigationTarget(tab="tasks", task_id=task_id)
        metadata = {"task_id": task_id, "days_overdue": max(days_overdue, 0), "days_until_due": days_until}
        yield _build(
            NotificationType.TASK,
            discriminator,
            task_id,
            priority=_task_priority(days_overdue, policy),
            title=title,
            message=message,
            created_at=context.created_at(trigger),
            target=target,
            related_type="task",
            metadata=metadata,
        )

        if days_overdue > 0 and days_overdue >= policy.task_escalation_overdue_days:
            yield _escalation(
                NotificationType.TASK,
                discriminator,
                task_id,
                title="Task Escalation",
                message=(
                    f'"{label}" has been overdue for {days_overdue} day(s) and needs escalation'
                ),
                created_at=context.created_at(
                    due_day + timedelta(days=policy.task_escalation_overdue_days)
                ),
                target=target,
                related_type="task",
                metadata=metadata,
            )


def _task_priority(days_overdue: int, policy: NotificationPolicy) -> NotificationPriority:
    if days_overdue >= policy.task_urgent_overdue_days:
        return NotificationPriority.URGENT
    if days_overdue >= policy.task_high_overdue_days:
        return NotificationPriority.HIGH
    return NotificationPriority.MEDIUM


def _renewal_notifications(
    renewals: Iterable[Renewal],
    customers: list[Customer],
    context: _EvaluationContext,
) -> Iterator[Notification]:
    policy = context.policy
    customers_by_id = {
        str(customer.id): customer for customer in customers if _entity_id(customer) is not None
    }
    for renewal in renewals:
        renewal_id = _entity_id(renewal)
        if renewal_id is None or renewal.is_resolved():
            continue
        customer = (
            customers_by_id.get(str(renewal.customer_id))
            if renewal.customer_id not in (None, "")
            else None
        )
        if not context.can_see(customer.owner_id if customer else None):
            continue
        expiry = coerce_app_datetime(renewal.expiry_date)
        if expiry is None:
            logger.debug("Skipping renewal %s without a usable expiry date", renewal_id)
            continue

        status = (renewal.status or "").lower()
        days_until = calendar_days_between(context.now, expiry)
        customer_name = customer.name if customer and customer.name else "Unknown Customer"
        expiry_day = start_of_day(expiry)
        target = NavigationTarget(tab="renewals", renewal_id=renewal_id)
        metadata = {
            "renewal_id": renewal_id,
            "customer_id": str(renewal.customer_id) if renewal.customer_id is not None else None,
            "days_until_expiry": days_until,
        }

        if status == RENEWAL_STATUS_OVERDUE or days_until < 0:
            days_overdue = max(-days_until, 0)
            # Flagged overdue before the expiry date has passed.
            if days_overdue == 0:
                message = f"{customer_name}'s renewal has been marked overdue"
                trigger = None
            else:
                message = f"{customer_name}'s renewal is {days_overdue} day(s) overdue"
                trigger = expiry_day + timedelta(days=1)
            yield _build(
                NotificationType.RENEWAL,
                "overdue",
                renewal_id,
                priority=NotificationPriority.URGENT,
                title="Overdue Renewal",
                message=message,
                created_at=context.created_at(trigger),
                target=target,
                related_type="renewal",
                metadata=metadata,
            )
            if days_overdue > 0 and days_overdue >= policy.renewal_escalation_overdue_days:
                yield _escalation(
                    NotificationType.RENEWAL,
                    "overdue",
                    renewal_id,
                    title="Renewal Escalation",
                    message=(
                        f"{customer_name}'s renewal lapsed {days_overdue} day(s) ago "
                        "without being renewed"
                    ),
                    created_at=context.created_at(
                        expiry_day + timedelta(days=policy.renewal_escalation_overdue_days)
                    ),
                    target=target,
                    related_type="renewal",
                    metadata=metadata,
                )
            continue

        is_due = status == RENEWAL_STATUS_DUE
        if days_until > policy.renewal_lead_days and not is_due:
            continue

        priority = _renewal_priority(days_until, policy)
        if is_due and priority.rank < NotificationPriority.HIGH.rank:
            priority = NotificationPriority.HIGH
        message = (
            f"{customer_name}'s renewal is due today"
            if days_until == 0
            else f"{customer_name}'s renewal is in {days_until} day(s)"
        )
        yield _build(
            NotificationType.RENEWAL,
            "upcoming",
            renewal_id,
            priority=priority,
            title="Renewal Due" if is_due else "Upcoming Renewal",
            message=message,
            created_at=context.created_at(expiry_day - timedelta(days=policy.renewal_lead_days)),
            target=target,
            related_type="renewal",
            metadata=metadata,
        )


def _renewal_priority(days_until: int, policy: NotificationPolicy) -> NotificationPriority:
    if days_until <= policy.renewal_urgent_days:
        return NotificationPriority.URGENT
    if days_until <= policy.renewal_high_days:
        return NotificationPriority.HIGH
    return NotificationPriority.MEDIUM


def _partner_notifications(
    partners: Iterable[Partner], context: _EvaluationContext
) -> Iterator[Notification]:
    policy = context.policy
    if policy.is_restricted(context.role):
        return
    for partner in partners:
        partner_id = _entity_id(partner)
        if partner_id is None or partner.is_onboarded():
            continue
        if not context.can_see(partner.owner_id):
            continue

        name = partner.name or "Unnamed partner"
        stage = partner.onboarding_stage or "current"
        status = (partner.onboarding_status or "").lower()
        stage_started = coerce_app_datetime(partner.stage_started_at)
        created = coerce_app_datetime(partner.created_at)
        onboarding_target = NavigationTarget(tab="partner-onboarding", partner_id=partner_id)

        stalled_days = None
        if status == ONBOARDING_STATUS_IN_PROGRESS and stage_started is not None:
            stalled_days = calendar_days_between(stage_started, context.now)

        if status == ONBOARDING_STATUS_BLOCKED:
            yield _build(
                NotificationType.PARTNER_ONBOARDING,
                "blocked",
                partner_id,
                priority=NotificationPriority.MEDIUM,
                title="Partner Onboarding Blocked",
                message=f"{name}'s onboarding is blocked at the {stage} stage",
                created_at=context.created_at(stage_started),
                target=onboarding_target,
                related_type="partner",
                metadata={"partner_id": partner_id, "stage": partner.onboarding_stage},
            )
        elif stalled_days is not None and stalled_days > policy.partner_stall_days:
            metadata = {
                "partner_id": partner_id,
                "stage": partner.onboarding_stage,
                "stalled_days": stalled_days,
            }
            stage_day = start_of_day(stage_started)
            yield _build(
                NotificationType.PARTNER_ONBOARDING,
                "stalled",
                partner_id,
                priority=NotificationPriority.MEDIUM,
                title="Partner Onboarding Delayed",
                message=f"{name} has been stuck in the {stage} stage for {stalled_days} day(s)",
                created_at=context.created_at(
                    stage_day + timedelta(days=policy.partner_stall_days + 1)
                ),
                target=onboarding_target,
                related_type="partner",
                metadata=metadata,
            )
            if stalled_days >= policy.partner_escalation_stall_days:
                yield _escalation(
                    NotificationType.PARTNER_ONBOARDING,
                    "stalled",
                    partner_id,
                    title="Partner Onboarding Escalation",
                    message=(
                        f"{name} has not progressed past the {stage} stage "
                        f"for {stalled_days} day(s)"
                    ),
                    created_at=context.created_at(
                        stage_day + timedelta(days=policy.partner_escalation_stall_days)
                    ),
                    target=onboarding_target,
                    related_type="partner",
                    metadata=metadata,
                )
        elif partner.agreement_signed is False and created is not None:
            days_since_creation = calendar_days_between(created, context.now)
            if days_since_creation <= policy.partner_agreement_grace_days:
                continue
            yield _build(
                NotificationType.PARTNER_ONBOARDING,
                "agreement-unsigned",
                partner_id,
                priority=NotificationPriority.MEDIUM,
                title="Unsigned Agreement",
                message=f"{name} hasn't signed the agreement for {days_since_creation} days",
                created_at=context.created_at(
                    start_of_day(created)
                    + timedelta(days=policy.partner_agreement_grace_days + 1)
                ),
                target=NavigationTarget(tab="partners", partner_id=partner_id),
                related_type="partner",
                metadata={"partner_id": partner_id, "days_since_creation": days_since_creation},
            )


def _customer_notifications(
    customers: Iterable[Customer], context: _EvaluationContext
) -> Iterator[Notification]:
    policy = context.policy
    for customer in customers:
        customer_id = _entity_id(customer)
        if customer_id is None:
            continue
        if not context.can_see(customer.owner_id):
            continue

        name = customer.name or "Unnamed customer"
        status = (customer.status or "").lower()
        target = NavigationTarget(tab="customers", customer_id=customer_id)

        created = coerce_app_datetime(customer.created_at)

        if status == CUSTOMER_STATUS_INACTIVE:
            recent = (
                created is not None
                and calendar_days_between(created, context.now)
                <= policy.customer_recent_inactive_days
            )
            yield _build(
                NotificationType.CUSTOMER_ACTIVITY,
                "inactive",
                customer_id,
                priority=NotificationPriority.MEDIUM if recent else NotificationPriority.LOW,
                title="Recently Inactive Customer" if recent else "Inactive Customer",
                message=(
                    f"{name} became inactive recently - follow up needed"
                    if recent
                    else f"{name} is inactive - consider a re-engagement call"
                ),
                created_at=context.created_at(created),
                target=target,
                related_type="customer",
                metadata={"customer_id": customer_id, "recent": recent},
            )
        elif customer.churn_risk is True:
            yield _build(
                NotificationType.CUSTOMER_ACTIVITY,
                "churn-risk",
                customer_id,
                priority=NotificationPriority.MEDIUM,
                title="Churn Risk",
                message=f"{name} has been flagged as a churn risk",
                created_at=context.created_at(created),
                target=target,
                related_type="customer",
                metadata={"customer_id": customer_id},
            )

        value = _as_number(customer.value)
        if (
            status == CUSTOMER_STATUS_PENDING
            and value is not None
            and value > policy.customer_high_value_threshold
        ):
            yield _build(
                NotificationType.CUSTOMER_ACTIVITY,
                "high-value-pending",
                customer_id,
                priority=NotificationPriority.MEDIUM,
                title="High-Value Customer Pending",
                message=f"{name} ({value:,.0f}) needs attention",
                created_at=context.created_at(created),
                target=target,
                related_type="customer",
                metadata={"customer_id": customer_id, "value": value},
            )


def _system_notifications(
    notifications: list[Notification], context: _EvaluationContext
) -> Iterator[Notification]:
    if not context.policy.is_elevated(context.role):
        return
    counts = Counter(notification.type for notification in notifications)
    parts = [
        f"{counts[notification_type]} {label}"
        for notification_type, label in _DIGEST_LABELS
        if counts[notification_type]
    ]
    if not parts:
        return

    day = context.now.date().isoformat()
    yield _build(
        NotificationType.SYSTEM,
        "digest",
        day,
        priority=NotificationPriority.LOW,
        title="Daily Digest",
        message=f"Today's digest: {', '.join(parts)}",
        created_at=context.created_at(start_of_day(context.now)),
        target=NavigationTarget(tab="dashboard"),
        related_type=None,
        related_id=None,
        metadata={notification_type.value: count for notification_type, count in counts.items()},
    )


_UNSET = object()


def _build(
    notification_type: NotificationType,
    discriminator: str,
    entity_id: str,
    *,
    priority: NotificationPriority,
    title: str,
    message: str,
    created_at: datetime,
    target: NavigationTarget,
    related_type: str | None,
    metadata: Mapping[str, Any],
    related_id: Any = _UNSET,
) -> Notification:
    return Notification(
        id=build_notification_id(notification_type, discriminator, entity_id),
        type=notification_type,
        priority=priority,
        title=title,
        message=message,
        created_at=created_at,
        action_url=encode_target(target),
        related_id=entity_id if related_id is _UNSET else related_id,
        related_type=related_type,
        metadata=dict(metadata),
    )


def _escalation(
    source_type: NotificationType,
    discriminator: str,
    entity_id: str,
    **kwargs: Any,
) -> Notification:
    return _build(
        NotificationType.ESCALATION,
        f"{source_type.value}-{discriminator}",
        entity_id,
        priority=NotificationPriority.URGENT,
        **kwargs,
    )


def _entity_id(entity: Any) -> str | None:
    raw = getattr(entity, "id", None)
    if raw in (None, ""):
        return None
    return str(raw)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


__all__ = ["generate_notifications"]
