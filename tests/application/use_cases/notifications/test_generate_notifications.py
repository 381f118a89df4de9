"""Tests for the notification rule evaluator."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from notification_center.application.use_cases.notifications import (
    NotificationPolicy,
    generate_notifications,
)
from notification_center.domain.entities import (
    Customer,
    NotificationPriority,
    NotificationType,
    Partner,
    Renewal,
    Task,
)
from notification_center.infrastructure.notifications import NotificationStore

NOW = datetime(2026, 10, 19, 10, 30, tzinfo=timezone.utc)
TODAY = NOW.date()
POLICY = NotificationPolicy()


def _days(offset: int) -> date:
    return TODAY + timedelta(days=offset)


def _generate(
    *,
    tasks=(),
    renewals=(),
    customers=(),
    partners=(),
    role="team-leader",
    user_id="u1",
    policy=POLICY,
):
    return generate_notifications(
        tasks, renewals, customers, partners, role, user_id, now=NOW, policy=policy
    )


def _by_id(notifications):
    return {notification.id: notification for notification in notifications}


def test_overdue_task_and_expiring_renewal_scenario() -> None:
    """An overdue task and a renewal two days out yield exactly two unread items."""

    policy = NotificationPolicy(
        task_urgent_overdue_days=5,
        renewal_lead_days=7,
        renewal_high_days=3,
        renewal_urgent_days=1,
    )
    notifications = _generate(
        tasks=[Task(id="t1", title="Call ACME", assignee_id="u1", due_date=_days(-3), status="pending")],
        renewals=[Renewal(id="r1", customer_id="c1", expiry_date=_days(2), status="upcoming")],
        customers=[Customer(id="c1", name="ACME", status="active", owner_id="u1")],
        policy=policy,
    )

    by_id = _by_id(notifications)
    assert set(by_id) == {"task-overdue-t1", "renewal-upcoming-r1"}
    assert by_id["task-overdue-t1"].priority in {NotificationPriority.MEDIUM, NotificationPriority.HIGH}
    assert by_id["renewal-upcoming-r1"].priority is NotificationPriority.HIGH

    store = NotificationStore()
    store.recompute(notifications)
    assert store.unread_count() == 2


def test_generation_is_deterministic() -> None:
    snapshot = dict(
        tasks=[
            Task(id="t1", title="A", assignee_id="u1", due_date=_days(-20)),
            Task(id="t2", title="B", assignee_id="u1", due_date=_days(1)),
        ],
        renewals=[Renewal(id="r1", customer_id="c1", expiry_date=_days(-9))],
        customers=[Customer(id="c1", name="ACME", status="inactive", owner_id="u1")],
        partners=[
            Partner(
                id="p1",
                owner_id="u1",
                onboarding_status="in-progress",
                stage_started_at=_days(-40),
            )
        ],
        role="admin",
    )

    first = _generate(**snapshot)
    second = _generate(**snapshot)

    assert [(n.id, n.type, n.priority, n.created_at) for n in first] == [
        (n.id, n.type, n.priority, n.created_at) for n in second
    ]
    assert [n.id for n in first] == sorted(n.id for n in first)


@pytest.mark.parametrize(
    ("offset", "expected_id", "expected_priority"),
    [
        (1, "task-due-soon-t1", NotificationPriority.MEDIUM),
        (0, "task-due-today-t1", NotificationPriority.HIGH),
        (-3, "task-overdue-t1", NotificationPriority.HIGH),
        (-5, "task-overdue-t1", NotificationPriority.URGENT),
        (-9, "task-overdue-t1", NotificationPriority.URGENT),
    ],
)
def test_task_priority_escalates_with_days_overdue(offset, expected_id, expected_priority) -> None:
    notifications = _generate(tasks=[Task(id="t1", title="Demo", assignee_id="u1", due_date=_days(offset))])

    assert [n.id for n in notifications] == [expected_id]
    assert notifications[0].priority is expected_priority
    assert notifications[0].type is NotificationType.TASK
    assert notifications[0].action_url == "/?tab=tasks&taskId=t1"


def test_task_outside_lead_window_is_ignored() -> None:
    assert _generate(tasks=[Task(id="t1", assignee_id="u1", due_date=_days(2))]) == []


def test_task_escalation_coexists_with_the_overdue_notification() -> None:
    notifications = _generate(tasks=[Task(id="t1", title="Demo", assignee_id="u1", due_date=_days(-14))])

    by_id = _by_id(notifications)
    assert set(by_id) == {"task-overdue-t1", "escalation-task-overdue-t1"}
    escalation = by_id["escalation-task-overdue-t1"]
    assert escalation.type is NotificationType.ESCALATION
    assert escalation.priority is NotificationPriority.URGENT
    assert escalation.action_url == by_id["task-overdue-t1"].action_url


@pytest.mark.parametrize(
    "task",
    [
        Task(id="t1", assignee_id="u1", due_date=_days(-2), status="completed"),
        Task(id="t1", assignee_id="u1", due_date=_days(-2), status="Cancelled"),
        Task(id="t1", assignee_id="u1", due_date=None),
        Task(id="t1", assignee_id="u1", due_date="next tuesday"),
        Task(id="t1", assignee_id="u1", due_date=12345),
        Task(id=None, assignee_id="u1", due_date=_days(-2)),
        Task(id="t1", assignee_id="u2", due_date=_days(-2)),
    ],
)
def test_tasks_skipped_when_closed_incomplete_or_not_owned(task) -> None:
    assert _generate(tasks=[task]) == []


def test_elevated_roles_see_tasks_assigned_to_others() -> None:
    task = Task(id="t1", assignee_id="u2", due_date=_days(-1))

    assert _generate(tasks=[task], role="team-leader") == []
    ids = [n.id for n in _generate(tasks=[task], role="Admin")]
    assert "task-overdue-t1" in ids


def test_task_created_at_is_earlier_of_now_and_trigger() -> None:
    overdue = _generate(tasks=[Task(id="t1", assignee_id="u1", due_date=_days(-3))])[0]
    assert overdue.created_at == datetime(2026, 10, 17, tzinfo=timezone.utc)

    due_today = _generate(tasks=[Task(id="t1", assignee_id="u1", due_date=f"{TODAY.isoformat()}T18:00:00Z")])[0]
    assert due_today.created_at == datetime(2026, 10, 19, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("offset", "status", "expected_priority"),
    [
        (20, "upcoming", NotificationPriority.MEDIUM),
        (7, "upcoming", NotificationPriority.HIGH),
        (1, "upcoming", NotificationPriority.URGENT),
        (0, "upcoming", NotificationPriority.URGENT),
        (20, "due", NotificationPriority.HIGH),
        (45, "due", NotificationPriority.HIGH),
    ],
)
def test_renewal_priority_grows_as_expiry_approaches(offset, status, expected_priority) -> None:
    notifications = _generate(
        renewals=[Renewal(id="r1", customer_id="c1", expiry_date=_days(offset), status=status)],
        customers=[Customer(id="c1", name="ACME", owner_id="u1")],
    )

    assert [n.id for n in notifications] == ["renewal-upcoming-r1"]
    assert notifications[0].priority is expected_priority
    assert notifications[0].action_url == "/?tab=renewals&renewalId=r1"


def test_overdue_renewals_are_urgent_and_escalate_after_the_grace_window() -> None:
    customers = [Customer(id="c1", name="ACME", owner_id="u1")]

    flagged = _generate(
        renewals=[Renewal(id="r1", customer_id="c1", expiry_date=_days(3), status="overdue")],
        customers=customers,
    )
    assert [(n.id, n.priority) for n in flagged] == [("renewal-overdue-r1", NotificationPriority.URGENT)]

    lapsed = _by_id(
        _generate(
            renewals=[Renewal(id="r1", customer_id="c1", expiry_date=_days(-10), status="upcoming")],
            customers=customers,
        )
    )
    assert set(lapsed) == {"renewal-overdue-r1", "escalation-renewal-overdue-r1"}
    assert "ACME's renewal is 10 day(s) overdue" == lapsed["renewal-overdue-r1"].message


@pytest.mark.parametrize("status", ["renewed", "cancelled", "lost"])
def test_resolved_renewals_are_dropped(status) -> None:
    notifications = _generate(
        renewals=[Renewal(id="r1", customer_id="c1", expiry_date=_days(-2), status=status)],
        customers=[Customer(id="c1", owner_id="u1")],
    )
    assert notifications == []


def test_renewal_visibility_follows_the_customer_owner() -> None:
    renewal = Renewal(id="r1", customer_id="missing", expiry_date=_days(5))

    assert _generate(renewals=[renewal]) == []

    notifications = _generate(renewals=[renewal], role="manager")
    renewal_notification = _by_id(notifications)["renewal-upcoming-r1"]
    assert renewal_notification.message.startswith("Unknown Customer")


def test_stalled_partner_onboarding_is_medium_and_escalates_later() -> None:
    stalled = _generate(
        partners=[
            Partner(
                id="p1",
                name="Northwind",
                onboarding_stage="kyc",
                onboarding_status="in-progress",
                owner_id="u1",
                stage_started_at=_days(-10),
            )
        ]
    )
    assert [(n.id, n.priority) for n in stalled] == [
        ("partner-onboarding-stalled-p1", NotificationPriority.MEDIUM)
    ]
    assert stalled[0].action_url == "/?tab=partner-onboarding&partnerId=p1"

    escalated = _by_id(
        _generate(
            partners=[
                Partner(
                    id="p1",
                    onboarding_status="in-progress",
                    owner_id="u1",
                    stage_started_at=_days(-30),
                )
            ]
        )
    )
    assert set(escalated) == {
        "partner-onboarding-stalled-p1",
        "escalation-partner-onboarding-stalled-p1",
    }


def test_partner_notifications_are_suppressed_for_restricted_roles() -> None:
    partner = Partner(
        id="p1",
        onboarding_status="blocked",
        owner_id="u1",
        stage_started_at=_days(-60),
    )

    assert _generate(partners=[partner], role="fsr") == []
    assert _generate(partners=[partner], role="BDE") == []
    assert [n.id for n in _generate(partners=[partner])] == ["partner-onboarding-blocked-p1"]


def test_partner_emits_at_most_one_onboarding_notification() -> None:
    partner = Partner(
        id="p1",
        onboarding_status="blocked",
        owner_id="u1",
        agreement_signed=False,
        created_at=_days(-60),
    )

    notifications = _generate(partners=[partner])

    assert [n.id for n in notifications] == ["partner-onboarding-blocked-p1"]


def test_unsigned_agreement_after_grace_period() -> None:
    partners = [
        Partner(id="p1", name="Contoso", owner_id="u1", agreement_signed=False, created_at=_days(-20)),
        Partner(id="p2", owner_id="u1", agreement_signed=False, created_at=_days(-10)),
        Partner(id="p3", owner_id="u1", agreement_signed=None, created_at=_days(-20)),
        Partner(id="p4", owner_id="u1", agreement_signed=False, created_at=None),
        Partner(
            id="p5",
            owner_id="u1",
            agreement_signed=False,
            created_at=_days(-20),
            onboarding_stage="onboarded",
        ),
    ]

    notifications = _generate(partners=partners)

    assert [n.id for n in notifications] == ["partner-onboarding-agreement-unsigned-p1"]
    assert notifications[0].action_url == "/?tab=partners&partnerId=p1"
    assert notifications[0].message == "Contoso hasn't signed the agreement for 20 days"


@pytest.mark.parametrize(
    ("customer", "expected_id", "expected_priority"),
    [
        (
            Customer(id="c1", status="inactive", owner_id="u1", created_at=_days(-10)),
            "customer-activity-inactive-c1",
            NotificationPriority.MEDIUM,
        ),
        (
            Customer(id="c1", status="inactive", owner_id="u1", created_at=_days(-90)),
            "customer-activity-inactive-c1",
            NotificationPriority.LOW,
        ),
        (
            Customer(id="c1", status="inactive", owner_id="u1"),
            "customer-activity-inactive-c1",
            NotificationPriority.LOW,
        ),
        (
            Customer(id="c1", status="active", owner_id="u1", churn_risk=True),
            "customer-activity-churn-risk-c1",
            NotificationPriority.MEDIUM,
        ),
        (
            Customer(id="c1", status="pending", owner_id="u1", value="45000"),
            "customer-activity-high-value-pending-c1",
            NotificationPriority.MEDIUM,
        ),
    ],
)
def test_customer_activity_rules(customer, expected_id, expected_priority) -> None:
    notifications = _generate(customers=[customer])

    assert [n.id for n in notifications] == [expected_id]
    assert notifications[0].priority is expected_priority
    assert notifications[0].action_url == "/?tab=customers&customerId=c1"


def test_customers_without_signals_stay_quiet() -> None:
    customers = [
        Customer(id="c1", status="active", owner_id="u1"),
        Customer(id="c2", status="pending", owner_id="u1", value=1000),
        Customer(id="c3", status="pending", owner_id="u1", value="a lot"),
    ]

    assert _generate(customers=customers) == []


def test_created_at_is_stable_across_evaluations_on_the_same_day() -> None:
    customers = [
        Customer(id="c1", name="ACME", status="active", owner_id="u1", churn_risk=True),
        Customer(id="c2", status="pending", owner_id="u1", value=45000, created_at=_days(-3)),
        Customer(id="c3", status="inactive", owner_id="u1", created_at=_days(-90)),
    ]
    renewals = [Renewal(id="r1", customer_id="c1", expiry_date=_days(5), status="overdue")]

    def evaluate(hour: int):
        return generate_notifications(
            (), renewals, customers, (), "team-leader", "u1",
            now=NOW.replace(hour=hour, minute=0), policy=POLICY,
        )

    morning = evaluate(9)
    afternoon = evaluate(15)

    assert [(n.id, n.created_at) for n in morning] == [(n.id, n.created_at) for n in afternoon]
    by_id = _by_id(morning)
    start_of_today = datetime(2026, 10, 19, tzinfo=timezone.utc)
    assert by_id["customer-activity-churn-risk-c1"].created_at == start_of_today
    assert by_id["renewal-overdue-r1"].created_at == start_of_today
    assert by_id["customer-activity-high-value-pending-c2"].created_at == datetime(
        2026, 10, 16, tzinfo=timezone.utc
    )
    assert by_id["customer-activity-inactive-c3"].created_at == datetime.combine(
        _days(-90), datetime.min.time(), tzinfo=timezone.utc
    )


def test_renewal_flagged_overdue_before_expiry_has_no_day_count() -> None:
    notifications = _generate(
        renewals=[Renewal(id="r1", customer_id="c1", expiry_date=_days(5), status="overdue")],
        customers=[Customer(id="c1", name="ACME", owner_id="u1")],
    )

    assert [n.message for n in notifications] == ["ACME's renewal has been marked overdue"]


def test_notification_metadata_is_read_only() -> None:
    store = NotificationStore()
    store.recompute(
        _generate(customers=[Customer(id="c1", status="active", owner_id="u1", churn_risk=True)])
    )

    with pytest.raises(TypeError):
        store.list()[0].metadata["customer_id"] = "someone-else"

    assert store.list()[0].metadata["customer_id"] == "c1"


def test_daily_digest_is_reserved_for_elevated_roles() -> None:
    snapshot = dict(
        tasks=[Task(id="t1", assignee_id="u1", due_date=_days(-20))],
        customers=[Customer(id="c1", status="inactive", owner_id="u1")],
    )

    assert "system-digest-2026-10-19" not in _by_id(_generate(**snapshot))

    digest = _by_id(_generate(role="admin", **snapshot))["system-digest-2026-10-19"]
    assert digest.type is NotificationType.SYSTEM
    assert digest.priority is NotificationPriority.LOW
    assert digest.related_id is None
    assert digest.action_url == "/?tab=dashboard"
    assert "1 escalation(s)" in digest.message
    assert "1 task alert(s)" in digest.message
    assert "1 customer update(s)" in digest.message


def test_daily_digest_is_skipped_when_nothing_needs_attention() -> None:
    assert _generate(role="admin") == []


def test_missing_collections_are_treated_as_empty() -> None:
    notifications = generate_notifications(None, None, None, None, "admin", "u1", now=NOW, policy=POLICY)

    assert notifications == []
