"""Tests for the Celery queue producers."""

from unittest.mock import MagicMock

import pytest

from tracker.enums import NotificationEventFrom
from tracker.models import Issue
from tracker.queues import ISSUES_QUEUE, NOTIFICATIONS_QUEUE, IssuesQueue, NotificationsQueue
from workers.tasks import issue_tasks, notification_tasks


@pytest.fixture
def issue():
    return Issue(
        id="i1",
        number=3,
        title="Crash on save",
        team_id="t1",
        state_id="s1",
        label_ids=["L1"],
        subscriber_ids=["u1"],
    )


def test_add_to_notification_enqueues_task(monkeypatch):
    apply_async = MagicMock()
    monkeypatch.setattr(notification_tasks.create_notification_task, "apply_async", apply_async)

    NotificationsQueue().add_to_notification(
        NotificationEventFrom.ISSUE_CREATED, "u1", {"issue_id": "i1", "subscriber_ids": ["u2"]}
    )

    apply_async.assert_called_once_with(
        kwargs={
            "event": "IssueCreated",
            "actor_id": "u1",
            "payload": {"issue_id": "i1", "subscriber_ids": ["u2"]},
        },
        queue=NOTIFICATIONS_QUEUE,
    )


def test_add_issue_to_vector_sends_serialized_issue(monkeypatch, issue):
    apply_async = MagicMock()
    monkeypatch.setattr(issue_tasks.ingest_issue_vector_task, "apply_async", apply_async)

    IssuesQueue().add_issue_to_vector(issue)

    kwargs = apply_async.call_args.kwargs
    assert kwargs["queue"] == ISSUES_QUEUE
    assert kwargs["kwargs"]["issue"]["id"] == "i1"
    assert kwargs["kwargs"]["issue"]["label_ids"] == ["L1"]


def test_handle_triage_issue_passes_resend_flag(monkeypatch, issue):
    apply_async = MagicMock()
    monkeypatch.setattr(issue_tasks.handle_triage_issue_task, "apply_async", apply_async)

    IssuesQueue().handle_triage_issue(issue, False)

    apply_async.assert_called_once_with(
        kwargs={"issue_id": "i1", "resend": False}, queue=ISSUES_QUEUE
    )
