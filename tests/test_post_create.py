"""Tests for the post-create side-effect dispatcher."""

from unittest.mock import call

import pytest

from tracker.enums import NotificationEventFrom
from tracker.exceptions import WorkflowNotFound
from tracker.issues import handle_post_create_issue, issue_created_payload
from tracker.models import Issue


def test_notifies_subscribers_and_indexes(
    test_session, seeded, make_issue, notifications_queue, issues_queue
):
    alice, bob = seeded["alice"], seeded["bob"]
    issue = make_issue(
        seeded["team"],
        seeded["states"]["Todo"],
        1,
        priority=2,
        assignee_id=bob.id,
        created_by_id=alice.id,
        subscriber_ids=[alice.id, bob.id],
    )

    handle_post_create_issue(
        test_session, notifications_queue, issues_queue, issue, {"source": "slack"}
    )

    notifications_queue.add_to_notification.assert_called_once_with(
        NotificationEventFrom.ISSUE_CREATED,
        alice.id,
        {
            "issue_id": issue.id,
            "subscriber_ids": [alice.id, bob.id],
            "to_state_id": seeded["states"]["Todo"].id,
            "to_priority": 2,
            "to_assignee_id": bob.id,
            "source_metadata": {"source": "slack"},
            "workspace_id": seeded["workspace"].id,
        },
    )
    issues_queue.add_issue_to_vector.assert_called_once_with(issue)
    issues_queue.handle_triage_issue.assert_not_called()


def test_no_notification_without_subscribers(
    test_session, seeded, make_issue, notifications_queue, issues_queue
):
    issue = make_issue(seeded["team"], seeded["states"]["Backlog"], 1, subscriber_ids=[])

    handle_post_create_issue(test_session, notifications_queue, issues_queue, issue, None)

    notifications_queue.add_to_notification.assert_not_called()
    issues_queue.add_issue_to_vector.assert_called_once_with(issue)


@pytest.mark.parametrize("subscriber_ids", [[], ["someone"]])
def test_triage_state_enqueues_single_triage_job(
    test_session, seeded, make_issue, notifications_queue, issues_queue, subscriber_ids
):
    issue = make_issue(
        seeded["team"], seeded["states"]["Triage"], 1, subscriber_ids=subscriber_ids
    )

    handle_post_create_issue(test_session, notifications_queue, issues_queue, issue, None)

    assert issues_queue.handle_triage_issue.call_args_list == [call(issue, False)]


def test_missing_state_raises(test_session, seeded, notifications_queue, issues_queue):
    issue = Issue(
        id="orphan",
        team_id=seeded["team"].id,
        state_id="missing",
        number=1,
        title="Orphan",
        subscriber_ids=[],
    )

    with pytest.raises(WorkflowNotFound):
        handle_post_create_issue(test_session, notifications_queue, issues_queue, issue, None)

    issues_queue.add_issue_to_vector.assert_called_once_with(issue)


def test_issue_created_payload_without_source(test_session, seeded, make_issue):
    issue = make_issue(seeded["team"], seeded["states"]["Todo"], 1, subscriber_ids=["u1"])

    payload = issue_created_payload(issue, None)

    assert payload["issue_id"] == issue.id
    assert payload["subscriber_ids"] == ["u1"]
    assert payload["source_metadata"] is None
    assert payload["workspace_id"] == seeded["workspace"].id
