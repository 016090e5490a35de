"""
Issue helper operations used by the issue service.

All database access goes through repositories on the caller's session;
queue calls are fire-and-forget.
"""

from typing import Any, Optional

from sqlalchemy.orm import Session

from tracker.enums import NotificationEventFrom, SubscribeType, WorkflowCategory
from tracker.exceptions import TeamNotFound, WorkflowNotFound
from tracker.logging import get_logger
from tracker.models import Issue, Workspace
from tracker.queues import IssuesQueue, NotificationsQueue
from tracker.repositories import (
    IssueRepository,
    LinkedIssueRepository,
    TeamRepository,
    WorkflowRepository,
)

from .schemas import TRANSIENT_ISSUE_FIELDS, CreateIssueDto, CreateLinkedIssueDto, LinkCheckResult
from .subscribers import get_subscriber_ids
from .titles import TitleGenerator, get_issue_title

logger = get_logger("issues.utils")


def get_last_issue_number(session: Session, team_id: str) -> int:
    """Highest issue number in the team, 0 when the team has none."""
    return IssueRepository(session).get_last_issue_number(team_id)


def find_existing_link(session: Session, link_data: CreateLinkedIssueDto) -> LinkCheckResult:
    """
    Check whether ``link_data.url`` is already linked to an issue.

    Returns status 400 with a message naming the linked issue (``TEAM-42``),
    otherwise status 200. The check is advisory; the unique constraint on
    ``linked_issues.url`` is what rejects a concurrent duplicate.
    """
    linked_issue = LinkedIssueRepository(session).get_by_url(link_data.url)
    if linked_issue:
        issue = linked_issue.issue
        logger.info("link_already_exists", url=link_data.url, issue_id=issue.id)
        return LinkCheckResult(
            status=400,
            message=(
                f"This {link_data.url} has already been linked to an issue "
                f"{issue.team.identifier}-{issue.number}"
            ),
        )
    return LinkCheckResult(status=200, message=None)


def get_equivalent_state_ids(
    session: Session, source_team_id: str, destination_team_id: str
) -> dict[str, str]:
    """
    Map source team state ids to destination team state ids.

    States match when both name and category are equal. Source states with
    no counterpart are left out of the mapping.
    """
    repo = WorkflowRepository(session)
    destination_by_key = {}
    for state in repo.list_for_team(destination_team_id):
        destination_by_key.setdefault((state.name, state.category), state.id)

    equivalent_state_ids = {}
    for source_state in repo.list_for_team(source_team_id):
        destination_id = destination_by_key.get((source_state.name, source_state.category))
        if destination_id:
            equivalent_state_ids[source_state.id] = destination_id
    return equivalent_state_ids


def get_workspace(session: Session, team_id: str) -> Workspace:
    """Workspace that owns the team."""
    team = TeamRepository(session).get_with_workspace(team_id)
    if team is None:
        raise TeamNotFound(team_id)
    return team.workspace


def issue_created_payload(issue: Issue, link_metadata: Optional[dict[str, str]]) -> dict[str, Any]:
    """Notification payload for an ISSUE_CREATED event."""
    return {
        "issue_id": issue.id,
        "subscriber_ids": list(issue.subscriber_ids),
        "to_state_id": issue.state_id,
        "to_priority": issue.priority,
        "to_assignee_id": issue.assignee_id,
        "source_metadata": link_metadata,
        "workspace_id": issue.team.workspace_id,
    }


def handle_post_create_issue(
    session: Session,
    notifications_queue: NotificationsQueue,
    issues_queue: IssuesQueue,
    issue: Issue,
    link_metadata: Optional[dict[str, str]],
) -> None:
    """
    Fire the side effects of a newly created issue.

    1. Notify subscribers (only when there are any).
    2. Queue the issue for similarity-index ingestion.
    3. Queue triage handling when the issue's state is in the TRIAGE category.
    """
    if issue.subscriber_ids:
        notifications_queue.add_to_notification(
            NotificationEventFrom.ISSUE_CREATED,
            issue.created_by_id,
            issue_created_payload(issue, link_metadata),
        )

    issues_queue.add_issue_to_vector(issue)

    issue_state = WorkflowRepository(session).get_by_id(issue.state_id)
    if issue_state is None:
        raise WorkflowNotFound(issue.state_id)
    if issue_state.category == WorkflowCategory.TRIAGE:
        issues_queue.handle_triage_issue(issue, False)


def get_create_issue_input(
    title_generator: Optional[TitleGenerator],
    issue_data: CreateIssueDto,
    workspace_id: str,
    user_id: str,
) -> dict[str, Any]:
    """
    Build ORM keyword arguments for a new Issue.

    Request-only fields are dropped, the title is resolved, the creator and
    assignee are subscribed and ``number`` is a placeholder the caller
    overwrites when it allocates the next number.
    """
    create_input = issue_data.model_dump(exclude=set(TRANSIENT_ISSUE_FIELDS) | {"title", "parent_id"})
    create_input.update(
        title=get_issue_title(title_generator, issue_data, workspace_id),
        created_by_id=user_id,
        subscriber_ids=get_subscriber_ids(
            user_id, issue_data.assignee_id, None, SubscribeType.SUBSCRIBE
        ),
        label_ids=list(dict.fromkeys(issue_data.label_ids)),
        number=0,
    )
    if issue_data.parent_id:
        create_input["parent_id"] = issue_data.parent_id
    return create_input
