"""
Issue creation service.

Ties the helpers together: link check, input assembly, numbering,
creation history and the post-create side effects.
"""

from typing import Optional

from sqlalchemy.orm import Session

from tracker.exceptions import LinkAlreadyExists
from tracker.logging import LogContext, get_logger, log_timing
from tracker.models import Issue
from tracker.queues import IssuesQueue, NotificationsQueue
from tracker.repositories import IssueRepository, LinkedIssueRepository

from .history import get_issue_diff
from .schemas import CreateIssueDto
from .titles import TitleGenerator
from .utils import find_existing_link, get_create_issue_input, handle_post_create_issue

logger = get_logger("issues.service")


@log_timing("issue_create")
def create_issue(
    session: Session,
    notifications_queue: NotificationsQueue,
    issues_queue: IssuesQueue,
    issue_data: CreateIssueDto,
    workspace_id: str,
    user_id: str,
    title_generator: Optional[TitleGenerator] = None,
) -> Issue:
    """
    Create an issue and fire its side effects.

    Args:
        session: Database session. Committed before side effects are queued,
            so a failure before that point leaves nothing queued.
        notifications_queue: Notification event producer.
        issues_queue: Vector/triage job producer.
        issue_data: Validated creation request.
        workspace_id: Workspace the team belongs to.
        user_id: Creating user.
        title_generator: Optional AI collaborator for untitled issues.

    Raises:
        LinkAlreadyExists: ``link_issue_data.url`` is linked to another issue.
    """
    link_data = issue_data.link_issue_data
    if link_data is not None:
        check = find_existing_link(session, link_data)
        if not check.ok:
            raise LinkAlreadyExists(link_data.url, check.message or "")

    issue_repo = IssueRepository(session)
    create_input = get_create_issue_input(title_generator, issue_data, workspace_id, user_id)
    create_input["number"] = issue_repo.get_last_issue_number(issue_data.team_id) + 1

    issue = issue_repo.create(**create_input)

    with LogContext(issue_id=issue.id, team_id=issue.team_id):
        issue_repo.add_history(issue.id, user_id, get_issue_diff(issue))

        if link_data is not None:
            LinkedIssueRepository(session).create(
                url=link_data.url,
                title=link_data.title,
                source_id=link_data.source_id,
                source_data=link_data.source_data,
                issue_id=issue.id,
                created_by_id=user_id,
            )

        session.refresh(issue, attribute_names=["team"])
        # Workers look the issue up by id, so it must be visible before any job is sent.
        session.commit()

        handle_post_create_issue(
            session, notifications_queue, issues_queue, issue, issue_data.source_metadata
        )
        logger.info("issue_created", number=issue.number, subscribers=len(issue.subscriber_ids))

    return issue
