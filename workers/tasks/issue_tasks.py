"""
Issue processing tasks.

These tasks handle:
- Similarity-index ingestion of new issues
- Triage handling for issues created in a triage state

Queue: issues
"""

import requests

from tracker.config import get_settings
from tracker.db import db
from tracker.enums import NotificationEventFrom, WorkflowCategory
from tracker.logging import get_logger

from ..celery_app import celery_app

logger = get_logger("worker.issues")


def _issue_document(issue: dict) -> str:
    parts = [issue.get("title") or "", issue.get("description") or ""]
    return "\n\n".join(part.strip() for part in parts if part and part.strip())


@celery_app.task(
    bind=True,
    name="workers.tasks.issue_tasks.ingest_issue_vector",
    max_retries=3,
    default_retry_delay=30,
)
def ingest_issue_vector_task(self, issue: dict) -> dict:
    """
    Send an issue to the vector service for similarity search.

    Skipped when ``VECTOR_SERVICE_URL`` is not configured. Transport errors
    are retried by Celery.

    Args:
        issue: Serialized issue (``Issue.to_dict()``)

    Returns:
        Dict with ingestion status
    """
    settings = get_settings()
    issue_id = issue.get("id")

    if not settings.vector_service_url:
        logger.debug("vector_ingest_skipped", issue_id=issue_id, reason="not_configured")
        return {"issue_id": issue_id, "indexed": False}

    body = {
        "id": issue_id,
        "document": _issue_document(issue),
        "metadata": {
            "team_id": issue.get("team_id"),
            "state_id": issue.get("state_id"),
            "label_ids": issue.get("label_ids") or [],
            "number": issue.get("number"),
        },
    }

    try:
        response = requests.post(
            f"{settings.vector_service_url}/issues",
            json=body,
            timeout=settings.vector_service_timeout,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning("vector_ingest_failed", issue_id=issue_id, error=str(e))
        raise self.retry(exc=e)

    logger.info("vector_ingest_complete", issue_id=issue_id)
    return {"issue_id": issue_id, "indexed": True}


@celery_app.task(name="workers.tasks.issue_tasks.handle_triage_issue")
def handle_triage_issue_task(issue_id: str, resend: bool = False) -> dict:
    """
    Handle an issue that landed in a triage state.

    Issues that already left triage are ignored. With ``resend`` the
    creation notification is sent again to the current subscribers.

    Args:
        issue_id: Issue ID
        resend: Re-send the creation notification

    Returns:
        Dict with the handling result
    """
    from tracker.issues import issue_created_payload
    from tracker.queues import NotificationsQueue
    from tracker.repositories import IssueRepository

    logger.info("triage_task_started", issue_id=issue_id, resend=resend)

    try:
        with db.session() as session:
            issue = IssueRepository(session).get_with_team(issue_id)
            if issue is None:
                logger.warning("triage_issue_not_found", issue_id=issue_id)
                return {"issue_id": issue_id, "handled": False, "reason": "not_found"}

            if issue.state.category != WorkflowCategory.TRIAGE:
                logger.info("triage_issue_already_moved", issue_id=issue_id)
                return {"issue_id": issue_id, "handled": False, "reason": "not_in_triage"}

            resent = False
            if resend and issue.subscriber_ids:
                NotificationsQueue().add_to_notification(
                    NotificationEventFrom.ISSUE_CREATED,
                    issue.created_by_id,
                    issue_created_payload(issue, None),
                )
                resent = True

        logger.info("triage_task_complete", issue_id=issue_id, resent=resent)
        return {"issue_id": issue_id, "handled": True, "resent": resent}

    except Exception as e:
        logger.error("triage_task_failed", issue_id=issue_id, error=str(e))
        raise
