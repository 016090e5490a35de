"""Celery task definitions."""

from workers.tasks.issue_tasks import handle_triage_issue_task, ingest_issue_vector_task
from workers.tasks.notification_tasks import create_notification_task

__all__ = [
    # Notifications
    "create_notification_task",
    # Issues
    "ingest_issue_vector_task",
    "handle_triage_issue_task",
]
