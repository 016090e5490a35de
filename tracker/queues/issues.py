"""Issue processing queue producer (similarity indexing and triage)."""

from tracker.logging import queue_logger
from tracker.models import Issue

ISSUES_QUEUE = "issues"


class IssuesQueue:
    """Enqueues issue background jobs."""

    def add_issue_to_vector(self, issue: Issue) -> None:
        """Queue the issue for similarity-index ingestion."""
        from workers.tasks.issue_tasks import ingest_issue_vector_task

        ingest_issue_vector_task.apply_async(kwargs={"issue": issue.to_dict()}, queue=ISSUES_QUEUE)
        queue_logger.info("issue_vector_enqueued", issue_id=issue.id)

    def handle_triage_issue(self, issue: Issue, resend: bool) -> None:
        """Queue triage handling for an issue sitting in a triage state."""
        from workers.tasks.issue_tasks import handle_triage_issue_task

        handle_triage_issue_task.apply_async(
            kwargs={"issue_id": issue.id, "resend": resend}, queue=ISSUES_QUEUE
        )
        queue_logger.info("triage_issue_enqueued", issue_id=issue.id, resend=resend)
