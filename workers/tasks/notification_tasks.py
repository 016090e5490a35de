"""
Notification tasks.

Turns queued notification events into per-recipient Notification rows.
Queue: notifications
"""

from tracker.db import db
from tracker.logging import get_logger
from tracker.models import Notification

from ..celery_app import celery_app

logger = get_logger("worker.notifications")


@celery_app.task(name="workers.tasks.notification_tasks.create_notification")
def create_notification_task(event: str, actor_id: str | None, payload: dict) -> dict:
    """
    Create one notification per subscriber for an event.

    The actor never notifies themselves.

    Args:
        event: NotificationEventFrom value
        actor_id: User who caused the event
        payload: Event payload; ``subscriber_ids`` lists the recipients

    Returns:
        Dict with the number of notifications created
    """
    recipients = [
        user_id for user_id in dict.fromkeys(payload.get("subscriber_ids") or []) if user_id != actor_id
    ]
    action_data = {key: value for key, value in payload.items() if key != "subscriber_ids"}

    logger.info("notification_task_started", notification_event=event, recipients=len(recipients))

    try:
        with db.session() as session:
            session.add_all(
                [
                    Notification(
                        event=event,
                        user_id=user_id,
                        actor_id=actor_id,
                        issue_id=payload.get("issue_id"),
                        workspace_id=payload.get("workspace_id"),
                        action_data=action_data,
                    )
                    for user_id in recipients
                ]
            )

        logger.info("notification_task_complete", notification_event=event, created=len(recipients))
        return {"event": event, "created": len(recipients)}

    except Exception as e:
        logger.error("notification_task_failed", notification_event=event, error=str(e))
        raise
