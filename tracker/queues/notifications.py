"""Notifications queue producer."""

from typing import Any

from tracker.enums import NotificationEventFrom
from tracker.logging import queue_logger

NOTIFICATIONS_QUEUE = "notifications"


class NotificationsQueue:
    """Enqueues notification events for the notifications worker."""

    def add_to_notification(
        self,
        event: NotificationEventFrom,
        actor_id: str | None,
        payload: dict[str, Any],
    ) -> None:
        """Fire-and-forget; delivery and retries belong to the worker."""
        from workers.tasks.notification_tasks import create_notification_task

        create_notification_task.apply_async(
            kwargs={"event": event.value, "actor_id": actor_id, "payload": payload},
            queue=NOTIFICATIONS_QUEUE,
        )
        queue_logger.info(
            "notification_enqueued",
            notification_event=event.value,
            issue_id=payload.get("issue_id"),
            recipients=len(payload.get("subscriber_ids") or []),
        )
