"""
Celery application for the tracker workers.

Two work queues: ``notifications`` turns issue events into per-user
notification rows, ``issues`` handles similarity indexing and triage.
Tasks are acknowledged late, so a job whose worker dies is redelivered.

Start a worker with:
    celery -A workers.celery_app worker -Q notifications,issues
"""

from celery import Celery
from celery.signals import worker_process_init
from kombu import Exchange, Queue

from tracker.config import get_settings
from tracker.queues import ISSUES_QUEUE, NOTIFICATIONS_QUEUE

settings = get_settings()

celery_app = Celery(
    "tracker",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "workers.tasks.notification_tasks",
        "workers.tasks.issue_tasks",
    ],
)

celery_app.conf.task_queues = tuple(
    Queue(name, Exchange(name, type="direct"), routing_key=name)
    for name in ("default", NOTIFICATIONS_QUEUE, ISSUES_QUEUE)
)
celery_app.conf.task_routes = {
    "workers.tasks.notification_tasks.*": {"queue": NOTIFICATIONS_QUEUE},
    "workers.tasks.issue_tasks.*": {"queue": ISSUES_QUEUE},
}

celery_app.conf.update(
    task_default_queue="default",
    # Producers send ids and plain values only
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=86400,
    task_soft_time_limit=120,
    task_time_limit=300,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    worker_hijack_root_logger=False,
    broker_connection_retry_on_startup=True,
    task_always_eager=settings.celery_task_always_eager,
)


@worker_process_init.connect
def setup_worker(**kwargs):
    """Each forked worker process gets its own logging setup and engine."""
    from tracker.db import db
    from tracker.logging import configure_celery_logging, configure_logging

    configure_logging(level="DEBUG" if settings.debug else "INFO")
    configure_celery_logging()
    db.initialize()
