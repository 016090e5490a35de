"""
Celery-backed queue producers.

Producers import their tasks lazily so the tracker library can be used
without the worker package configured.
"""

from .issues import ISSUES_QUEUE, IssuesQueue
from .notifications import NOTIFICATIONS_QUEUE, NotificationsQueue

__all__ = ["ISSUES_QUEUE", "IssuesQueue", "NOTIFICATIONS_QUEUE", "NotificationsQueue"]
