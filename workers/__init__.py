"""
Celery Background Workers.

Consumes notification events and issue processing jobs.

Usage:
    celery -A workers worker --loglevel=info
    celery -A workers worker -Q notifications --loglevel=info
    celery -A workers worker -Q issues --loglevel=info
"""

from workers.celery_app import celery_app

__all__ = ["celery_app"]
