"""
Structured logging for the tracker library and its Celery workers.

Events are snake_case names with keyword context. Anything bound through
``LogContext`` or by the worker task hooks (``task_id``, ``issue_id``,
``team_id``) is merged into every entry emitted while it is bound.
"""

import logging
import os
import sys
import time
from collections.abc import Callable
from functools import lru_cache, wraps
from typing import Any, TypeVar

import structlog
from structlog.types import EventDict, Processor

F = TypeVar("F", bound=Callable[..., Any])


def _add_app_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    from .config import get_settings

    event_dict.setdefault("app", get_settings().app_name)
    return event_dict


def _renderers() -> list[Processor]:
    from .config import get_settings

    if get_settings().debug or os.getenv("ENV", "development") == "development":
        return [structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO") -> None:
    """Configure structlog on top of stdlib logging. Safe to call repeatedly."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_app_name,
        *_renderers(),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


class LogContext:
    """
    Bind context for the duration of a block.

        with LogContext(issue_id=issue.id, team_id=issue.team_id):
            logger.info("issue_created")
    """

    def __init__(self, **kwargs: Any):
        self.kwargs = kwargs

    def __enter__(self):
        structlog.contextvars.bind_contextvars(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        structlog.contextvars.unbind_contextvars(*self.kwargs)
        return False


def log_timing(
    operation: str, logger: structlog.stdlib.BoundLogger | None = None
) -> Callable[[F], F]:
    """Log ``operation_complete`` or ``operation_failed`` with the call duration."""

    def decorator(func: F) -> F:
        _logger = logger or get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _logger.error(
                    "operation_failed",
                    operation=operation,
                    duration_seconds=round(time.perf_counter() - start, 3),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
            _logger.info(
                "operation_complete",
                operation=operation,
                duration_seconds=round(time.perf_counter() - start, 3),
            )
            return result

        return wrapper  # type: ignore

    return decorator


def task_log_context(task_id: str, task_name: str, kwargs: dict | None) -> dict[str, Any]:
    """
    Context to bind while a worker task runs.

    Tracker tasks receive the issue either as ``issue_id``, as a serialized
    ``issue`` dict, or inside a notification ``payload``.
    """
    kwargs = kwargs or {}
    context: dict[str, Any] = {"task_id": task_id, "task_name": task_name}

    issue = kwargs.get("issue")
    payload = kwargs.get("payload")
    if isinstance(issue, dict):
        context["issue_id"] = issue.get("id")
        context["team_id"] = issue.get("team_id")
    elif isinstance(payload, dict):
        context["issue_id"] = payload.get("issue_id")
        context["workspace_id"] = payload.get("workspace_id")
    elif kwargs.get("issue_id"):
        context["issue_id"] = kwargs["issue_id"]

    if kwargs.get("event"):
        context["notification_event"] = kwargs["event"]
    return {key: value for key, value in context.items() if value is not None}


def configure_celery_logging() -> None:
    """Connect task signal handlers that bind issue context around each task."""
    from celery.signals import task_failure, task_postrun, task_prerun, task_retry

    logger = get_logger("celery.tasks")

    @task_prerun.connect(weak=False)
    def on_task_prerun(task_id=None, task=None, kwargs=None, **kw):
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(**task_log_context(task_id, task.name, kwargs))
        logger.info("task_started")

    @task_retry.connect(weak=False)
    def on_task_retry(request=None, reason=None, **kw):
        logger.warning("task_retrying", reason=str(reason), retries=getattr(request, "retries", None))

    @task_failure.connect(weak=False)
    def on_task_failure(exception=None, **kw):
        logger.error("task_failed", error=str(exception), error_type=type(exception).__name__)

    @task_postrun.connect(weak=False)
    def on_task_postrun(state=None, **kw):
        logger.info("task_completed", state=state)
        structlog.contextvars.clear_contextvars()


class _LazyLogger:
    """Module-level logger resolved on first use, after configuration."""

    def __init__(self, name: str):
        self._name = name
        self._logger: structlog.stdlib.BoundLogger | None = None

    def __getattr__(self, name: str):
        if self._logger is None:
            self._logger = get_logger(self._name)
        return getattr(self._logger, name)


db_logger = _LazyLogger("tracker.db")
queue_logger = _LazyLogger("tracker.queues")


__all__ = [
    "configure_logging",
    "get_logger",
    "LogContext",
    "log_timing",
    "task_log_context",
    "configure_celery_logging",
    "db_logger",
    "queue_logger",
]
