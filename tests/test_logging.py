"""Tests for log context binding and the database manager lifecycle."""

from unittest.mock import MagicMock

import pytest
import structlog

from tracker.db import DatabaseManager
from tracker.logging import LogContext, log_timing, task_log_context


class TestTaskLogContext:
    def test_serialized_issue(self):
        context = task_log_context(
            "task-1", "ingest_issue_vector", {"issue": {"id": "i1", "team_id": "t1"}}
        )

        assert context == {
            "task_id": "task-1",
            "task_name": "ingest_issue_vector",
            "issue_id": "i1",
            "team_id": "t1",
        }

    def test_notification_payload(self):
        context = task_log_context(
            "task-2",
            "create_notification",
            {"event": "IssueCreated", "payload": {"issue_id": "i1", "workspace_id": "w1"}},
        )

        assert context["issue_id"] == "i1"
        assert context["workspace_id"] == "w1"
        assert context["notification_event"] == "IssueCreated"

    def test_issue_id_kwarg(self):
        context = task_log_context("task-3", "handle_triage_issue", {"issue_id": "i1"})

        assert context["issue_id"] == "i1"
        assert "team_id" not in context

    def test_no_kwargs(self):
        assert task_log_context("task-4", "noop", None) == {"task_id": "task-4", "task_name": "noop"}


def test_log_context_unbinds_only_its_keys():
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(task_id="task-1")

    with LogContext(issue_id="i1"):
        assert structlog.contextvars.get_contextvars() == {"task_id": "task-1", "issue_id": "i1"}

    assert structlog.contextvars.get_contextvars() == {"task_id": "task-1"}
    structlog.contextvars.clear_contextvars()


def test_log_timing_logs_failures_and_reraises():
    logger = MagicMock()

    @log_timing("issue_create", logger=logger)
    def failing():
        raise ValueError("boom")

    with pytest.raises(ValueError):
        failing()

    event = logger.error.call_args.args[0]
    assert event == "operation_failed"
    assert logger.error.call_args.kwargs["error_type"] == "ValueError"
    logger.info.assert_not_called()


class TestDatabaseManager:
    def test_session_requires_initialize(self):
        manager = DatabaseManager()

        with pytest.raises(RuntimeError, match="not initialized"):
            with manager.session():
                pass

    def test_reset_allows_reinitialize(self):
        manager = DatabaseManager()
        manager.initialize("sqlite://")
        first_engine = manager.engine

        manager.initialize("sqlite://")
        assert manager.engine is first_engine

        manager.reset()
        assert manager.engine is None
        manager.initialize("sqlite://")
        assert manager.engine is not first_engine
        manager.reset()
