"""Tests for shared enumerations and settings."""

import pytest

from tracker.config import Settings
from tracker.enums import ModelName, SubscribeType, WorkflowCategory


def test_model_names_are_store_names():
    assert ModelName.LINKED_ISSUE.value == "LinkedIssue"
    assert ModelName("IssueHistory") is ModelName.ISSUE_HISTORY
    assert len({m.value for m in ModelName}) == len(ModelName)


def test_model_names_cannot_be_reassigned():
    with pytest.raises(AttributeError):
        ModelName.ISSUE = "Other"


def test_enums_compare_with_stored_strings():
    assert WorkflowCategory("TRIAGE") == WorkflowCategory.TRIAGE
    assert SubscribeType.SUBSCRIBE == "SUBSCRIBE"


def test_blank_vector_service_url_disables_ingestion(monkeypatch):
    monkeypatch.setenv("VECTOR_SERVICE_URL", "   ")

    assert Settings().vector_service_url is None
