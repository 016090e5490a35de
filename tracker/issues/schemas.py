"""
Pydantic schemas for issue creation inputs and helper results.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CreateLinkedIssueDto(BaseModel):
    """External link attached to an issue."""

    url: str = Field(min_length=1, max_length=1024)
    title: Optional[str] = None
    source_id: Optional[str] = None
    source_data: Optional[Dict[str, Any]] = None


class CreateIssueDto(BaseModel):
    """
    Issue creation request.

    ``sub_issues``, ``issue_relation``, ``link_issue_data`` and
    ``source_metadata`` drive follow-up work and are not issue columns.
    """

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, max_length=512)
    description: Optional[str] = None
    team_id: str
    state_id: str
    parent_id: Optional[str] = None
    assignee_id: Optional[str] = None
    priority: Optional[int] = Field(default=None, ge=0, le=4)
    estimate: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[datetime] = None
    sort_order: Optional[float] = None
    label_ids: List[str] = Field(default_factory=list)

    sub_issues: List["CreateIssueDto"] = Field(default_factory=list)
    issue_relation: Optional[Dict[str, Any]] = None
    link_issue_data: Optional[CreateLinkedIssueDto] = None
    source_metadata: Optional[Dict[str, str]] = None

    @model_validator(mode="after")
    def require_title_or_description(self) -> "CreateIssueDto":
        has_title = bool(self.title and self.title.strip())
        has_description = bool(self.description and self.description.strip())
        if not (has_title or has_description):
            raise ValueError("An issue needs a title or a description")
        return self


class LinkCheckResult(BaseModel):
    """Outcome of the duplicate external link check."""

    status: int
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == 200


TRANSIENT_ISSUE_FIELDS = frozenset({"sub_issues", "issue_relation", "link_issue_data", "source_metadata"})
