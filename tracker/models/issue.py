"""
Issue-related SQLAlchemy models.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import (
    JSON,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_id, utcnow

if TYPE_CHECKING:
    from .workflow import Workflow
    from .workspace import Team


class Issue(Base):
    """
    Issue owned by a team.

    ``label_ids`` and ``subscriber_ids`` are stored as JSON lists but carry
    set semantics: helpers never write duplicates into them.
    """

    __tablename__ = "issues"
    __table_args__ = (
        UniqueConstraint("team_id", "number", name="uq_issues_team_number"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    number: Mapped[int] = mapped_column(Integer, default=0)
    title: Mapped[str] = mapped_column(String(512))
    description: Mapped[Optional[str]] = mapped_column(Text)
    priority: Mapped[Optional[int]] = mapped_column(Integer)
    estimate: Mapped[Optional[float]] = mapped_column(Float)
    due_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    sort_order: Mapped[Optional[float]] = mapped_column(Float)
    label_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    subscriber_ids: Mapped[List[str]] = mapped_column(JSON, default=list)

    team_id: Mapped[str] = mapped_column(ForeignKey("teams.id"), index=True)
    state_id: Mapped[str] = mapped_column(ForeignKey("workflows.id"), index=True)
    parent_id: Mapped[Optional[str]] = mapped_column(ForeignKey("issues.id"))
    assignee_id: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id"))
    created_by_id: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id"))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
    deleted: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    team: Mapped["Team"] = relationship("Team", back_populates="issues")
    state: Mapped["Workflow"] = relationship("Workflow")
    parent: Mapped[Optional["Issue"]] = relationship("Issue", remote_side=[id])
    linked_issues: Mapped[List["LinkedIssue"]] = relationship(
        "LinkedIssue", back_populates="issue", cascade="all, delete-orphan"
    )
    history: Mapped[List["IssueHistory"]] = relationship(
        "IssueHistory", back_populates="issue", cascade="all, delete-orphan"
    )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the issue for queue payloads and the vector document."""
        return {
            "id": self.id,
            "number": self.number,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "estimate": self.estimate,
            "label_ids": list(self.label_ids or []),
            "subscriber_ids": list(self.subscriber_ids or []),
            "team_id": self.team_id,
            "state_id": self.state_id,
            "parent_id": self.parent_id,
            "assignee_id": self.assignee_id,
            "created_by_id": self.created_by_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class LinkedIssue(Base):
    """
    Association between an issue and an external URL.

    The unique constraint on ``url`` is what actually prevents two issues from
    linking the same URL; ``find_existing_link`` only produces a friendly
    message ahead of the insert.
    """

    __tablename__ = "linked_issues"
    __table_args__ = (UniqueConstraint("url", name="uq_linked_issues_url"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    url: Mapped[str] = mapped_column(String(1024))
    title: Mapped[Optional[str]] = mapped_column(String(512))
    source_id: Mapped[Optional[str]] = mapped_column(String(255))
    source_data: Mapped[Optional[Dict]] = mapped_column(JSON)
    issue_id: Mapped[str] = mapped_column(ForeignKey("issues.id", ondelete="CASCADE"), index=True)
    created_by_id: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    issue: Mapped[Issue] = relationship("Issue", back_populates="linked_issues")


class IssueHistory(Base):
    """
    Persisted change-set for an issue.

    One row per mutation; columns mirror the flattened issue diff.
    """

    __tablename__ = "issue_history"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    issue_id: Mapped[str] = mapped_column(ForeignKey("issues.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id"))
    changes: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    added_label_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    removed_label_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    issue: Mapped[Issue] = relationship("Issue", back_populates="history")
