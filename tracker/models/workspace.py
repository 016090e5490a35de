"""
Workspace, team and user SQLAlchemy models.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_id, utcnow

if TYPE_CHECKING:
    from .issue import Issue
    from .workflow import Workflow


class Workspace(Base):
    """Top-level tenant. Owns teams."""

    __tablename__ = "workspaces"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    teams: Mapped[list["Team"]] = relationship("Team", back_populates="workspace")


class Team(Base):
    """
    A team within a workspace.

    Attributes:
        identifier: Short uppercase key used in human readable issue ids (``ENG-42``)
    """

    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("workspace_id", "identifier", name="uq_teams_workspace_identifier"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255))
    identifier: Mapped[str] = mapped_column(String(16))
    workspace_id: Mapped[str] = mapped_column(ForeignKey("workspaces.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    workspace: Mapped[Workspace] = relationship("Workspace", back_populates="teams")
    workflows: Mapped[list["Workflow"]] = relationship("Workflow", back_populates="team")
    issues: Mapped[list["Issue"]] = relationship("Issue", back_populates="team")


class User(Base):
    """Workspace member. Issue creators, assignees and subscribers are users."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
