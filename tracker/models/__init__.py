"""
SQLAlchemy models for the issue tracker.

Usage:
    from tracker.models import Issue, Team, Workflow
"""

from .base import Base
from .issue import Issue, IssueHistory, LinkedIssue
from .notification import Notification
from .workflow import Workflow
from .workspace import Team, User, Workspace

__all__ = [
    # Base
    "Base",
    # Workspace
    "Workspace",
    "Team",
    "User",
    # Workflow
    "Workflow",
    # Issue
    "Issue",
    "IssueHistory",
    "LinkedIssue",
    # Notification
    "Notification",
]
