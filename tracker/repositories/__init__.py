"""
Repository pattern implementations for data access.

Usage:
    from tracker.repositories import IssueRepository
    from tracker.db import db

    with db.session() as session:
        number = IssueRepository(session).get_last_issue_number(team_id)
"""

from .base import BaseRepository
from .issue_repository import IssueRepository, LinkedIssueRepository, TeamRepository
from .workflow_repository import WorkflowRepository

__all__ = [
    "BaseRepository",
    "IssueRepository",
    "LinkedIssueRepository",
    "TeamRepository",
    "WorkflowRepository",
]
