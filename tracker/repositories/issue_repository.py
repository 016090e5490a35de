"""
Issue repository: numbering, history and linked issue queries.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from tracker.enums import ModelName
from tracker.models import Issue, IssueHistory, LinkedIssue, Team

from .base import BaseRepository


class IssueRepository(BaseRepository[Issue]):
    """Repository for Issue operations."""

    model = Issue
    model_name = ModelName.ISSUE

    def get_with_team(self, issue_id: str) -> Issue | None:
        """Get an issue with its team eagerly loaded."""
        return self.session.scalar(
            select(Issue).options(joinedload(Issue.team)).where(Issue.id == issue_id)
        )

    def get_last_issue_number(self, team_id: str) -> int:
        """
        Highest issue number used by a team.

        Returns 0 when the team has no issues; callers add one for the next number.
        """
        last = self.session.scalar(select(func.max(Issue.number)).where(Issue.team_id == team_id))
        return last or 0

    def add_history(self, issue_id: str, user_id: str | None, history_data) -> IssueHistory:
        """Persist an IssueHistoryData change-set."""
        entry = IssueHistory(
            issue_id=issue_id,
            user_id=user_id,
            changes=history_data.field_changes_dict(),
            added_label_ids=list(history_data.added_label_ids),
            removed_label_ids=list(history_data.removed_label_ids),
        )
        self.session.add(entry)
        self.session.flush()
        return entry


class LinkedIssueRepository(BaseRepository[LinkedIssue]):
    """Repository for external links attached to issues."""

    model = LinkedIssue
    model_name = ModelName.LINKED_ISSUE

    def get_by_url(self, url: str) -> LinkedIssue | None:
        """Get the link for a URL with its issue and team loaded."""
        return self.session.scalar(
            select(LinkedIssue)
            .options(joinedload(LinkedIssue.issue).joinedload(Issue.team))
            .where(LinkedIssue.url == url)
            .limit(1)
        )


class TeamRepository(BaseRepository[Team]):
    """Repository for teams."""

    model = Team
    model_name = ModelName.TEAM

    def get_with_workspace(self, team_id: str) -> Team | None:
        return self.session.scalar(
            select(Team).options(joinedload(Team.workspace)).where(Team.id == team_id)
        )
