"""
Workflow state repository.
"""

from sqlalchemy import select

from tracker.enums import ModelName
from tracker.models import Workflow

from .base import BaseRepository


class WorkflowRepository(BaseRepository[Workflow]):
    """Repository for team workflow states."""

    model = Workflow
    model_name = ModelName.WORKFLOW

    def list_for_team(self, team_id: str) -> list[Workflow]:
        """Non-deleted states of a team, in board order."""
        return list(
            self.session.scalars(
                select(Workflow)
                .where(Workflow.team_id == team_id, Workflow.deleted.is_(None))
                .order_by(Workflow.position, Workflow.name)
            )
        )
