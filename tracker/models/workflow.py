"""
Workflow state model.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tracker.enums import WorkflowCategory

from .base import Base, new_id, utcnow

if TYPE_CHECKING:
    from .workspace import Team


class Workflow(Base):
    """
    A workflow state (status column) owned by a team.

    Soft-deleted states keep their row and set ``deleted``.
    """

    __tablename__ = "workflows"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255))
    category: Mapped[WorkflowCategory] = mapped_column(
        SAEnum(WorkflowCategory, native_enum=False, length=32)
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    color: Mapped[Optional[str]] = mapped_column(String(16))
    team_id: Mapped[str] = mapped_column(ForeignKey("teams.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    deleted: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    team: Mapped["Team"] = relationship("Team", back_populates="workflows")
