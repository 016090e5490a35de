"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from tracker.db import Base
from tracker.enums import ModelName
from tracker.logging import db_logger

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class TeamRepository(BaseRepository[Team]):
            model = Team
            model_name = ModelName.TEAM

        repo = TeamRepository(session)
        team = repo.get_by_id(team_id)
    """

    model: type[T]
    model_name: ModelName

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: str) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def create(self, **kwargs) -> T:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        self.session.flush()
        db_logger.debug("record_created", model=self.model_name.value, id=instance.id)  # type: ignore[attr-defined]
        return instance
