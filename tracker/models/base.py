"""
Base model class for SQLAlchemy ORM.

Re-exports the Base class from the database module and adds shared column helpers.
"""

import uuid
from datetime import datetime, timezone

from tracker.db import Base


def new_id() -> str:
    """Primary key factory for all tracker tables."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["Base", "new_id", "utcnow"]
