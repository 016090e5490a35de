"""Exceptions raised by the tracker helper layer."""


class TrackerError(Exception):
    """Base class for tracker errors."""


class InvalidOperationKind(TrackerError, ValueError):
    """Raised when a subscriber update is requested with an unknown operation."""

    def __init__(self, operation):
        self.operation = operation
        super().__init__(f"Unsupported subscribe operation: {operation!r}")


class TeamNotFound(TrackerError, LookupError):
    """Raised when a team id does not resolve to a team."""

    def __init__(self, team_id: str):
        self.team_id = team_id
        super().__init__(f"Team {team_id} not found")


class WorkflowNotFound(TrackerError, LookupError):
    """Raised when an issue points at a workflow state that does not exist."""

    def __init__(self, state_id: str | None):
        self.state_id = state_id
        super().__init__(f"Workflow state {state_id} not found")


class LinkAlreadyExists(TrackerError):
    """Raised when an external URL is already linked to another issue."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)


__all__ = [
    "TrackerError",
    "InvalidOperationKind",
    "LinkAlreadyExists",
    "TeamNotFound",
    "WorkflowNotFound",
]
