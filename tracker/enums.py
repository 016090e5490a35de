"""
Shared Enumerations.

Defines enums used across the tracker for type safety and consistency.
"""

from enum import Enum


class WorkflowCategory(str, Enum):
    """Classification of a workflow state column."""
    BACKLOG = "BACKLOG"
    UNSTARTED = "UNSTARTED"
    STARTED = "STARTED"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
    TRIAGE = "TRIAGE"


class SubscribeType(str, Enum):
    """How an issue's subscriber set should be mutated."""
    SUBSCRIBE = "SUBSCRIBE"
    UNSUBSCRIBE = "UNSUBSCRIBE"


class NotificationEventFrom(str, Enum):
    """Event kinds accepted by the notifications queue."""
    ISSUE_CREATED = "IssueCreated"
    ISSUE_UPDATED = "IssueUpdated"
    ISSUE_ASSIGNED = "IssueAssigned"
    ISSUE_STATE_CHANGED = "IssueStateChanged"
    ISSUE_PRIORITY_CHANGED = "IssuePriorityChanged"
    ISSUE_COMMENTED = "IssueCommented"


class IssueField(str, Enum):
    """
    Issue fields tracked in the issue history.

    The value is the snake_case attribute name on issue snapshots; ``label``
    is the camel-case suffix used in flattened ``fromX``/``toX`` keys.
    """
    ASSIGNEE_ID = "assignee_id"
    PRIORITY = "priority"
    PARENT_ID = "parent_id"
    STATE_ID = "state_id"
    ESTIMATE = "estimate"
    TEAM_ID = "team_id"

    @property
    def label(self) -> str:
        return "".join(part.capitalize() for part in self.value.split("_"))


class ModelName(str, Enum):
    """Model names understood by the client-side store sync."""
    WORKSPACE = "Workspace"
    TEAM = "Team"
    LABEL = "Label"
    USERS_ON_WORKSPACES = "UsersOnWorkspaces"
    VIEW = "View"
    ACTION = "Action"

    # Team scoped
    WORKFLOW = "Workflow"
    ISSUE = "Issue"
    ISSUE_HISTORY = "IssueHistory"
    ISSUE_COMMENT = "IssueComment"
    INTEGRATION_DEFINITION = "IntegrationDefinition"
    INTEGRATION_ACCOUNT = "IntegrationAccount"
    LINKED_ISSUE = "LinkedIssue"
    ISSUE_RELATION = "IssueRelation"
    NOTIFICATION = "Notification"
    ISSUE_SUGGESTION = "IssueSuggestion"
    PROJECT = "Project"
    PROJECT_MILESTONE = "ProjectMilestone"
    CYCLE = "Cycle"
    CONVERSATION = "Conversation"
    CONVERSATION_HISTORY = "ConversationHistory"
    TEMPLATE = "Template"


__all__ = [
    "IssueField",
    "ModelName",
    "NotificationEventFrom",
    "SubscribeType",
    "WorkflowCategory",
]
