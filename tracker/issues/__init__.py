"""
Issue helper layer.

Usage:
    from tracker.issues import get_issue_diff, get_subscriber_ids, handle_post_create_issue
"""

from .history import FieldChange, IssueHistoryData, get_issue_diff
from .schemas import CreateIssueDto, CreateLinkedIssueDto, LinkCheckResult
from .service import create_issue
from .subscribers import get_subscriber_ids
from .titles import TitleGenerator, get_issue_title
from .utils import (
    find_existing_link,
    get_create_issue_input,
    get_equivalent_state_ids,
    get_last_issue_number,
    get_workspace,
    handle_post_create_issue,
    issue_created_payload,
)

__all__ = [
    # History
    "FieldChange",
    "IssueHistoryData",
    "get_issue_diff",
    # Subscribers
    "get_subscriber_ids",
    # Schemas
    "CreateIssueDto",
    "CreateLinkedIssueDto",
    "LinkCheckResult",
    # Titles
    "TitleGenerator",
    "get_issue_title",
    # Lookups and dispatch
    "find_existing_link",
    "get_create_issue_input",
    "get_equivalent_state_ids",
    "get_last_issue_number",
    "get_workspace",
    "handle_post_create_issue",
    "issue_created_payload",
    # Service
    "create_issue",
]
