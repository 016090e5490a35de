"""
Issue Tracker Core Library.

Helper layer underneath the issue service: change-set diffing, post-create
side-effect dispatch, subscriber bookkeeping and the supporting lookups.

Usage:
    # Database
    from tracker.db import db
    from tracker.models import Issue, Team, Workflow

    # Issue helpers
    from tracker.issues import get_issue_diff, handle_post_create_issue

    # Config / logging
    from tracker.config import get_settings
    from tracker.logging import get_logger
"""

__version__ = "1.0.0"

# Import directly from submodules:
#   from tracker.db import db
#   from tracker.config import get_settings
#   from tracker.logging import get_logger
