"""Issue title resolution, with an optional AI title generator."""

from typing import Optional, Protocol

from tracker.config import get_settings
from tracker.logging import get_logger

from .schemas import CreateIssueDto

logger = get_logger("issues.titles")


class TitleGenerator(Protocol):
    """AI-assist collaborator that summarizes a description into a title."""

    def generate_title(self, description: str, workspace_id: str) -> str: ...


def _truncate(description: str, max_length: int) -> str:
    first_line = description.strip().splitlines()[0].strip()
    if len(first_line) <= max_length:
        return first_line
    cut = first_line[: max_length - 1].rsplit(" ", 1)[0] or first_line[: max_length - 1]
    return cut.rstrip() + "…"


def get_issue_title(
    title_generator: Optional[TitleGenerator],
    issue_data: CreateIssueDto,
    workspace_id: str,
) -> str:
    """
    Resolve the title for a new issue.

    Order: explicit title, then a generated title from the description,
    then the description's first line truncated to ``TITLE_MAX_LENGTH``.
    Generator failures propagate to the caller.
    """
    if issue_data.title and issue_data.title.strip():
        return issue_data.title.strip()

    description = issue_data.description or ""
    max_length = get_settings().title_max_length

    if title_generator is not None:
        generated = (title_generator.generate_title(description, workspace_id) or "").strip()
        if generated:
            logger.debug("issue_title_generated", workspace_id=workspace_id)
            return generated[:max_length]
        logger.warning("issue_title_generation_empty", workspace_id=workspace_id)

    return _truncate(description, max_length)
