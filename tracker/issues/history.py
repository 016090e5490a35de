"""
Issue change-set calculation.

``get_issue_diff`` compares two snapshots of an issue and returns an
``IssueHistoryData`` holding only the fields that changed, plus the label
ids that were added and removed.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from tracker.enums import IssueField

TRACKED_FIELDS: tuple[IssueField, ...] = (
    IssueField.ASSIGNEE_ID,
    IssueField.PRIORITY,
    IssueField.PARENT_ID,
    IssueField.STATE_ID,
    IssueField.ESTIMATE,
    IssueField.TEAM_ID,
)


@dataclass(frozen=True)
class FieldChange:
    """Before/after pair for one tracked field.

    ``has_before`` is False for issue creation, where only the new value exists.
    """

    after: Any
    before: Any = None
    has_before: bool = True


@dataclass(frozen=True)
class IssueHistoryData:
    changes: Mapping[IssueField, FieldChange] = field(default_factory=dict, hash=False)
    added_label_ids: tuple[str, ...] = ()
    removed_label_ids: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "changes", MappingProxyType(dict(self.changes)))

    @property
    def has_changes(self) -> bool:
        return bool(self.changes or self.added_label_ids or self.removed_label_ids)

    def field_changes_dict(self) -> dict[str, Any]:
        """Flatten field changes into ``fromX``/``toX`` keys."""
        flat: dict[str, Any] = {}
        for issue_field in TRACKED_FIELDS:
            change = self.changes.get(issue_field)
            if change is None:
                continue
            if change.has_before:
                flat[f"from{issue_field.label}"] = change.before
            flat[f"to{issue_field.label}"] = change.after
        return flat

    def to_dict(self) -> dict[str, Any]:
        """Flattened record as stored in issue history and sent with notifications."""
        flat = self.field_changes_dict()
        flat["addedLabelIds"] = list(self.added_label_ids)
        flat["removedLabelIds"] = list(self.removed_label_ids)
        return flat


def _read(snapshot: Any, name: str) -> Any:
    if isinstance(snapshot, Mapping):
        return snapshot.get(name)
    return getattr(snapshot, name, None)


def _unique(values: Iterable[str] | None) -> list[str]:
    return list(dict.fromkeys(values or ()))


def get_issue_diff(new_issue: Any, current_issue: Any = None) -> IssueHistoryData:
    """
    Compute the change-set between two issue snapshots.

    Snapshots can be ORM instances, pydantic models or plain mappings keyed by
    attribute name. Values are compared with ``!=``; tracked fields hold
    scalars or ids so no deep comparison is done.

    Args:
        new_issue: Issue after the mutation.
        current_issue: Issue before the mutation, or None when the issue is new.

    Returns:
        IssueHistoryData. For a new issue every tracked field is recorded with
        its value and all labels count as added.
    """
    new_labels = _unique(_read(new_issue, "label_ids"))

    if current_issue is None:
        changes = {
            issue_field: FieldChange(after=_read(new_issue, issue_field.value), has_before=False)
            for issue_field in TRACKED_FIELDS
        }
        return IssueHistoryData(changes=changes, added_label_ids=tuple(new_labels))

    changes = {}
    for issue_field in TRACKED_FIELDS:
        after = _read(new_issue, issue_field.value)
        before = _read(current_issue, issue_field.value)
        if after != before:
            changes[issue_field] = FieldChange(after=after, before=before)

    current_labels = _unique(_read(current_issue, "label_ids"))
    current_set = set(current_labels)
    new_set = set(new_labels)

    return IssueHistoryData(
        changes=changes,
        added_label_ids=tuple(label for label in new_labels if label not in current_set),
        removed_label_ids=tuple(label for label in current_labels if label not in new_set),
    )


__all__ = ["TRACKED_FIELDS", "FieldChange", "IssueHistoryData", "get_issue_diff"]
