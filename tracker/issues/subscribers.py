"""Subscriber set bookkeeping for issues."""

from collections.abc import Iterable

from tracker.enums import SubscribeType
from tracker.exceptions import InvalidOperationKind


def get_subscriber_ids(
    user_id: str | None,
    assignee_id: str | None,
    subscriber_ids: Iterable[str] | None,
    operation: SubscribeType,
) -> list[str]:
    """
    Apply a subscribe/unsubscribe operation to an issue's subscriber ids.

    SUBSCRIBE adds the user and the assignee (each only when set).
    UNSUBSCRIBE removes the user. The result is sorted so that the same set
    of inputs always produces the same list.

    Raises:
        InvalidOperationKind: operation is not a SubscribeType.
    """
    subscribers = set(subscriber_ids or ())

    if operation == SubscribeType.UNSUBSCRIBE:
        subscribers.discard(user_id)
    elif operation == SubscribeType.SUBSCRIBE:
        if user_id:
            subscribers.add(user_id)
        if assignee_id:
            subscribers.add(assignee_id)
    else:
        raise InvalidOperationKind(operation)

    return sorted(subscribers)
