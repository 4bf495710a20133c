"""
Helpers for comparing and advancing entry and queue statuses.

Statuses may arrive as enum members (loaded from the database) or as plain
strings (request bodies, tests), so every comparison goes through the
normalizers below.
"""
from typing import Union

from smartq.models.queue import QueueStatus
from smartq.models.queue_entry import EntryStatus


# Entry workflow: waiting -> served, waiting -> cancelled. Served and
# cancelled are terminal.
ENTRY_TRANSITIONS: dict[str, frozenset[str]] = {
    EntryStatus.WAITING.value: frozenset({EntryStatus.SERVED.value, EntryStatus.CANCELLED.value}),
    EntryStatus.SERVED.value: frozenset(),
    EntryStatus.CANCELLED.value: frozenset(),
}


def normalize_entry_status(status: Union[str, EntryStatus, None]) -> str:
    """
    Normalize an entry status to a lowercase string for consistent comparison.

    Args:
        status: Can be an EntryStatus enum, string, or None

    Returns:
        Lowercase string representation of the status, or empty string if None
    """
    if status is None:
        return ""

    if isinstance(status, EntryStatus):
        return status.value

    if hasattr(status, 'value'):
        return str(status.value).lower()

    return str(status).lower().replace('entrystatus.', '')


def is_entry_status(status: Union[str, EntryStatus, None], target: EntryStatus) -> bool:
    return normalize_entry_status(status) == target.value


def is_entry_waiting(status: Union[str, EntryStatus, None]) -> bool:
    """Check if an entry status indicates WAITING."""
    return is_entry_status(status, EntryStatus.WAITING)


def is_entry_served(status: Union[str, EntryStatus, None]) -> bool:
    """Check if an entry status indicates SERVED."""
    return is_entry_status(status, EntryStatus.SERVED)


def is_entry_terminal(status: Union[str, EntryStatus, None]) -> bool:
    """
    Check if an entry is in a terminal state.
    Terminal states: SERVED, CANCELLED
    """
    normalized = normalize_entry_status(status)
    return normalized in ENTRY_TRANSITIONS and not ENTRY_TRANSITIONS[normalized]


def can_transition_entry(
    current: Union[str, EntryStatus, None],
    target: Union[str, EntryStatus, None],
) -> bool:
    """
    Check whether an entry may move from ``current`` to ``target``.
    Staying in the same status is not a transition and returns False.
    """
    current_normalized = normalize_entry_status(current)
    target_normalized = normalize_entry_status(target)
    return target_normalized in ENTRY_TRANSITIONS.get(current_normalized, frozenset())


def normalize_queue_status(status: Union[str, QueueStatus, None]) -> str:
    if status is None:
        return ""

    if isinstance(status, QueueStatus):
        return status.value

    if hasattr(status, 'value'):
        return str(status.value).lower()

    return str(status).lower().replace('queuestatus.', '')


def is_queue_open(status: Union[str, QueueStatus, None]) -> bool:
    """Check if a queue status indicates OPEN."""
    return normalize_queue_status(status) == QueueStatus.OPEN.value
