"""
Tests for entry and queue status helpers.
"""
import pytest

from smartq.models.queue import QueueStatus
from smartq.models.queue_entry import EntryStatus
from smartq.utils.status_utils import (
    can_transition_entry,
    is_entry_served,
    is_entry_terminal,
    is_entry_waiting,
    is_queue_open,
    normalize_entry_status,
    normalize_queue_status,
)


class TestNormalization:

    def test_enum_member(self):
        assert normalize_entry_status(EntryStatus.SERVED) == "served"

    def test_plain_and_mixed_case_strings(self):
        assert normalize_entry_status("waiting") == "waiting"
        assert normalize_entry_status("CANCELLED") == "cancelled"

    def test_repr_style_string(self):
        assert normalize_entry_status("EntryStatus.WAITING") == "waiting"
        assert normalize_queue_status("QueueStatus.CLOSED") == "closed"

    def test_none(self):
        assert normalize_entry_status(None) == ""
        assert normalize_queue_status(None) == ""


class TestEntryTransitions:

    @pytest.mark.parametrize("target", [EntryStatus.SERVED, EntryStatus.CANCELLED, "served", "cancelled"])
    def test_waiting_can_move_forward(self, target):
        assert can_transition_entry(EntryStatus.WAITING, target) is True

    @pytest.mark.parametrize("current, target", [
        (EntryStatus.SERVED, EntryStatus.WAITING),
        (EntryStatus.SERVED, EntryStatus.CANCELLED),
        (EntryStatus.CANCELLED, EntryStatus.WAITING),
        (EntryStatus.CANCELLED, EntryStatus.SERVED),
    ])
    def test_terminal_statuses_cannot_move(self, current, target):
        assert can_transition_entry(current, target) is False

    @pytest.mark.parametrize("status", list(EntryStatus))
    def test_same_status_is_not_a_transition(self, status):
        assert can_transition_entry(status, status) is False

    def test_unknown_statuses(self):
        assert can_transition_entry("teleported", "served") is False
        assert can_transition_entry("waiting", "teleported") is False


class TestPredicates:

    def test_waiting_and_served(self):
        assert is_entry_waiting("waiting")
        assert not is_entry_waiting(EntryStatus.SERVED)
        assert is_entry_served(EntryStatus.SERVED)

    def test_terminal(self):
        assert not is_entry_terminal(EntryStatus.WAITING)
        assert is_entry_terminal(EntryStatus.SERVED)
        assert is_entry_terminal("cancelled")
        assert not is_entry_terminal("unknown")

    def test_queue_open(self):
        assert is_queue_open(QueueStatus.OPEN)
        assert is_queue_open("open")
        assert not is_queue_open(QueueStatus.CLOSED)
        assert not is_queue_open(None)
