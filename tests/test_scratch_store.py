"""Tests for the pending-edit scratch store."""

from datetime import datetime

import pytest

from customer_counts.core.scratch_store import EditScratchStore

REMINDER = datetime(2024, 2, 1, 15, 45)


@pytest.fixture
def store():
    return EditScratchStore()


class TestFeedback:
    def test_set_feedback_creates_entry(self, store):
        store.set_feedback(1, "hello")
        assert store.get(1).feedback_text == "hello"
        assert store.has_pending(1)

    def test_feedback_text_kept_verbatim(self, store):
        store.set_feedback(1, "  padded  ")
        assert store.feedback_for(1) == "  padded  "

    def test_empty_after_hello_removes_entry(self, store):
        store.set_feedback(1, "hello")
        store.set_feedback(1, "")
        assert store.get(1) is None
        assert 1 not in store
        assert len(store) == 0

    def test_whitespace_only_counts_as_empty(self, store):
        store.set_feedback(1, "hello")
        store.set_feedback(1, "   \n")
        assert not store.has_pending(1)

    def test_empty_feedback_on_unknown_id_is_noop(self, store):
        store.set_feedback(7, "")
        assert store.pending_ids() == []

    def test_empty_feedback_keeps_reminder_edit(self, store):
        store.set_reminder(1, REMINDER)
        store.set_feedback(1, "hello")
        store.set_feedback(1, "")
        edit = store.get(1)
        assert edit.feedback_text is None
        assert edit.reminder_datetime == REMINDER


class TestReminder:
    def test_set_reminder_merges_with_feedback(self, store):
        store.set_feedback(1, "hello")
        store.set_reminder(1, REMINDER)
        edit = store.get(1)
        assert edit.feedback_text == "hello"
        assert edit.reminder_datetime == REMINDER

    def test_feedback_after_reminder_keeps_reminder(self, store):
        store.set_reminder(1, REMINDER)
        store.set_feedback(1, "later")
        assert store.reminder_for(1) == REMINDER

    def test_reminder_overwrites_previous_pick(self, store):
        store.set_reminder(1, REMINDER)
        newer = datetime(2024, 3, 1, 9, 0)
        store.set_reminder(1, newer)
        assert store.reminder_for(1) == newer
        assert len(store) == 1


class TestClearing:
    def test_clear_removes_only_that_id(self, store):
        store.set_feedback(1, "a")
        store.set_feedback(2, "b")
        store.clear(1)
        assert store.pending_ids() == [2]

    def test_clear_unknown_id_is_noop(self, store):
        store.clear(99)
        assert len(store) == 0

    def test_clear_all(self, store):
        store.set_feedback(1, "a")
        store.set_reminder(2, REMINDER)
        store.clear_all()
        assert len(store) == 0

    def test_discard_fields_drops_entry_when_empty(self, store):
        store.set_feedback(1, "a")
        store.set_reminder(1, REMINDER)
        store.discard_fields(1, feedback=True)
        assert store.get(1).reminder_datetime == REMINDER
        store.discard_fields(1, reminder=True)
        assert not store.has_pending(1)


class TestReadsDoNotMutate:
    def test_get_returns_copy(self, store):
        store.set_feedback(1, "original")
        edit = store.get(1)
        edit.feedback_text = "tampered"
        assert store.feedback_for(1) == "original"

    def test_get_missing_does_not_create_entry(self, store):
        assert store.get(5) is None
        assert store.feedback_for(5) is None
        assert store.reminder_for(5) is None
        assert len(store) == 0

    def test_pending_ids_is_a_copy(self, store):
        store.set_feedback(1, "a")
        ids = store.pending_ids()
        ids.append(2)
        assert store.pending_ids() == [1]
