"""Unit tests for the status workflow."""

import pytest

from scholarquest.errors import InvalidTransitionError
from scholarquest.models import PaperRecord, PaperResult, PaperStatus, Tier
from scholarquest.workflow import (
    apply_transition,
    can_transition,
    result_for_status,
    valid_transitions,
)

# Mark all tests in this module as unit tests
pytestmark = pytest.mark.unit


def make_record(status: PaperStatus, result: PaperResult = PaperResult.PENDING) -> PaperRecord:
    """Factory to create a PaperRecord for testing."""
    return PaperRecord(
        id="abc123xyz",
        title="Test Paper",
        tier=Tier.B,
        status=status,
        result=result,
        created_at=1700000000000,
    )


class TestTransitionTable:
    """Tests for valid_transitions and can_transition."""

    def test_writing_can_submit_or_accept(self):
        assert valid_transitions(PaperStatus.WRITING) == [PaperStatus.SUBMITTED, PaperStatus.ACCEPTED]

    def test_submitted_can_reject_or_accept(self):
        assert set(valid_transitions(PaperStatus.SUBMITTED)) == {
            PaperStatus.REJECTED,
            PaperStatus.ACCEPTED,
        }

    def test_target_can_only_accept(self):
        assert valid_transitions("Target") == [PaperStatus.ACCEPTED]

    @pytest.mark.parametrize("status", [PaperStatus.ACCEPTED, PaperStatus.REJECTED])
    def test_terminal_statuses(self, status):
        assert valid_transitions(status) == []

    def test_cannot_reject_before_submitting(self):
        assert not can_transition(PaperStatus.WRITING, PaperStatus.REJECTED)
        assert not can_transition(PaperStatus.TARGET, PaperStatus.SUBMITTED)


class TestResultForStatus:
    def test_accept_sets_accepted(self):
        assert result_for_status(PaperStatus.ACCEPTED, PaperResult.REVISION) == PaperResult.ACCEPTED

    def test_reject_sets_rejected(self):
        assert result_for_status(PaperStatus.REJECTED, PaperResult.PENDING) == PaperResult.REJECTED

    def test_other_statuses_keep_result(self):
        assert result_for_status(PaperStatus.SUBMITTED, PaperResult.REVISION) == PaperResult.REVISION


class TestApplyTransition:
    """Tests for apply_transition function."""

    def test_submit_keeps_result(self):
        record = make_record(PaperStatus.WRITING)
        updated = apply_transition(record, PaperStatus.SUBMITTED)
        assert updated.status == PaperStatus.SUBMITTED
        assert updated.result == PaperResult.PENDING

    def test_accept_syncs_result(self):
        updated = apply_transition(make_record(PaperStatus.SUBMITTED), "Accepted")
        assert updated.status == PaperStatus.ACCEPTED
        assert updated.result == PaperResult.ACCEPTED

    def test_reject_syncs_result(self):
        updated = apply_transition(make_record(PaperStatus.SUBMITTED), PaperStatus.REJECTED)
        assert updated.result == PaperResult.REJECTED

    def test_input_record_unchanged(self):
        record = make_record(PaperStatus.WRITING)
        apply_transition(record, PaperStatus.ACCEPTED)
        assert record.status == PaperStatus.WRITING
        assert record.result == PaperResult.PENDING

    def test_invalid_transition_raises(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            apply_transition(make_record(PaperStatus.ACCEPTED), PaperStatus.WRITING)
        assert exc_info.value.from_status == "Accepted"
        assert exc_info.value.to_status == "Writing"

    def test_force_bypasses_table(self):
        updated = apply_transition(make_record(PaperStatus.REJECTED, PaperResult.REJECTED), PaperStatus.ACCEPTED, force=True)
        assert updated.status == PaperStatus.ACCEPTED
        assert updated.result == PaperResult.ACCEPTED

    def test_same_status_refused_even_with_force(self):
        with pytest.raises(InvalidTransitionError):
            apply_transition(make_record(PaperStatus.WRITING), PaperStatus.WRITING, force=True)
