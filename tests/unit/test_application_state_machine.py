"""Unit tests for application status transitions."""

import pytest

from callboard.concepts.application_state import can_transition, validate_transition
from callboard.exceptions import InvalidStatusTransitionError, NotAllowedError


class TestApplicationCanTransition:
    def test_pending_to_audition(self):
        assert can_transition("pending", "audition") is True

    def test_pending_to_approved(self):
        assert can_transition("pending", "approved") is True

    def test_pending_to_rejected(self):
        assert can_transition("pending", "rejected") is True

    def test_pending_to_withdrawn(self):
        assert can_transition("pending", "withdrawn") is True

    def test_audition_to_final_decisions(self):
        for target in ["approved", "rejected", "withdrawn"]:
            assert can_transition("audition", target) is True

    def test_audition_not_back_to_pending(self):
        assert can_transition("audition", "pending") is False

    def test_terminal_states(self):
        for state in ["approved", "rejected", "withdrawn"]:
            for target in ["pending", "audition", "approved", "rejected", "withdrawn"]:
                assert can_transition(state, target) is False

    def test_unknown_state(self):
        assert can_transition("shortlisted", "approved") is False


class TestApplicationValidateTransition:
    def test_valid_passes(self):
        validate_transition("pending", "audition")

    def test_invalid_raises(self):
        with pytest.raises(InvalidStatusTransitionError):
            validate_transition("withdrawn", "approved")

    def test_invalid_is_not_allowed_kind(self):
        with pytest.raises(NotAllowedError) as exc_info:
            validate_transition("approved", "rejected")
        assert exc_info.value.kind == "not_allowed"
