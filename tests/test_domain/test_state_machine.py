"""Tests for the ProposalStateMachine domain guard.

These tests verify that:
    1. Confirmation and execution follow the transition table.
    2. Rejection is possible from every open state.
    3. Terminal states accept no events.
"""

from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from escrow_registry.domain.state_machine import ProposalStateMachine


class TestHappyPath:
    def test_confirm_then_execute(self) -> None:
        sm = ProposalStateMachine("PROPOSED")
        sm.confirm()
        assert sm.status == "PARTIALLY_CONFIRMED"
        sm.confirm()
        assert sm.status == "PARTIALLY_CONFIRMED"
        sm.execute()
        assert sm.status == "EXECUTED"
        assert sm.is_terminal

    def test_default_is_proposed(self) -> None:
        assert ProposalStateMachine().status == "PROPOSED"

    def test_status_reads_without_deprecation_warnings(
        self, recwarn: pytest.WarningsRecorder
    ) -> None:
        sm = ProposalStateMachine("PARTIALLY_CONFIRMED")
        recwarn.clear()
        assert sm.status == "PARTIALLY_CONFIRMED"
        assert not sm.is_terminal
        assert not [w for w in recwarn if issubclass(w.category, DeprecationWarning)]


class TestRejection:
    @pytest.mark.parametrize("status", ["PROPOSED", "PARTIALLY_CONFIRMED"])
    def test_reject_open_proposal(self, status: str) -> None:
        sm = ProposalStateMachine(status)
        sm.reject()
        assert sm.status == "REJECTED"
        assert sm.is_terminal


class TestIllegalTransitions:
    def test_execute_without_confirmation(self) -> None:
        sm = ProposalStateMachine("PROPOSED")
        with pytest.raises(TransitionNotAllowed):
            sm.execute()

    @pytest.mark.parametrize("status", ["EXECUTED", "REJECTED"])
    def test_terminal_states(self, status: str) -> None:
        sm = ProposalStateMachine(status)
        assert sm.get_allowed_events() == []
        with pytest.raises(TransitionNotAllowed):
            sm.confirm()
        with pytest.raises(TransitionNotAllowed):
            sm.reject()


class TestAllowedEvents:
    def test_proposed(self) -> None:
        assert set(ProposalStateMachine("PROPOSED").get_allowed_events()) == {
            "confirm",
            "reject",
        }

    def test_partially_confirmed(self) -> None:
        assert set(ProposalStateMachine("PARTIALLY_CONFIRMED").get_allowed_events()) == {
            "confirm",
            "execute",
            "reject",
        }

    def test_invalid_status(self) -> None:
        with pytest.raises(ValueError, match="Unknown status"):
            ProposalStateMachine("PENDING")
