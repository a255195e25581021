"""Release Proposal State Machine Guard.

Uses python-statemachine to enforce legal transitions for multisig wallet
release proposals. Whatever the API does, an illegal transition
(e.g., EXECUTED -> REJECTED) raises TransitionNotAllowed.

The machine is instantiated per-proposal from the stored status and is
fired before the stored status is updated. Confirmation counting and owner
membership are checked by the wallet service; the machine only guards order.

Transition table:
    PROPOSED             -> PARTIALLY_CONFIRMED  (confirm)
    PARTIALLY_CONFIRMED  -> PARTIALLY_CONFIRMED  (confirm)
    PARTIALLY_CONFIRMED  -> EXECUTED             (execute)
    PROPOSED             -> REJECTED             (reject)
    PARTIALLY_CONFIRMED  -> REJECTED             (reject)
"""

from __future__ import annotations

from statemachine import State, StateMachine


class ProposalStateMachine(StateMachine):
    """State machine that guards release proposal transitions.

    Usage:
        sm = ProposalStateMachine(current_status="PROPOSED")
        sm.confirm()   # transitions to PARTIALLY_CONFIRMED
        sm.status      # "PARTIALLY_CONFIRMED"
    """

    # --- States ---
    PROPOSED = State("PROPOSED", initial=True)
    PARTIALLY_CONFIRMED = State("PARTIALLY_CONFIRMED")
    EXECUTED = State("EXECUTED", final=True)
    REJECTED = State("REJECTED", final=True)

    # --- Events / Transitions ---
    confirm = PROPOSED.to(PARTIALLY_CONFIRMED) | PARTIALLY_CONFIRMED.to.itself()
    execute = PARTIALLY_CONFIRMED.to(EXECUTED)
    reject = PROPOSED.to(REJECTED) | PARTIALLY_CONFIRMED.to(REJECTED)

    def __init__(self, current_status: str = "PROPOSED") -> None:
        """Initialize the state machine at a given status.

        Args:
            current_status: The current ProposalStatus value.
        """
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value as a string (matches ProposalStatus)."""
        return str(self.current_state_value)

    @property
    def is_terminal(self) -> bool:
        return any(s.final for s in self.states if s.value == self.current_state_value)

    def get_allowed_events(self) -> list[str]:
        """Return the event names that can fire from the current state."""
        return [event.id for event in self.allowed_events]
