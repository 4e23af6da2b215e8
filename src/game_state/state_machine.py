"""
Life-cycle state machine for the Tudor Life simulation.

Only ONE state may be active at any time. Advancing a year is legal only from
IDLE; every other state is waiting on the player to choose or acknowledge.

All transitions follow strict validation rules and are logged for debugging.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from src.data_models import TransitionLog


class LifeState(str, Enum):
    """
    Life-cycle states.

    IDLE is the only state from which a year may be advanced. The three
    AWAITING states block until the pending event, birth or death has been
    dealt with.
    """

    IDLE = "idle"
    AWAITING_CHOICE = "awaiting_choice"
    AWAITING_BIRTH_ACK = "awaiting_birth_ack"
    AWAITING_DEATH_ACK = "awaiting_death_ack"


@dataclass
class StateTransition:
    """Defines a valid state transition."""

    from_state: LifeState
    to_state: LifeState
    trigger: str
    description: str = ""

    def __hash__(self) -> int:
        return hash((self.from_state, self.to_state, self.trigger))


VALID_TRANSITIONS: list[StateTransition] = [
    # Idle transitions
    StateTransition(
        LifeState.IDLE,
        LifeState.AWAITING_CHOICE,
        "event_presented",
        "An event was drawn and awaits a choice",
    ),
    StateTransition(
        LifeState.IDLE,
        LifeState.AWAITING_BIRTH_ACK,
        "birth_announced",
        "A sibling was born and the news awaits acknowledgement",
    ),
    StateTransition(
        LifeState.IDLE,
        LifeState.AWAITING_DEATH_ACK,
        "character_died",
        "The character died during the turn or an interaction",
    ),
    # Choice transitions
    StateTransition(
        LifeState.AWAITING_CHOICE,
        LifeState.IDLE,
        "choice_resolved",
        "The pending event was resolved",
    ),
    StateTransition(
        LifeState.AWAITING_CHOICE,
        LifeState.AWAITING_DEATH_ACK,
        "character_died",
        "The chosen option, or an interaction, killed the character",
    ),
    # Birth transitions
    StateTransition(
        LifeState.AWAITING_BIRTH_ACK,
        LifeState.IDLE,
        "birth_acknowledged",
        "The birth was acknowledged; event selection may run",
    ),
    StateTransition(
        LifeState.AWAITING_BIRTH_ACK,
        LifeState.AWAITING_DEATH_ACK,
        "character_died",
        "An interaction killed the character before the birth was acknowledged",
    ),
    # Death transitions
    StateTransition(
        LifeState.AWAITING_DEATH_ACK,
        LifeState.IDLE,
        "death_acknowledged",
        "Death acknowledged; a new life begins",
    ),
]


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    pass


class StateMachine:
    """
    Manages life-cycle transitions with validation and history tracking.

    The state machine is authoritative - all state changes must go through
    this class to maintain integrity.

    Attributes:
        current_state: The current life-cycle state
        previous_state: The state before the current transition
        state_history: Complete history of all state transitions
    """

    def __init__(self, initial_state: LifeState = LifeState.IDLE):
        self._current_state: LifeState = initial_state
        self._previous_state: Optional[LifeState] = None
        self._state_history: list[TransitionLog] = []

        # Build transition lookup for fast validation
        self._valid_transitions: dict[tuple[LifeState, str], LifeState] = {}
        for transition in VALID_TRANSITIONS:
            key = (transition.from_state, transition.trigger)
            self._valid_transitions[key] = transition.to_state

        self._log_transition(
            from_state="INIT", to_state=initial_state.value, trigger="initialization"
        )

    @property
    def current_state(self) -> LifeState:
        return self._current_state

    @property
    def previous_state(self) -> Optional[LifeState]:
        return self._previous_state

    @property
    def state_history(self) -> list[TransitionLog]:
        """Get the complete state transition history."""
        return self._state_history.copy()

    @property
    def can_advance(self) -> bool:
        """A year may be advanced only from IDLE."""
        return self._current_state == LifeState.IDLE

    def can_transition(self, trigger: str) -> bool:
        key = (self._current_state, trigger)
        return key in self._valid_transitions

    def get_valid_triggers(self) -> list[str]:
        """
        Get all valid triggers from the current state.

        Returns:
            List of trigger names that can be used from current state
        """
        triggers = []
        for (state, trigger), _ in self._valid_transitions.items():
            if state == self._current_state:
                triggers.append(trigger)
        return triggers

    def transition(self, trigger: str, context: Optional[dict[str, Any]] = None) -> LifeState:
        """
        Attempt to transition to a new state.

        Args:
            trigger: The trigger event name
            context: Optional context data for the transition

        Returns:
            The new life-cycle state

        Raises:
            InvalidTransitionError: If the transition is not valid
        """
        context = context or {}

        key = (self._current_state, trigger)
        if key not in self._valid_transitions:
            valid_triggers = self.get_valid_triggers()
            raise InvalidTransitionError(
                f"Invalid transition: Cannot trigger '{trigger}' from state "
                f"'{self._current_state.value}'. Valid triggers: {valid_triggers}"
            )

        new_state = self._valid_transitions[key]
        old_state = self._current_state

        self._previous_state = old_state
        self._current_state = new_state

        self._log_transition(
            from_state=old_state.value, to_state=new_state.value, trigger=trigger, context=context
        )

        return new_state

    def reset(self, reason: str) -> None:
        """
        Return to IDLE without validation.

        Used when a fresh life is installed from outside the normal flow.
        """
        old_state = self._current_state
        self._previous_state = old_state
        self._current_state = LifeState.IDLE
        self._log_transition(
            from_state=old_state.value,
            to_state=LifeState.IDLE.value,
            trigger=f"RESET: {reason}",
            context={"forced": True},
        )

    def _log_transition(
        self, from_state: str, to_state: str, trigger: str, context: Optional[dict[str, Any]] = None
    ) -> None:
        log_entry = TransitionLog(
            timestamp=datetime.now(),
            from_state=from_state,
            to_state=to_state,
            trigger=trigger,
            context=context or {},
        )
        self._state_history.append(log_entry)

        from src.observability.run_log import get_run_log

        get_run_log().log_transition(
            from_state=from_state,
            to_state=to_state,
            trigger=trigger,
            context=context,
        )

    def get_state_info(self) -> dict[str, Any]:
        """Information about the current state for display/debugging."""
        return {
            "current_state": self._current_state.value,
            "previous_state": self._previous_state.value if self._previous_state else None,
            "valid_triggers": self.get_valid_triggers(),
            "transition_count": len(self._state_history),
        }

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current_state.value}, previous={self._previous_state})"
