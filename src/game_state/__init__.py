"""Life-cycle state management module."""

from src.game_state.state_machine import (
    InvalidTransitionError,
    LifeState,
    StateMachine,
    StateTransition,
    VALID_TRANSITIONS,
)
from src.game_state.turn_resolver import TurnOutcome, TurnResult, draw_event, resolve_turn
from src.game_state.life_controller import LifeController, NarrativeLine, StepResult

__all__ = [
    "InvalidTransitionError",
    "LifeState",
    "StateMachine",
    "StateTransition",
    "VALID_TRANSITIONS",
    "TurnOutcome",
    "TurnResult",
    "draw_event",
    "resolve_turn",
    "LifeController",
    "NarrativeLine",
    "StepResult",
]
