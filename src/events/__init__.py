"""
Event selection and resolution for the Tudor Life simulation.

Provides the priority-ordered event selector, the effect applicator for
picked choices, and coworker reactive events.
"""

from src.events.event_selector import (
    select_event,
    select_era_event,
)
from src.events.effect_applicator import (
    ApplyResult,
    apply_choice,
    apply_deltas,
)
from src.events.coworker_events import (
    COWORKER_EVENT_CHANCE,
    CoworkerEventType,
    build_coworker_event,
    generate_coworker_event,
    roll_coworker_event,
    resolve_coworker_event,
)

__all__ = [
    "select_event",
    "select_era_event",
    "ApplyResult",
    "apply_choice",
    "apply_deltas",
    "COWORKER_EVENT_CHANCE",
    "CoworkerEventType",
    "build_coworker_event",
    "generate_coworker_event",
    "roll_coworker_event",
    "resolve_coworker_event",
]
