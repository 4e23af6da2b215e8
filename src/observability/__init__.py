"""
Observability for the Tudor Life simulation.

Provides a run log of every random draw, lifecycle transition, resolved
turn, applied choice and interaction.
"""

from src.observability.run_log import (
    RunLog,
    LogEvent,
    EventType,
    RollEvent,
    TransitionEvent,
    TurnEvent,
    ChoiceEvent,
    InteractionEvent,
    get_run_log,
    reset_run_log,
)

__all__ = [
    "RunLog",
    "LogEvent",
    "EventType",
    "RollEvent",
    "TransitionEvent",
    "TurnEvent",
    "ChoiceEvent",
    "InteractionEvent",
    "get_run_log",
    "reset_run_log",
]
