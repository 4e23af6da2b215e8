"""
Interaction handlers for the Tudor Life simulation.

Each handler takes the character, a target and an action and returns an
InteractionResult. They are independent of the yearly turn cycle.
"""

from src.interactions.interaction_types import (
    FamilyAction,
    CoworkerAction,
    ClassmateAction,
    InteractionResult,
)
from src.interactions.strength_contest import (
    ContestTier,
    ContestResult,
    classify_margin,
    strength_contest,
)
from src.interactions.family_interactions import family_interaction
from src.interactions.coworker_interactions import coworker_interaction
from src.interactions.classmate_interactions import classmate_interaction
from src.interactions.activities import (
    available_activities,
    do_activity,
    do_work,
    eat_item,
    sell_item,
)
from src.interactions.job_actions import resign_job, take_job

__all__ = [
    "FamilyAction",
    "CoworkerAction",
    "ClassmateAction",
    "InteractionResult",
    "ContestTier",
    "ContestResult",
    "classify_margin",
    "strength_contest",
    "family_interaction",
    "coworker_interaction",
    "classmate_interaction",
    "available_activities",
    "do_activity",
    "do_work",
    "eat_item",
    "sell_item",
    "resign_job",
    "take_job",
]
