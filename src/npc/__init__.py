"""
NPC generation and aging for the Tudor Life simulation.

Provides the new-life generator (character, family, siblings, classmates,
coworkers) and the yearly family aging routine.
"""

from src.npc.npc_generator import (
    LifeGenerator,
    NewLifeResult,
    SOCIAL_CLASS_WEIGHTS,
)
from src.npc.family_aging import (
    age_family,
    age_stats,
)

__all__ = [
    "LifeGenerator",
    "NewLifeResult",
    "SOCIAL_CLASS_WEIGHTS",
    "age_family",
    "age_stats",
]
