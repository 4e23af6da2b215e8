"""
Test helpers for the Tudor Life test suite.

Provides builders for characters and families with fixed, predictable
stats, and a dice patcher that forces named random draws.
"""

from contextlib import ExitStack, contextmanager
from typing import Any, Callable, Optional
from unittest.mock import patch

from src.data_models import (
    Character,
    Coworker,
    DiceRoller,
    Family,
    Gender,
    Job,
    NPCStats,
    Parent,
    SocialClass,
    YearLog,
)


# =============================================================================
# BUILDERS
# =============================================================================


def make_parent(name: str, age: int, relationship: int, vitality: int = 80, alive: bool = True) -> Parent:
    return Parent(
        name=name,
        age=age,
        relationship=relationship,
        occupation="Labourer",
        alive=alive,
        stats=NPCStats(vitality=vitality, faith=50, strength=50, honor=30, money=10),
    )


def make_family(father_age: int = 30, mother_age: int = 25) -> Family:
    return Family(
        father=make_parent("John", father_age, 75),
        mother=make_parent("Agnes", mother_age, 85),
        housing="a wattle-and-daub cottage",
    )


def make_character(
    age: int = 8,
    social_class: SocialClass = SocialClass.PEASANT,
    gender: Gender = Gender.MALE,
    year: Optional[int] = None,
    **stats: Any,
) -> Character:
    """
    Build a character with a living family and no randomness involved.

    Extra keyword arguments set Character fields directly (health, money...).
    The default year is chosen so no historical event falls on the next turn.
    """
    year = year if year is not None else 1520
    character = Character(
        name="Thomas",
        surname="Smith",
        gender=gender,
        social_class=social_class,
        family=make_family(),
        age=age,
        health=80,
        location="England",
        birth_year=year - age,
        current_year=year,
        era="tudor",
    )
    for key, value in stats.items():
        setattr(character, key, value)
    character.event_log.append(YearLog(year=year))
    return character


def make_job(vitality_impact: int = -5, coworkers: int = 2, relationship: int = 50, **impacts: Any) -> Job:
    return Job(
        id="field_plower",
        title="Field Plower",
        description="Ploughing the lord's fields.",
        income=impacts.pop("income", 5),
        vitality_impact=vitality_impact,
        coworkers=[
            Coworker(id=f"coworker_{i}", name=f"Will {i}", role="Old Hand", relationship=relationship)
            for i in range(coworkers)
        ],
        **impacts,
    )


# =============================================================================
# DICE PATCHING
# =============================================================================


@contextmanager
def forced_dice(
    chances: Optional[dict[str, bool]] = None,
    ranges: Optional[dict[str, int]] = None,
    default_chance: Optional[bool] = None,
):
    """
    Force DiceRoller.chance and DiceRoller.roll_range results by reason.

    A reason not listed falls through to the real roller, unless
    `default_chance` is given, in which case every unlisted chance returns it.
    """
    chances = chances or {}
    ranges = ranges or {}
    real_chance: Callable = DiceRoller.chance
    real_range: Callable = DiceRoller.roll_range

    def fake_chance(probability, reason=""):
        if reason in chances:
            return chances[reason]
        if default_chance is not None:
            return default_chance
        return real_chance(probability, reason)

    def fake_range(low, high, reason=""):
        if reason in ranges:
            return ranges[reason]
        return real_range(low, high, reason)

    with ExitStack() as stack:
        stack.enter_context(patch.object(DiceRoller, "chance", side_effect=fake_chance))
        stack.enter_context(patch.object(DiceRoller, "roll_range", side_effect=fake_range))
        yield
