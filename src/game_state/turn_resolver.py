"""
Yearly turn resolution.

One call to resolve_turn() advances the character by a single year and runs
the fixed sequence of yearly steps:

1. age and calendar year advance, era re-derived
2. family aging
3. classmate cohort at age 6
4. adulthood milestone at 13
5. job impacts, with death by exhaustion short-circuiting the turn
6. coworker reactive events (at most one)
7. sibling birth
8. event selection

The resolver does not own the life-cycle state; it reports a TurnOutcome and
the controller performs the matching transition.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from src.data_models import ADULT_AGE, Character, DiceRoller, Gender, LogType, Sibling
from src.events.coworker_events import roll_coworker_event
from src.events.event_selector import select_event
from src.interactions.coworker_interactions import WORK_EASED_FLAG
from src.npc.family_aging import age_family
from src.npc.npc_generator import NEWBORN_SIBLING_RELATIONSHIP, LifeGenerator
from src.observability.run_log import get_run_log
from src.tables.activity_tables import WORK_MIN_AGE
from src.tables.era_tables import did_era_change, get_current_era
from src.tables.table_types import EventKind, GameEvent


logger = logging.getLogger(__name__)


SIBLING_BIRTH_CHANCE = 0.15
MOTHER_MAX_BIRTH_AGE = 45
CLASSMATE_AGE = WORK_MIN_AGE


class TurnOutcome(str, Enum):
    """What the year ended on, and therefore what the player must do next."""
    EVENT_PRESENTED = "event_presented"
    COWORKER_EVENT = "coworker_event"
    SIBLING_BIRTH = "sibling_birth"
    DEATH = "death"
    BLOCKED = "blocked"


@dataclass
class TurnResult:
    """
    Result of one yearly turn.

    Attributes:
        outcome: Which branch ended the turn
        messages: Narrative lines produced during the turn, in order
        event: The event awaiting a choice, for EVENT_PRESENTED and COWORKER_EVENT
        new_sibling: The newborn, for SIBLING_BIRTH
        death_cause: Why the character died, for DEATH
    """
    outcome: TurnOutcome
    messages: list[str] = field(default_factory=list)
    event: Optional[GameEvent] = None
    new_sibling: Optional[Sibling] = None
    death_cause: str = ""

    @property
    def accepted(self) -> bool:
        return self.outcome != TurnOutcome.BLOCKED

    @property
    def died(self) -> bool:
        return self.outcome == TurnOutcome.DEATH


def draw_event(character: Character) -> GameEvent:
    """
    Select this year's event and mark a childhood event as used.

    The used-set update happens here, at presentation time, so a childhood
    event is never offered twice in one life.
    """
    event = select_event(character)
    if event.kind == EventKind.CHILDHOOD:
        character.used_childhood_events.add(event.id)
    return event


def _advance_calendar(character: Character, messages: list[str]) -> None:
    old_year = character.current_year
    character.age += 1
    character.current_year += 1

    new_era = did_era_change(character.location, old_year, character.current_year)
    era = get_current_era(character.location, character.current_year)
    if era is not None:
        character.era = era.id
    if new_era is not None:
        messages.append(f"A new age begins: the {new_era.name}. {new_era.description}")
        character.add_year_entry(f"The {new_era.name} began.", LogType.NEUTRAL)
        logger.info(f"Era changed to {new_era.id} in {character.current_year}")


def _apply_job(character: Character, messages: list[str]) -> bool:
    """
    Apply a year of the current job. Returns True if the work killed the
    character.
    """
    job = character.current_job
    vitality = job.vitality_impact
    if character.narrative_flags.extra.pop(WORK_EASED_FLAG, False) and vitality < 0:
        vitality = -(-vitality // 2)
        messages.append("A coworker shared your load this year.")

    if character.health + vitality <= 0:
        character.health = 0
        return True

    character.adjust_stat("money", job.income)
    character.adjust_stat("health", vitality)
    character.adjust_stat("strength", job.strength_impact)
    character.adjust_stat("honor", job.honor_impact)
    character.adjust_stat("faith", job.faith_impact)
    messages.append(f"You worked as {job.title} and earned {job.income} coins.")
    return False


def resolve_turn(
    character: Character,
    generator: Optional[LifeGenerator] = None,
    force_birth: Optional[bool] = None,
) -> TurnResult:
    """
    Advance the character by one year.

    Args:
        character: The character to advance
        generator: NPC generator for classmates and newborn siblings
        force_birth: Optional override of the sibling birth roll for testing

    Returns:
        TurnResult describing how the year ended
    """
    generator = generator or LifeGenerator()
    messages: list[str] = []

    _advance_calendar(character, messages)
    messages.append(f"Year {character.current_year}: you are now {character.age} years old.")

    for line in age_family(character):
        messages.append(line)
        character.add_year_entry(line, LogType.FAIL)

    if character.age == CLASSMATE_AGE and not character.classmates:
        character.classmates = generator.generate_classmates(character.social_class)
        names = ", ".join(c.name for c in character.classmates)
        messages.append(f"You have started to play with the other children: {names}.")

    if character.age == ADULT_AGE:
        messages.append("You are now considered an adult. Childhood is over.")
        character.add_year_entry("Came of age.", LogType.NEUTRAL)

    if character.current_job is not None and _apply_job(character, messages):
        cause = f"You worked yourself to death as {character.current_job.title}."
        messages.append(cause)
        logger.info(f"{character.full_name} died of exhaustion aged {character.age}")
        return _finish(character, TurnResult(TurnOutcome.DEATH, messages, death_cause=cause))

    coworker_event = roll_coworker_event(character)
    if coworker_event is not None:
        return _finish(character, TurnResult(TurnOutcome.COWORKER_EVENT, messages, event=coworker_event))

    mother = character.family.mother
    if mother.alive and mother.age < MOTHER_MAX_BIRTH_AGE:
        born = force_birth if force_birth is not None else DiceRoller.chance(SIBLING_BIRTH_CHANCE, "sibling birth")
        if born:
            sibling = generator.generate_sibling(
                character.social_class, relationship=NEWBORN_SIBLING_RELATIONSHIP
            )
            character.siblings.append(sibling)
            kin = "brother" if sibling.gender == Gender.MALE else "sister"
            line = f"Joy! Your mother gave birth to a {kin}, {sibling.name}."
            messages.append(line)
            character.add_year_entry(line, LogType.SUCCESS)
            return _finish(character, TurnResult(TurnOutcome.SIBLING_BIRTH, messages, new_sibling=sibling))

    event = draw_event(character)
    return _finish(character, TurnResult(TurnOutcome.EVENT_PRESENTED, messages, event=event))


def _finish(character: Character, result: TurnResult) -> TurnResult:
    get_run_log().log_turn(
        age=character.age,
        year=character.current_year,
        outcome=result.outcome.value,
        event_id=result.event.id if result.event else "",
        context={"health": character.health, "money": character.money},
    )
    logger.debug(f"Turn {character.current_year} ended with {result.outcome.value}")
    return result
