"""
Effect application.

Applies the declared ChoiceEffect of a picked choice to the character:
clamped stat deltas first, then traits, narrative flags and sibling spawns.
Death, whether declared or from health hitting exactly 0, stops any further
processing of that choice.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.data_models import Character, LogType, Sibling
from src.npc.npc_generator import LifeGenerator
from src.tables.table_types import STAT_LABELS, ChoiceEffect, EventChoice, GameEvent


logger = logging.getLogger(__name__)


# Siblings announced by an event arrive already doted on
EVENT_SIBLING_RELATIONSHIP = 100


@dataclass
class ApplyResult:
    """Outcome of applying one choice."""
    messages: list[str] = field(default_factory=list)
    deltas: dict[str, int] = field(default_factory=dict)
    died: bool = False
    death_cause: str = ""
    added_trait: Optional[str] = None
    new_sibling: Optional[Sibling] = None
    relationship_delta: int = 0
    log_type: LogType = LogType.NEUTRAL


def format_delta(stat: str, value: int) -> str:
    return f"  {value:+d} {STAT_LABELS.get(stat, stat.title())}"


def apply_deltas(character: Character, deltas: dict[str, int], result: ApplyResult) -> None:
    """
    Apply stat deltas with clamping, recording the change actually made.

    Zero deltas are skipped.
    """
    for stat, delta in deltas.items():
        if not delta:
            continue
        before = getattr(character, stat)
        after = character.adjust_stat(stat, delta)
        result.deltas[stat] = result.deltas.get(stat, 0) + (after - before)
        result.messages.append(format_delta(stat, delta))


def classify(deltas: dict[str, int]) -> LogType:
    total = sum(deltas.values())
    if total > 0:
        return LogType.SUCCESS
    if total < 0:
        return LogType.FAIL
    return LogType.NEUTRAL


def apply_choice(
    character: Character,
    choice: EventChoice,
    event: Optional[GameEvent] = None,
    generator: Optional[LifeGenerator] = None,
) -> ApplyResult:
    """
    Apply a choice's effect to the character.

    Args:
        character: The character to mutate
        choice: The picked choice
        event: The event the choice belongs to, used for the danger flag
        generator: Generator for spawned siblings

    Returns:
        ApplyResult; `died` is set when the choice killed the character
    """
    effect: ChoiceEffect = choice.effect
    result = ApplyResult()
    if choice.message:
        result.messages.append(choice.message)

    if effect.death:
        result.died = True
        result.death_cause = choice.message or choice.label
        result.log_type = LogType.FAIL
        logger.info(f"Choice {choice.id} is fatal")
        return result

    apply_deltas(character, effect.deltas(), result)
    result.log_type = classify(effect.deltas())

    if character.health == 0:
        result.died = True
        result.death_cause = choice.message or choice.label
        logger.info(f"Choice {choice.id} reduced health to 0")
        return result

    if effect.add_trait and effect.add_trait not in character.traits:
        character.traits.append(effect.add_trait)
        result.added_trait = effect.add_trait
        result.messages.append(f"  New trait: {effect.add_trait}")

    if effect.set_flags:
        character.narrative_flags.merge(effect.set_flags)
    if event is not None and event.category == "danger":
        character.narrative_flags.last_major_event = event.id

    if effect.add_sibling:
        generator = generator or LifeGenerator()
        sibling = generator.generate_sibling(
            character.social_class,
            relationship=EVENT_SIBLING_RELATIONSHIP,
            with_stats=False,
        )
        character.siblings.append(sibling)
        result.new_sibling = sibling
        result.messages.append(f"  New sibling: {sibling.name}")

    return result
