"""
Yearly aging of the character's family.

Every living parent and sibling gets one year older; their stat bundles
drift and decay, and anyone whose vitality runs out or who passes 100
dies. Dead parents stay on the record, frozen; dead siblings are removed.
"""

import logging

from src.data_models import (
    ADULT_AGE,
    Character,
    DiceRoller,
    Gender,
    NPCStats,
    SocialClass,
    clamp_stat,
)


logger = logging.getLogger(__name__)


MAX_AGE = 100
EXPENSE_CHANCE = 0.20

# Annual income for family members of working age
CLASS_INCOME: dict[SocialClass, int] = {
    SocialClass.NOBILITY: 100,
    SocialClass.GENTRY: 50,
    SocialClass.ARTISAN: 20,
    SocialClass.PEASANT: 5,
}


def age_stats(stats: NPCStats, age: int, social_class: SocialClass) -> None:
    """Apply one year of drift to an NPC stat bundle at its new age."""
    if age > 50:
        decay = DiceRoller.roll_range(5, 15, "vitality decay (old)")
    else:
        decay = DiceRoller.roll_range(0, 5, "vitality decay")
    stats.vitality = max(0, stats.vitality - decay)

    if age < 30:
        stats.strength = clamp_stat(stats.strength + DiceRoller.roll_range(0, 5, "strength growth"))
    elif age > 50:
        stats.strength = clamp_stat(stats.strength - DiceRoller.roll_range(2, 8, "strength decline"))

    stats.faith = clamp_stat(stats.faith + DiceRoller.roll_range(-2, 2, "faith drift"))
    stats.honor = clamp_stat(stats.honor + DiceRoller.roll_range(-2, 2, "honor drift"))

    if age >= ADULT_AGE:
        stats.money += CLASS_INCOME.get(social_class, CLASS_INCOME[SocialClass.PEASANT])
        if DiceRoller.chance(EXPENSE_CHANCE, "family expense"):
            expense = DiceRoller.roll_range(5, 20, "expense amount")
            stats.money = max(0, stats.money - expense)


def _has_died(stats, age: int) -> bool:
    if age > MAX_AGE:
        return True
    return stats is not None and stats.vitality <= 0


def age_family(character: Character) -> list[str]:
    """
    Age parents and siblings by one year.

    Returns:
        Death messages, in the order father, mother, siblings
    """
    messages: list[str] = []
    family = character.family

    for relation, parent in (("father", family.father), ("mother", family.mother)):
        if not parent.alive:
            continue
        parent.age += 1
        if parent.stats is not None:
            age_stats(parent.stats, parent.age, character.social_class)
        if _has_died(parent.stats, parent.age):
            parent.alive = False
            messages.append(f"Sorrow! Your {relation} {parent.name} died of natural causes aged {parent.age}.")
            logger.info(f"{relation} {parent.name} died aged {parent.age}")

    was_alive = family.is_alive
    family.refresh_alive()
    if was_alive and not family.is_alive:
        character.narrative_flags.is_orphan = True

    survivors = []
    for sibling in character.siblings:
        sibling.age += 1
        if sibling.stats is not None:
            age_stats(sibling.stats, sibling.age, character.social_class)
        if _has_died(sibling.stats, sibling.age):
            kin = "brother" if sibling.gender == Gender.MALE else "sister"
            messages.append(f"Sorrow! Your {kin} {sibling.name} died of natural causes aged {sibling.age}.")
            logger.info(f"Sibling {sibling.name} died aged {sibling.age}")
            continue
        survivors.append(sibling)
    character.siblings = survivors

    return messages
