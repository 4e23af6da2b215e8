"""
Activities, crimes, childhood work and inventory actions.

Activities and crimes may each be done once per calendar year; choosing the
cancel option does not use up the year. Crimes stand in a skill roll for
the reflex games of the village market and the lord's forest.
"""

import logging
from typing import Optional

from src.data_models import (
    Character,
    DiceRoller,
    InventoryItem,
    ItemType,
    LogType,
    SocialClass,
    new_id,
)
from src.interactions.interaction_types import (
    InteractionResult,
    apply_stat_deltas,
    fail,
    record,
)
from src.npc.npc_generator import LifeGenerator
from src.tables.activity_tables import (
    NEW_CLASSMATE_CHANCE,
    PICKPOCKET_EASY_CHANCE,
    PICKPOCKET_EASY_REWARD,
    PICKPOCKET_HARD_CHANCE,
    PICKPOCKET_HARD_REWARD,
    PICKPOCKET_PUNISHMENTS,
    POACHING_CHANCE,
    POACHING_PENALTY,
    VENISON_VALUE,
    WORK_CHORES,
    WORK_MIN_AGE,
    Activity,
    get_activities_for,
    get_activity,
)


logger = logging.getLogger(__name__)


EAT_HEALTH = 30
NEW_CLASSMATE_RELATIONSHIP = 25


# =============================================================================
# ACTIVITIES AND CRIMES
# =============================================================================


def do_activity(character: Character, activity_id: str, choice_index: int) -> InteractionResult:
    """
    Perform an activity choice.

    Args:
        character: The acting character
        activity_id: Id from the activity table
        choice_index: Zero-based index into the activity's choices
    """
    activity = get_activity(activity_id)
    if activity is None or not activity.fits_class(character.social_class):
        return fail("That is not something you can do.", activity_id)
    if character.activity_history.get(activity.id) == character.current_year:
        return fail("You have already done that this year.", activity_id)
    if not 0 <= choice_index < len(activity.choices):
        return fail("That is not one of the options.", activity_id)

    picked = activity.choices[choice_index]
    if picked.is_cancel:
        return fail(f"You thought better of it. ({picked.label})", activity_id)

    if activity.id == "pickpocket":
        result = _pickpocket(character, hard=choice_index == 1)
    elif activity.id == "poach":
        result = _poach(character)
    else:
        result = InteractionResult(
            success=True,
            message=picked.log_text or f"{activity.title}: {picked.label}",
            log_type=LogType.SUCCESS,
        )
        result.deltas = apply_stat_deltas(character, picked.effect.deltas())

    character.activity_history[activity.id] = character.current_year
    result.target_id = activity.id
    result.action = picked.label
    return record(character, result)


def _pickpocket(character: Character, hard: bool) -> InteractionResult:
    odds = PICKPOCKET_HARD_CHANCE if hard else PICKPOCKET_EASY_CHANCE
    if DiceRoller.chance(odds, "pickpocket (hard)" if hard else "pickpocket (easy)"):
        if hard:
            amount = DiceRoller.roll_range(*PICKPOCKET_HARD_REWARD, "merchant's purse")
            message = f"Surgeon's hands! You cut the velvet purse and found {amount} gold coins."
        else:
            amount = PICKPOCKET_EASY_REWARD
            message = "The drunkard never noticed. You lifted a few copper coins from his purse."
        return InteractionResult(
            success=True,
            message=message,
            log_type=LogType.SUCCESS,
            deltas=apply_stat_deltas(character, {"money": amount}),
        )

    character.crime_strikes += 1
    index = min(character.crime_strikes, len(PICKPOCKET_PUNISHMENTS)) - 1
    health_penalty, honor_penalty, message = PICKPOCKET_PUNISHMENTS[index]
    logger.info(f"Pickpocket caught, strike {character.crime_strikes}")
    return InteractionResult(
        success=False,
        message=message,
        log_type=LogType.FAIL,
        deltas=apply_stat_deltas(character, {"health": -health_penalty, "honor": -honor_penalty}),
    )


def _poach(character: Character) -> InteractionResult:
    if DiceRoller.chance(POACHING_CHANCE, "poaching"):
        item = InventoryItem(id=new_id("venison"), name="Venison", item_type=ItemType.FOOD, value=VENISON_VALUE)
        character.inventory.append(item)
        return InteractionResult(
            success=True,
            message="You skinned the deer and slipped away unseen. Meat for the winter!",
            log_type=LogType.SUCCESS,
            item=item,
        )
    health_penalty, honor_penalty = POACHING_PENALTY
    return InteractionResult(
        success=False,
        message="The verderer saw you! You ran but were caught. The price was steep.",
        log_type=LogType.FAIL,
        deltas=apply_stat_deltas(character, {"health": -health_penalty, "honor": -honor_penalty}),
    )


def available_activities(character: Character) -> list[Activity]:
    """Activities open to the character and not yet done this year."""
    return [
        activity for activity in get_activities_for(character.social_class)
        if character.activity_history.get(activity.id) != character.current_year
    ]


# =============================================================================
# CHILDHOOD WORK
# =============================================================================


def do_work(character: Character, generator: Optional[LifeGenerator] = None) -> InteractionResult:
    """Do the class chore for a working child, possibly meeting a new classmate."""
    if character.age < WORK_MIN_AGE:
        return fail("You are too young to work.")

    chore = WORK_CHORES.get(character.social_class, WORK_CHORES[SocialClass.PEASANT])
    deltas = chore.effect.deltas()
    if chore.coin_chance and DiceRoller.chance(chore.coin_chance, "coin for chores"):
        deltas["money"] = 1

    result = InteractionResult(
        success=True,
        message=chore.log_text,
        log_type=LogType.NEUTRAL,
        target_id="work",
        action=chore.title,
    )
    result.deltas = apply_stat_deltas(character, deltas)

    if character.classmates and DiceRoller.chance(NEW_CLASSMATE_CHANCE, "meet new classmate"):
        generator = generator or LifeGenerator()
        classmate = generator.generate_classmate(character.social_class)
        classmate.relationship = NEW_CLASSMATE_RELATIONSHIP
        character.classmates.append(classmate)
        result.message += f" You met {classmate.name}!"
    return record(character, result)


# =============================================================================
# INVENTORY
# =============================================================================


def eat_item(character: Character, item_id: str) -> InteractionResult:
    item = character.get_item(item_id)
    if item is None:
        return fail("You have no such item.", item_id)
    if item.item_type != ItemType.FOOD:
        return fail(f"You cannot eat the {item.name}.", item_id)

    character.inventory = [i for i in character.inventory if i.id != item.id]
    result = InteractionResult(
        success=True,
        message=f"You ate the {item.name}. You feel stronger.",
        log_type=LogType.SUCCESS,
        target_id=item_id,
        action="eat",
    )
    result.deltas = apply_stat_deltas(character, {"health": EAT_HEALTH})
    return record(character, result)


def sell_item(character: Character, item_id: str) -> InteractionResult:
    item = character.get_item(item_id)
    if item is None:
        return fail("You have no such item.", item_id)

    character.inventory = [i for i in character.inventory if i.id != item.id]
    result = InteractionResult(
        success=True,
        message=f"You sold the {item.name} for {item.value} coins.",
        log_type=LogType.SUCCESS,
        target_id=item_id,
        action="sell",
        item=item,
    )
    result.deltas = apply_stat_deltas(character, {"money": item.value})
    return record(character, result)
