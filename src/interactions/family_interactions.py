"""
Family interactions.

Targets are "father", "mother" or a sibling id. Dead or unknown targets
refuse every action. Child-only actions are open below the age of 13.
"""

import logging
from typing import Optional, Union

from src.data_models import (
    Character,
    DiceRoller,
    Gender,
    InteractionRecord,
    InventoryItem,
    ItemType,
    LogType,
    Parent,
    Sibling,
    SocialClass,
    new_id,
)
from src.interactions.interaction_types import (
    FamilyAction,
    InteractionResult,
    apply_stat_deltas,
    fail,
    record,
    shift_relationship,
)


logger = logging.getLogger(__name__)


CHAT_MIN_AGE = 5
MONEY_MIN_AGE = 13
HELP_WORK_AGES = (6, 12)

CHAT_GAIN = (1, 5)

# Coins handed over when a relative agrees to give money
MONEY_AMOUNTS: dict[SocialClass, tuple[int, int]] = {
    SocialClass.NOBILITY: (20, 50),
    SocialClass.GENTRY: (10, 25),
    SocialClass.ARTISAN: (3, 10),
    SocialClass.PEASANT: (1, 3),
}

TOY_DENIAL_CHANCE = {SocialClass.PEASANT: 0.8}
DEFAULT_TOY_DENIAL_CHANCE = 0.2

TOYS: tuple[tuple[str, str], ...] = (
    ("wooden_doll", "Wooden Doll"),
    ("leather_ball", "Leather Ball"),
    ("stick_horse", "Hobby Horse"),
    ("spinning_top", "Spinning Top"),
    ("rag_doll", "Rag Doll"),
)
TOY_VALUE = 1

CHAT_MESSAGES = (
    "You talked with {name} about the harvest and the weather.",
    "{name} told you stories of when they were young.",
    "You and {name} laughed together by the fire.",
    "{name} listened patiently to your worries.",
)

TANTRUM_MESSAGES = (
    "You threw an enormous tantrum, kicking and wailing on the floor.",
    "You screamed and stamped your feet. {name} was mortified.",
    "You flung yourself down and cried until you were worn out.",
)

FamilyMember = Union[Parent, Sibling]


def resolve_family_target(character: Character, npc_id: str) -> Optional[FamilyMember]:
    """Find a living family member by id; None when missing or dead."""
    parent = character.family.get_parent(npc_id)
    if parent is not None:
        return parent if parent.alive else None
    return character.get_sibling(npc_id)


def _role_label(character: Character, npc_id: str, member: FamilyMember) -> str:
    if npc_id in ("father", "mother"):
        return f"your {npc_id}"
    if isinstance(member, Sibling):
        return "your brother" if member.gender == Gender.MALE else "your sister"
    return member.name


def family_interaction(character: Character, npc_id: str, action: FamilyAction) -> InteractionResult:
    """
    Perform one family action.

    Args:
        character: The acting character
        npc_id: "father", "mother" or a sibling id
        action: The FamilyAction to perform

    Returns:
        InteractionResult; failed results leave the character unchanged
    """
    action = FamilyAction(action)
    member = resolve_family_target(character, npc_id)
    if member is None:
        return record(character, fail("There is no one by that name to talk to.", npc_id, action.value))

    handlers = {
        FamilyAction.CHAT: _chat,
        FamilyAction.MONEY: _ask_money,
        FamilyAction.HELP_WORK: _help_work,
        FamilyAction.ASK_TOY: _ask_toy,
        FamilyAction.TANTRUM: _tantrum,
    }
    result = handlers[action](character, npc_id, member)
    result.target_id = npc_id
    result.action = action.value
    return record(character, result)


def _chat(character: Character, npc_id: str, member: FamilyMember) -> InteractionResult:
    if character.age < CHAT_MIN_AGE:
        return fail("You are too young to hold a conversation.")
    if character.has_interacted(npc_id, FamilyAction.CHAT.value):
        return fail("You have already talked with them this year.")

    gain = DiceRoller.roll_range(*CHAT_GAIN, "chat relationship gain")
    template = DiceRoller.choice(CHAT_MESSAGES, "chat message")
    change = shift_relationship(member, gain)
    character.interaction_history.append(
        InteractionRecord(year=character.current_year, npc_id=npc_id, action=FamilyAction.CHAT.value)
    )
    return InteractionResult(
        success=True,
        message=template.format(name=member.name),
        log_type=LogType.SUCCESS,
        relationship_delta=change,
    )


def _ask_money(character: Character, npc_id: str, member: FamilyMember) -> InteractionResult:
    if character.age < MONEY_MIN_AGE:
        return fail("You are too young to ask for money.")

    agree_chance = member.relationship / 100
    if not DiceRoller.chance(agree_chance, "family money request"):
        return InteractionResult(
            success=False,
            message=f"{member.name} refused to give you any money.",
            log_type=LogType.FAIL,
        )
    low, high = MONEY_AMOUNTS[character.social_class]
    amount = DiceRoller.roll_range(low, high, "family money amount")
    deltas = apply_stat_deltas(character, {"money": amount})
    return InteractionResult(
        success=True,
        message=f"{member.name} pressed {amount} coins into your hand.",
        log_type=LogType.SUCCESS,
        deltas=deltas,
    )


def _help_work(character: Character, npc_id: str, member: FamilyMember) -> InteractionResult:
    low, high = HELP_WORK_AGES
    if not low <= character.age <= high:
        return fail("Only children can help their parents at work.")
    if character.social_class not in (SocialClass.PEASANT, SocialClass.ARTISAN):
        return fail("Your family does not work with its hands.")
    if not isinstance(member, Parent):
        return fail("You can only help your parents at work.")

    deltas = apply_stat_deltas(character, {"health": -2})
    change = shift_relationship(member, 10)
    label = _role_label(character, npc_id, member)
    return InteractionResult(
        success=True,
        message=f"You helped {label} at work. It was tiring, but they were proud of you!",
        log_type=LogType.SUCCESS,
        deltas=deltas,
        relationship_delta=change,
    )


def _ask_toy(character: Character, npc_id: str, member: FamilyMember) -> InteractionResult:
    if not character.is_child:
        return fail("You are too old to beg for toys.")
    if not isinstance(member, Parent):
        return fail("Only your parents can buy you a toy.")

    label = _role_label(character, npc_id, member)
    denial = TOY_DENIAL_CHANCE.get(character.social_class, DEFAULT_TOY_DENIAL_CHANCE)
    if DiceRoller.chance(denial, "toy denied"):
        change = shift_relationship(member, -10)
        reason = "there is no money for such things" if character.social_class == SocialClass.PEASANT else "not this time"
        return InteractionResult(
            success=False,
            message=f"You asked {label} for a toy, but {reason}.",
            log_type=LogType.FAIL,
            relationship_delta=change,
        )

    toy_id, toy_name = DiceRoller.choice(TOYS, "toy")
    item = InventoryItem(id=new_id(toy_id), name=toy_name, item_type=ItemType.CHILDHOOD, value=TOY_VALUE)
    character.inventory.append(item)
    return InteractionResult(
        success=True,
        message=f"{label[0].upper()}{label[1:]} gave you a {toy_name}! What joy!",
        log_type=LogType.SUCCESS,
        item=item,
    )


def _tantrum(character: Character, npc_id: str, member: FamilyMember) -> InteractionResult:
    if not character.is_child:
        return fail("You are too old for tantrums.")

    template = DiceRoller.choice(TANTRUM_MESSAGES, "tantrum message")
    deltas = apply_stat_deltas(character, {"health": -2, "honor": -2})
    change = shift_relationship(member, -10) if isinstance(member, Parent) else 0
    return InteractionResult(
        success=False,
        message=template.format(name=member.name),
        log_type=LogType.FAIL,
        deltas=deltas,
        relationship_delta=change,
    )
