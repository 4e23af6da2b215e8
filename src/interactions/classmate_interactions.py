"""Classmate interactions: play, chat and schoolyard fights."""

from src.data_models import Character, DiceRoller, LogType
from src.interactions.interaction_types import (
    ClassmateAction,
    InteractionResult,
    apply_stat_deltas,
    fail,
    record,
    shift_relationship,
)


PLAY_GAIN = (5, 10)
CHAT_GAIN = (2, 4)


def classmate_interaction(character: Character, classmate_id: str, action: ClassmateAction) -> InteractionResult:
    action = ClassmateAction(action)
    classmate = character.get_classmate(classmate_id)
    if classmate is None:
        return fail("You have no such classmate.", classmate_id, action.value)

    deltas: dict[str, int] = {}
    if action == ClassmateAction.PLAY:
        relationship = DiceRoller.roll_range(*PLAY_GAIN, "play relationship gain")
        message = f"You played with {classmate.name}. What fun!"
        log_type = LogType.SUCCESS
    elif action == ClassmateAction.CHAT:
        relationship = DiceRoller.roll_range(*CHAT_GAIN, "classmate chat gain")
        message = f"You chatted with {classmate.name}."
        log_type = LogType.NEUTRAL
    else:
        # Win when strength beats a d100 roll
        roll = DiceRoller.roll_percentile("schoolyard fight").total
        if character.strength > roll:
            relationship = -10
            deltas = {"honor": 2}
            message = f"You beat {classmate.name} in a fight!"
            log_type = LogType.SUCCESS
        else:
            relationship = -5
            deltas = {"health": -5, "honor": -2}
            message = f"{classmate.name} beat you. How humiliating!"
            log_type = LogType.FAIL

    result = InteractionResult(
        success=log_type != LogType.FAIL,
        message=message,
        log_type=log_type,
        target_id=classmate_id,
        action=action.value,
    )
    result.deltas = apply_stat_deltas(character, deltas)
    result.relationship_delta = shift_relationship(classmate, relationship)
    return record(character, result)
