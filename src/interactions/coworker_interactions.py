"""
Coworker interactions.

Friendly, professional and hostile actions toward a coworker on the current
job. Gated actions (TAVERN, GIFT, LOAN, HELP, HERESY) are refused without
any change when their condition is not met. INSULT may turn into a fight,
and DUEL is graded by the strength margin.
"""

import logging

from src.data_models import Character, Coworker, DiceRoller, LogType
from src.interactions.interaction_types import (
    CoworkerAction,
    InteractionResult,
    apply_stat_deltas,
    fail,
    record,
    shift_relationship,
)
from src.interactions.strength_contest import ContestTier, strength_contest


logger = logging.getLogger(__name__)


TAVERN_COST = 5
LOAN_RELATIONSHIP = 80
LOAN_AMOUNT = (10, 50)
HELP_RELATIONSHIP = 60
INSULT_FIGHT_CHANCE = 0.30
INSULT_OPPONENT = (40, 79)
SABOTAGE_CAUGHT_CHANCE = 0.50
HERESY_YEARS = (1500, 1700)
DUEL_OPPONENT = (30, 89)
DUEL_NEAR_FATAL_CHANCE = 0.30

# Narrative flag set when a coworker agrees to share next year's load
WORK_EASED_FLAG = "work_eased"


def coworker_interaction(character: Character, coworker_id: str, action: CoworkerAction) -> InteractionResult:
    """
    Perform one action toward a coworker.

    Args:
        character: The acting character
        coworker_id: Id of a coworker on the current job
        action: The CoworkerAction to perform
    """
    action = CoworkerAction(action)
    job = character.current_job
    coworker = job.get_coworker(coworker_id) if job else None
    if coworker is None:
        return fail("You have no such coworker.", coworker_id, action.value)

    handler = _HANDLERS[action]
    deltas, relationship, message, log_type = handler(character, coworker)
    if deltas is None:
        return fail(message, coworker_id, action.value)

    result = InteractionResult(
        success=log_type != LogType.FAIL,
        message=message,
        log_type=log_type,
        target_id=coworker_id,
        action=action.value,
    )
    result.deltas = apply_stat_deltas(character, deltas)
    result.relationship_delta = shift_relationship(coworker, relationship)
    logger.debug(f"{action.value} -> {coworker.name}: {result.deltas}, rel {result.relationship_delta:+d}")
    return record(character, result)


# Each handler returns (stat deltas, relationship delta, message, log type).
# A deltas value of None means a precondition failed.


def _compliment(character: Character, coworker: Coworker):
    return {}, 5, f"You complimented {coworker.name}. They appreciated your kind words.", LogType.SUCCESS


def _tavern(character: Character, coworker: Coworker):
    if character.money < TAVERN_COST:
        return None, 0, "You do not have enough coins for the tavern.", LogType.FAIL
    return (
        {"money": -TAVERN_COST, "health": -5},
        10,
        f"You went to the tavern with {coworker.name} and talked until late. The hangover was another matter.",
        LogType.SUCCESS,
    )


def _gift(character: Character, coworker: Coworker):
    if not character.inventory:
        return None, 0, "You have nothing to give as a gift.", LogType.FAIL
    item = DiceRoller.choice(character.inventory, "gift item")
    character.inventory = [i for i in character.inventory if i.id != item.id]
    return {}, 15, f"You gave {coworker.name} your {item.name}. They were delighted!", LogType.SUCCESS


def _loan(character: Character, coworker: Coworker):
    if coworker.relationship <= LOAN_RELATIONSHIP:
        return None, 0, f"{coworker.name} does not trust you enough to lend you money.", LogType.FAIL
    amount = DiceRoller.roll_range(*LOAN_AMOUNT, "coworker loan")
    return (
        {"money": amount},
        -5,
        f"{coworker.name} lent you {amount} coins. You promise to repay them soon.",
        LogType.SUCCESS,
    )


def _please(character: Character, coworker: Coworker):
    return (
        {"honor": 5, "health": -10},
        3,
        f"You pleased {coworker.name} by doing all the dirty work. Your standing rose, but you are exhausted.",
        LogType.NEUTRAL,
    )


def _help(character: Character, coworker: Coworker):
    if coworker.relationship <= HELP_RELATIONSHIP:
        return None, 0, f"{coworker.name} is not willing to help you yet.", LogType.FAIL
    character.narrative_flags.merge({WORK_EASED_FLAG: True})
    return (
        {},
        -10,
        f"{coworker.name} agreed to help you. Next year's work will be lighter.",
        LogType.SUCCESS,
    )


def _report(character: Character, coworker: Coworker):
    return (
        {"honor": 10},
        -100,
        f"You reported {coworker.name} to the overseer. Your honor rose, but you have made a mortal enemy.",
        LogType.FAIL,
    )


def _insult(character: Character, coworker: Coworker):
    if not DiceRoller.chance(INSULT_FIGHT_CHANCE, "insult becomes a fight"):
        return {}, -20, f"You insulted {coworker.name}. Now they hate you.", LogType.FAIL
    contest = strength_contest(character.strength, *INSULT_OPPONENT, reason="insult fight opponent")
    if contest.won:
        return (
            {"honor": 5, "health": -10},
            -20,
            f"You insulted {coworker.name}. A fight broke out and you won, though you were hurt.",
            LogType.SUCCESS,
        )
    return (
        {"honor": -10, "health": -20},
        -20,
        f"You insulted {coworker.name}. A fight broke out and you took a beating!",
        LogType.FAIL,
    )


def _sabotage(character: Character, coworker: Coworker):
    if not DiceRoller.chance(SABOTAGE_CAUGHT_CHANCE, "sabotage caught"):
        return (
            {},
            -30,
            f"You sabotaged {coworker.name}'s work without being found out. Their reputation suffered.",
            LogType.SUCCESS,
        )
    return (
        {"honor": -15, "money": -20},
        -50,
        "You were caught sabotaging! You lost honor, were fined 20 coins, and are now despised.",
        LogType.FAIL,
    )


def _heresy(character: Character, coworker: Coworker):
    low, high = HERESY_YEARS
    if not low <= character.current_year <= high:
        return None, 0, "Rumours of heresy carry no weight in this age.", LogType.FAIL
    return (
        {"honor": -10},
        -50,
        f"You spread rumours of heresy about {coworker.name}. The Church may investigate them. God have mercy.",
        LogType.FAIL,
    )


def _duel(character: Character, coworker: Coworker):
    contest = strength_contest(character.strength, *DUEL_OPPONENT, reason="duel opponent")
    tier = contest.tier
    name = coworker.name
    if tier == ContestTier.DECISIVE_WIN:
        return ({"honor": 20, "health": -15}, -100,
                f"You challenged {name} to a duel and won! Your honor rose, though you were wounded.",
                LogType.SUCCESS)
    if tier == ContestTier.NARROW_WIN:
        return ({"honor": 10, "health": -30}, -100,
                f"You won the duel against {name}, but it was brutal. You are badly wounded.",
                LogType.NEUTRAL)
    if tier == ContestTier.NARROW_LOSS:
        return ({"honor": -15, "health": -40}, -100,
                f"You lost the duel against {name}. You are seriously hurt and your honor is stained.",
                LogType.FAIL)
    if DiceRoller.chance(DUEL_NEAR_FATAL_CHANCE, "duel near-fatal wound"):
        return ({"honor": -30, "health": -80}, -100,
                f"{name} cut you down in the duel. You lie at death's door.",
                LogType.FAIL)
    return ({"honor": -20, "health": -60}, -100,
            f"You were brutally beaten by {name}. You nearly died and can barely move.",
            LogType.FAIL)


_HANDLERS = {
    CoworkerAction.COMPLIMENT: _compliment,
    CoworkerAction.TAVERN: _tavern,
    CoworkerAction.GIFT: _gift,
    CoworkerAction.LOAN: _loan,
    CoworkerAction.PLEASE: _please,
    CoworkerAction.HELP: _help,
    CoworkerAction.REPORT: _report,
    CoworkerAction.INSULT: _insult,
    CoworkerAction.SABOTAGE: _sabotage,
    CoworkerAction.HERESY: _heresy,
    CoworkerAction.DUEL: _duel,
}
