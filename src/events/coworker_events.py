"""
Coworker reactive events.

While a job is held, each coworker may independently raise an event at the
end of the year. Only the first one to fire is presented. Resolution updates
the coworker's relationship along with the character's stats; two choices
(CONFRONT and LEND_MONEY) have rules beyond their declared deltas.
"""

import logging
from enum import Enum
from typing import Optional

from src.data_models import Character, Coworker, DiceRoller, LogType, clamp_stat
from src.events.effect_applicator import ApplyResult, apply_deltas
from src.interactions.strength_contest import strength_contest
from src.tables.table_types import EventChoice, EventKind, GameEvent, choice


logger = logging.getLogger(__name__)


COWORKER_EVENT_CHANCE = 0.20
CONFRONT_OPPONENT_RANGE = (40, 79)
LOAN_AMOUNT = 5


class CoworkerEventType(str, Enum):
    HELP_REQUEST = "help_request"
    SOCIAL_INVITE = "social_invite"
    RUMOR_SLANDER = "rumor_slander"
    MONEY_REQUEST = "money_request"


def build_coworker_event(character: Character, coworker: Coworker, event_type: CoworkerEventType) -> GameEvent:
    """Build the reactive event template for one coworker."""
    name = coworker.name
    if event_type == CoworkerEventType.HELP_REQUEST:
        title = "A Plea for Help"
        description = (
            f"{name} comes to you at the end of the day, worn out.\n\n"
            f"\"{character.name}, I'm buried in work. Will you help me finish before the overseer comes?\""
        )
        choices = (
            choice("HELP_YES", "Yes, I'll help",
                   f"You helped {name} finish the work. You laboured side by side until late, "
                   f"and now {name} is more loyal to you.",
                   health=-10, relationship=15),
            choice("HELP_NO", "No, finish it yourself",
                   f"You refused to help {name}. They looked disappointed and worked on alone.",
                   relationship=-5),
        )
    elif event_type == CoworkerEventType.SOCIAL_INVITE:
        title = "An Invitation to the Tavern"
        description = (
            f"{name} stops you on the way home.\n\n"
            f"\"{character.name}! Come to the tavern tonight. A few cups will do us good after a day like this.\""
        )
        choices = (
            choice("TAVERN_YES", "Accept the invitation",
                   f"You drank and laughed with {name} and the friendship grew. "
                   "Next morning the hangover reminded you of the price.",
                   money=-3, relationship=10, health=-5),
            choice("TAVERN_NO", "Decline and go home",
                   f"You declined and went straight home. {name} seemed a little put out.",
                   relationship=-2),
        )
    elif event_type == CoworkerEventType.RUMOR_SLANDER:
        title = "Malicious Rumours"
        description = (
            "A fellow worker pulls you aside.\n\n"
            f"\"{character.name}, you ought to know... {name} has been spreading lies about your family. "
            "They say your line is dishonoured!\""
        )
        choices = (
            choice("CONFRONT", "Confront them and demand a retraction", "",
                   preview="Risk of a fight; may restore honor or make things worse",
                   relationship=-20),
            choice("IGNORE", "Ignore it and trust in the truth",
                   f"You ignored the rumours spread by {name}, trusting the truth would out. "
                   "Your faith grew, but some still believe the lies.",
                   faith=5, honor=-10, relationship=-5),
        )
    else:
        title = "A Request for a Loan"
        description = (
            f"{name} approaches you quietly during the break.\n\n"
            f"\"{character.name}, I'm in a bad way. My family needs food. "
            f"Could you lend me {LOAN_AMOUNT} coins? I'll repay you next month!\""
        )
        choices = (
            choice("LEND_MONEY", f"Lend {LOAN_AMOUNT} coins",
                   f"You lent {LOAN_AMOUNT} coins to {name}. They were deeply grateful and swore to remember it.",
                   money=-LOAN_AMOUNT, relationship=20, honor=5),
            choice("REFUSE_MONEY", "Refuse",
                   f"You refused to lend {name} money. They turned away in silence.",
                   relationship=-10),
        )

    return GameEvent(
        id=f"coworker_{event_type.value}",
        kind=EventKind.NPC_REACTIVE,
        title=title,
        description=description,
        choices=choices,
        npc_id=coworker.id,
    )


def generate_coworker_event(
    character: Character,
    coworker: Coworker,
    force_type: Optional[CoworkerEventType] = None,
) -> GameEvent:
    event_type = force_type or DiceRoller.choice(list(CoworkerEventType), "coworker event type")
    return build_coworker_event(character, coworker, event_type)


def roll_coworker_event(character: Character) -> Optional[GameEvent]:
    """
    Give each coworker a chance to raise an event; the first success wins
    and the remaining coworkers are not rolled.
    """
    job = character.current_job
    if job is None:
        return None
    for coworker in job.coworkers:
        if DiceRoller.chance(COWORKER_EVENT_CHANCE, f"coworker event: {coworker.name}"):
            logger.debug(f"Coworker {coworker.name} raised a reactive event")
            return generate_coworker_event(character, coworker)
    return None


def _adjust_relationship(coworker: Optional[Coworker], delta: int) -> int:
    if coworker is None or not delta:
        return 0
    before = coworker.relationship
    coworker.relationship = clamp_stat(before + delta)
    return coworker.relationship - before


def resolve_coworker_event(character: Character, event: GameEvent, picked: EventChoice) -> ApplyResult:
    """
    Apply the picked choice of a coworker reactive event.

    The coworker may have gone (job resigned); stat deltas still apply and
    the relationship change is dropped.
    """
    coworker = None
    if character.current_job is not None and event.npc_id:
        coworker = character.current_job.get_coworker(event.npc_id)
    name = coworker.name if coworker else "your coworker"

    result = ApplyResult()
    deltas = picked.effect.deltas()
    relationship = picked.effect.relationship or 0
    message = picked.message
    log_type = LogType.NEUTRAL

    if picked.id == "CONFRONT":
        contest = strength_contest(character.strength, *CONFRONT_OPPONENT_RANGE, reason="confront opponent")
        if contest.won:
            deltas["honor"] = 10
            log_type = LogType.SUCCESS
            message = (f"You confronted {name} over the rumours. It came to blows, but you won "
                       "and forced a public retraction. Your honor is restored.")
        else:
            deltas["honor"] = -20
            deltas["health"] = -15
            log_type = LogType.FAIL
            message = (f"You tried to confront {name} but lost the fight. "
                       "The rumours grew worse and your name suffered for it.")
    elif picked.id == "LEND_MONEY":
        if character.money >= LOAN_AMOUNT:
            log_type = LogType.SUCCESS
        else:
            deltas = {}
            relationship = -5
            log_type = LogType.FAIL
            message = f"You do not have enough coins to lend {name}."
    elif picked.id in ("HELP_YES", "TAVERN_YES"):
        log_type = LogType.SUCCESS
    elif picked.id == "REFUSE_MONEY":
        log_type = LogType.FAIL

    result.messages.append(message)
    apply_deltas(character, deltas, result)
    result.relationship_delta = _adjust_relationship(coworker, relationship)
    result.log_type = log_type
    character.add_year_entry(message, log_type)

    if character.health == 0:
        result.died = True
        result.death_cause = message
    return result
