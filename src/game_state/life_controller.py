"""
Life Controller for the Tudor Life simulation.

Owns the single mutable Character, the append-only narrative log and the
life-cycle state machine, and exposes the entry points used by a
presentation layer:

- advance_year(): run one yearly turn (legal only from IDLE)
- resolve_choice(choice_id): answer the pending event
- acknowledge(): dismiss a birth or death notice
- interact(target_id, action): act toward a relative, coworker or classmate

None of these raise for bad player input. They log a warning and return a
result that reports `accepted=False`.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from src.data_models import Character, DiceRoller, Gender, LogType, SocialClass
from src.events.coworker_events import resolve_coworker_event
from src.events.effect_applicator import apply_choice
from src.game_state.state_machine import LifeState, StateMachine
from src.game_state.turn_resolver import TurnOutcome, TurnResult, draw_event, resolve_turn
from src.interactions import (
    ClassmateAction,
    CoworkerAction,
    FamilyAction,
    InteractionResult,
    classmate_interaction,
    coworker_interaction,
    do_activity,
    do_work,
    eat_item,
    family_interaction,
    resign_job,
    sell_item,
    take_job,
)
from src.interactions.interaction_types import fail
from src.npc.npc_generator import LifeGenerator
from src.observability.run_log import get_run_log
from src.tables.era_tables import DEFAULT_LOCATION, DEFAULT_START_YEAR
from src.tables.table_types import EventKind, GameEvent


logger = logging.getLogger(__name__)


FAMILY_TARGETS = ("father", "mother")


@dataclass
class NarrativeLine:
    text: str
    log_type: LogType = LogType.NEUTRAL


@dataclass
class StepResult:
    """
    Result of resolve_choice() or acknowledge().

    Attributes:
        accepted: False when the call was refused and nothing changed
        messages: Narrative lines produced by the step
        died: True when the step killed the character
        deltas: Stat changes actually applied
        event: The next event awaiting a choice, if one was presented
    """
    accepted: bool
    messages: list[str] = field(default_factory=list)
    died: bool = False
    deltas: dict[str, int] = field(default_factory=dict)
    event: Optional[GameEvent] = None


class LifeController:
    """
    Drives one life after another.

    A life ends only in death; acknowledging the death replaces the
    character with a newborn in a fresh family.
    """

    def __init__(
        self,
        location: str = DEFAULT_LOCATION,
        start_year: int = DEFAULT_START_YEAR,
        generator: Optional[LifeGenerator] = None,
        character: Optional[Character] = None,
    ):
        """
        Args:
            location: Where each new life begins
            start_year: Birth year of each new life
            generator: NPC generator, shared by every step
            character: An existing character to adopt instead of generating one
        """
        self.location = location
        self.start_year = start_year
        self.generator = generator or LifeGenerator()
        self.state_machine = StateMachine(LifeState.IDLE)
        self._narrative: list[NarrativeLine] = []
        self._pending_event: Optional[GameEvent] = None
        self.lives_lived = 0

        if character is not None:
            self.character = character
            self.lives_lived = 1
        else:
            self.start_new_life()
        get_run_log().set_game_time_provider(self.game_time)

    # =========================================================================
    # READ-ONLY VIEWS
    # =========================================================================

    @property
    def state(self) -> LifeState:
        return self.state_machine.current_state

    @property
    def narrative_log(self) -> list[NarrativeLine]:
        return list(self._narrative)

    @property
    def pending_event(self) -> Optional[GameEvent]:
        return self._pending_event

    def pending_event_descriptor(self) -> Optional[dict[str, Any]]:
        if self._pending_event is None:
            return None
        return self._pending_event.to_descriptor()

    def game_time(self) -> str:
        """In-game time stamped on run-log events, e.g. "1512 (age 12)"."""
        return f"{self.character.current_year} (age {self.character.age})"

    def snapshot(self) -> dict[str, Any]:
        data = self.character.snapshot()
        data["state"] = self.state.value
        data["lives_lived"] = self.lives_lived
        return data

    # =========================================================================
    # LIFE CYCLE
    # =========================================================================

    def start_new_life(
        self,
        force_class: Optional[SocialClass] = None,
        force_gender: Optional[Gender] = None,
    ) -> Character:
        """Replace the character with a newborn. No inheritance carries over."""
        # Roll history is kept per life
        DiceRoller.clear_roll_log()
        result = self.generator.generate_new_life(
            location=self.location,
            start_year=self.start_year,
            force_class=force_class,
            force_gender=force_gender,
        )
        self.character = result.character
        self._pending_event = None
        self.lives_lived += 1
        if self.state != LifeState.IDLE:
            self.state_machine.reset("new life")
        self._write(result.messages, LogType.NEUTRAL)
        get_run_log().log_custom("new_life", {
            "name": self.character.full_name,
            "social_class": self.character.social_class.value,
            "lives_lived": self.lives_lived,
        })
        return self.character

    def advance_year(self, force_birth: Optional[bool] = None) -> TurnResult:
        """
        Run one yearly turn.

        Refused with outcome BLOCKED while an event, birth or death is pending.
        """
        if not self.state_machine.can_advance:
            logger.warning(f"advance_year refused in state {self.state.value}")
            return TurnResult(
                TurnOutcome.BLOCKED,
                [f"You must deal with what is before you first ({self.state.value})."],
            )

        result = resolve_turn(self.character, self.generator, force_birth=force_birth)
        self._write(result.messages)

        if result.outcome == TurnOutcome.DEATH:
            self._die(result.death_cause)
        elif result.outcome == TurnOutcome.SIBLING_BIRTH:
            self.state_machine.transition("birth_announced", {"sibling": result.new_sibling.id})
        else:
            self._present(result.event)
        return result

    def resolve_choice(self, choice_id: str) -> StepResult:
        """
        Answer the pending event.

        Unknown choice ids fail closed: no state change, no narrative line,
        and the event stays pending.
        """
        event = self._pending_event
        if self.state != LifeState.AWAITING_CHOICE or event is None:
            logger.warning(f"resolve_choice({choice_id}) with no pending event")
            return StepResult(accepted=False, messages=["There is nothing to choose."])
        picked = event.get_choice(choice_id)
        if picked is None:
            logger.warning(f"Unknown choice {choice_id!r} for event {event.id}")
            return StepResult(accepted=False, messages=[f"'{choice_id}' is not one of the options."])

        if event.kind == EventKind.NPC_REACTIVE:
            applied = resolve_coworker_event(self.character, event, picked)
        else:
            applied = apply_choice(self.character, picked, event, self.generator)
            self.character.add_year_entry(
                picked.message or f"{event.title}: {picked.label}", applied.log_type
            )
        get_run_log().log_choice(
            event_id=event.id,
            event_kind=event.kind.value,
            choice_id=picked.id,
            deltas=applied.deltas,
            died=applied.died,
        )

        step = StepResult(accepted=True, messages=list(applied.messages), deltas=dict(applied.deltas))
        self._write(applied.messages, applied.log_type)
        self._pending_event = None

        if applied.died:
            self._die(applied.death_cause)
            step.died = True
            return step

        self.state_machine.transition("choice_resolved", {"event": event.id, "choice": picked.id})
        if event.kind == EventKind.NPC_REACTIVE:
            # The year carries on to its ordinary event
            step.event = self._present(draw_event(self.character))
        return step

    def acknowledge(self) -> StepResult:
        """Dismiss a birth notice (then select the year's event) or a death (then start over)."""
        if self.state_machine.can_transition("birth_acknowledged"):
            self.state_machine.transition("birth_acknowledged")
            event = self._present(draw_event(self.character))
            return StepResult(accepted=True, event=event)
        if self.state_machine.can_transition("death_acknowledged"):
            self.state_machine.transition("death_acknowledged")
            self.start_new_life()
            return StepResult(accepted=True, messages=["A new life begins."])
        logger.warning(f"acknowledge() with nothing to acknowledge in state {self.state.value}")
        return StepResult(accepted=False, messages=["There is nothing to acknowledge."])

    # =========================================================================
    # INTERACTIONS
    # =========================================================================

    def interact(self, target_id: str, action: str) -> InteractionResult:
        """
        Act toward a relative, coworker or classmate.

        The target kind is worked out from the id: "father", "mother" or a
        sibling id reach family, a coworker id on the current job reaches
        that coworker, and a classmate id reaches that classmate.
        """
        character = self.character
        job = character.current_job
        try:
            if target_id in FAMILY_TARGETS or character.get_sibling(target_id):
                family_action = FamilyAction(action)
                return self._run(lambda: family_interaction(character, target_id, family_action))
            if job is not None and job.get_coworker(target_id):
                coworker_action = CoworkerAction(action)
                return self._run(lambda: coworker_interaction(character, target_id, coworker_action))
            if character.get_classmate(target_id):
                classmate_action = ClassmateAction(action)
                return self._run(lambda: classmate_interaction(character, target_id, classmate_action))
        except ValueError:
            return self._refuse(fail(f"'{action}' is not something you can do with them.", target_id, action))
        return self._refuse(fail("There is nobody by that name.", target_id, action))

    def take_job(self, job_id: str) -> InteractionResult:
        return self._run(lambda: take_job(self.character, job_id, self.generator))

    def resign_job(self) -> InteractionResult:
        return self._run(lambda: resign_job(self.character))

    def work(self) -> InteractionResult:
        return self._run(lambda: do_work(self.character, self.generator))

    def do_activity(self, activity_id: str, choice_index: int) -> InteractionResult:
        return self._run(lambda: do_activity(self.character, activity_id, choice_index))

    def eat(self, item_id: str) -> InteractionResult:
        return self._run(lambda: eat_item(self.character, item_id))

    def sell(self, item_id: str) -> InteractionResult:
        return self._run(lambda: sell_item(self.character, item_id))

    def _run(self, handler: Callable[[], InteractionResult]) -> InteractionResult:
        if self.state == LifeState.AWAITING_DEATH_ACK:
            return self._refuse(fail("The dead do nothing."))

        result = handler()
        if result.blocked:
            return self._refuse(result)

        self._write([result.message], result.log_type)
        get_run_log().log_interaction(
            target_id=result.target_id,
            action=result.action,
            log_type=result.log_type.value,
            message=result.message,
            context={"deltas": dict(result.deltas), "relationship_delta": result.relationship_delta},
        )
        if self.character.health == 0:
            self._die(f"{result.message} You did not survive.")
        return result

    def _refuse(self, result: InteractionResult) -> InteractionResult:
        logger.info(f"Refused {result.action or 'action'} on {result.target_id or '-'}: {result.message}")
        return result

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _present(self, event: GameEvent) -> GameEvent:
        self._pending_event = event
        self.state_machine.transition("event_presented", {"event": event.id, "kind": event.kind.value})
        self._write([event.title, event.description])
        return event

    def _die(self, cause: str) -> None:
        character = self.character
        line = f"{character.full_name} died in {character.current_year}, aged {character.age}. {cause}".strip()
        self._write([line], LogType.FAIL)
        character.add_year_entry(line, LogType.FAIL)
        self._pending_event = None
        self.state_machine.transition("character_died", {"cause": cause, "age": character.age})
        logger.info(f"Death: {character.full_name} aged {character.age}")

    def _write(self, lines: list[str], log_type: LogType = LogType.NEUTRAL) -> None:
        for line in lines:
            if line:
                self._narrative.append(NarrativeLine(line, log_type))
