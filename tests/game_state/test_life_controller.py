"""
Tests for the LifeController.

Drives whole lives through the public entry points and checks that the
life-cycle state gates every call the way the player would hit it.
"""

from unittest.mock import patch

import pytest

from src.data_models import DiceRoller, SocialClass
from src.game_state.life_controller import LifeController
from src.game_state.state_machine import LifeState
from src.game_state.turn_resolver import TurnOutcome
from src.observability.run_log import EventType, get_run_log
from src.tables.table_types import EventKind, GameEvent, choice
from tests.helpers import forced_dice, make_character, make_job


FATAL_EVENT = GameEvent(
    id="highway_test",
    kind=EventKind.RANDOM,
    title="Stand and Deliver",
    description="A masked rider bars the road.",
    choices=(
        choice("resist", "Refuse", "The pistol cracked.", death=True),
        choice("yield", "Hand over your purse", "You lost your purse.", money=-5),
    ),
)


@pytest.fixture
def controller(peasant_child, seeded_dice):
    return LifeController(character=peasant_child)


def present(controller, event=FATAL_EVENT):
    with patch("src.game_state.turn_resolver.select_event", return_value=event):
        return controller.advance_year(force_birth=False)


class TestNewLife:

    def test_generates_a_newborn(self, seeded_dice):
        controller = LifeController()
        assert controller.character.age == 0
        assert controller.lives_lived == 1
        assert controller.state == LifeState.IDLE
        assert controller.narrative_log

    def test_forced_class(self, seeded_dice):
        controller = LifeController()
        controller.start_new_life(force_class=SocialClass.GENTRY)
        assert controller.character.social_class == SocialClass.GENTRY
        assert controller.lives_lived == 2

    def test_new_life_logged(self, seeded_dice):
        LifeController()
        custom = get_run_log().get_events(EventType.CUSTOM)
        assert custom[-1].context["event_name"] == "new_life"

    def test_new_life_clears_roll_history(self, seeded_dice):
        controller = LifeController()
        controller.advance_year(force_birth=False)
        assert DiceRoller.get_roll_log()
        controller.start_new_life()
        reasons = [result.reason for result in DiceRoller.get_roll_log()]
        assert "vitality decay" not in reasons

    def test_snapshot(self, controller):
        data = controller.snapshot()
        assert data["state"] == "idle"
        assert data["lives_lived"] == 1
        assert data["name"] == "Thomas Smith"


class TestAdvance:

    def test_run_log_events_carry_game_time(self, controller):
        start = len(get_run_log().get_events())
        controller.advance_year(force_birth=False)
        turn = get_run_log().get_turns()[-1]
        assert turn.game_time == "1521 (age 9)"
        assert all(e.game_time for e in get_run_log().get_events()[start:])

    def test_year_presents_event(self, controller):
        result = controller.advance_year(force_birth=False)
        assert result.outcome == TurnOutcome.EVENT_PRESENTED
        assert controller.state == LifeState.AWAITING_CHOICE
        assert controller.pending_event is result.event
        assert controller.pending_event_descriptor()["id"] == result.event.id

    def test_blocked_until_choice(self, controller):
        controller.advance_year(force_birth=False)
        age = controller.character.age
        blocked = controller.advance_year()
        assert blocked.outcome == TurnOutcome.BLOCKED
        assert not blocked.accepted
        assert controller.character.age == age

    def test_choice_returns_to_idle(self, controller):
        present(controller)
        step = controller.resolve_choice("yield")
        assert step.accepted
        assert controller.state == LifeState.IDLE
        assert controller.pending_event is None
        assert controller.character.money == 0
        assert get_run_log().get_choices()[-1].choice_id == "yield"

    def test_choice_written_to_year_log(self, controller):
        present(controller)
        controller.resolve_choice("yield")
        texts = [e.text for e in controller.character.event_log[-1].entries]
        assert "You lost your purse." in texts

    def test_unknown_choice_changes_nothing(self, controller):
        present(controller)
        before = len(controller.narrative_log)
        step = controller.resolve_choice("flee")
        assert not step.accepted
        assert controller.state == LifeState.AWAITING_CHOICE
        assert controller.pending_event is FATAL_EVENT
        assert len(controller.narrative_log) == before

    def test_choice_without_event(self, controller):
        assert not controller.resolve_choice("yield").accepted

    def test_full_year_cycle(self, controller):
        for _ in range(3):
            result = controller.advance_year(force_birth=False)
            first = result.event.choices[0].id
            step = controller.resolve_choice(first)
            if step.died:
                break
            assert controller.state == LifeState.IDLE


class TestBirth:

    def test_birth_blocks_until_acknowledged(self, controller):
        result = controller.advance_year(force_birth=True)
        assert result.outcome == TurnOutcome.SIBLING_BIRTH
        assert controller.state == LifeState.AWAITING_BIRTH_ACK
        assert controller.pending_event is None
        assert len(controller.character.siblings) == 1
        assert controller.character.siblings[0].relationship == 50

        assert controller.advance_year().outcome == TurnOutcome.BLOCKED
        step = controller.acknowledge()
        assert step.accepted
        assert controller.state == LifeState.AWAITING_CHOICE
        assert step.event is controller.pending_event

    def test_acknowledge_with_nothing_pending(self, controller):
        assert not controller.acknowledge().accepted


class TestDeath:

    def test_fatal_choice(self, controller):
        present(controller)
        step = controller.resolve_choice("resist")
        assert step.died
        assert controller.state == LifeState.AWAITING_DEATH_ACK
        assert "The pistol cracked." in controller.narrative_log[-1].text
        assert get_run_log().get_choices()[-1].died

    def test_worked_to_death(self, seeded_dice):
        character = make_character(age=30, health=5)
        character.current_job = make_job(vitality_impact=-10)
        controller = LifeController(character=character)
        result = controller.advance_year()
        assert result.died
        assert controller.state == LifeState.AWAITING_DEATH_ACK
        assert controller.pending_event is None

    def test_dead_cannot_act(self, controller):
        present(controller)
        controller.resolve_choice("resist")
        assert controller.advance_year().outcome == TurnOutcome.BLOCKED
        refused = controller.interact("father", "CHAT")
        assert refused.blocked
        assert refused.message == "The dead do nothing."

    def test_acknowledged_death_starts_a_new_life(self, controller):
        present(controller)
        controller.resolve_choice("resist")
        old = controller.character
        step = controller.acknowledge()
        assert step.accepted
        assert controller.state == LifeState.IDLE
        assert controller.character is not old
        assert controller.character.age == 0
        assert controller.lives_lived == 2


class TestCoworkerEventFlow:

    def test_coworker_event_then_ordinary_event(self, seeded_dice):
        character = make_character(age=20, money=20)
        character.current_job = make_job()
        controller = LifeController(character=character)
        with forced_dice(chances={"coworker event: Will 0": True}):
            result = controller.advance_year(force_birth=False)
        assert result.outcome == TurnOutcome.COWORKER_EVENT
        assert controller.pending_event.kind == EventKind.NPC_REACTIVE

        step = controller.resolve_choice(controller.pending_event.choices[1].id)
        assert step.accepted
        assert step.event is not None
        assert step.event.kind != EventKind.NPC_REACTIVE
        assert controller.state == LifeState.AWAITING_CHOICE


class TestInteract:

    def test_tavern_without_coin_is_refused(self, seeded_dice):
        character = make_character(age=20, money=3)
        character.current_job = make_job()
        controller = LifeController(character=character)
        before = len(controller.narrative_log)
        result = controller.interact("coworker_0", "TAVERN")
        assert result.blocked
        assert result.message == "You do not have enough coins for the tavern."
        assert character.money == 3
        assert character.current_job.coworkers[0].relationship == 50
        assert len(controller.narrative_log) == before
        assert get_run_log().get_interactions() == []

    def test_family_chat_is_logged(self, controller):
        result = controller.interact("mother", "CHAT")
        assert result.success
        assert controller.narrative_log[-1].text == result.message
        assert get_run_log().get_interactions()[-1].target_id == "mother"

    def test_allowed_while_event_pending(self, controller):
        controller.advance_year(force_birth=False)
        assert controller.interact("father", "CHAT").success
        assert controller.state == LifeState.AWAITING_CHOICE

    def test_unknown_target(self, controller):
        assert controller.interact("the_king", "CHAT").message == "There is nobody by that name."

    def test_unknown_action(self, controller):
        result = controller.interact("father", "JOUST")
        assert result.blocked
        assert "JOUST" in result.message

    def test_duel_death_ends_life(self, seeded_dice):
        character = make_character(age=25, health=30, strength=10)
        character.current_job = make_job()
        controller = LifeController(character=character)
        with forced_dice(ranges={"duel opponent": 89}, chances={"duel near-fatal wound": True}):
            controller.interact("coworker_0", "DUEL")
        assert character.health == 0
        assert controller.state == LifeState.AWAITING_DEATH_ACK

    def test_job_wrappers(self, seeded_dice):
        controller = LifeController(character=make_character(age=18, strength=40))
        assert controller.take_job("field_plower").success
        assert controller.character.current_job.id == "field_plower"
        assert controller.resign_job().success
        assert controller.resign_job().blocked

    def test_activity_and_inventory_wrappers(self, controller):
        assert controller.do_activity("carry_wood", 0).success
        assert controller.do_activity("carry_wood", 0).blocked
        assert controller.eat("nothing").blocked
        assert controller.sell("nothing").blocked
        assert controller.work().success
