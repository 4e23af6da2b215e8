"""
Tests for yearly turn resolution.

Covers the fixed order of the yearly steps and the branches that end a
turn early: death by exhaustion, a coworker event, and a sibling birth.
"""

from unittest.mock import patch

import pytest

from src.data_models import DiceRoller, SocialClass
from src.game_state.turn_resolver import MOTHER_MAX_BIRTH_AGE, TurnOutcome, draw_event, resolve_turn
from src.interactions.coworker_interactions import WORK_EASED_FLAG
from src.npc.npc_generator import CLASSMATE_COHORTS, NEWBORN_SIBLING_RELATIONSHIP
from src.observability.run_log import get_run_log
from src.tables.table_types import EventKind
from tests.helpers import forced_dice, make_character, make_job


def roll_reasons() -> list[str]:
    return [r.reason for r in get_run_log().get_rolls()]


class TestCalendar:

    def test_age_and_year_advance(self, peasant_child, seeded_dice):
        result = resolve_turn(peasant_child, force_birth=False)
        assert peasant_child.age == 9
        assert peasant_child.current_year == 1521
        assert result.messages[0] == "Year 1521: you are now 9 years old."

    def test_era_change_announced(self, seeded_dice):
        character = make_character(age=20, year=1602)
        result = resolve_turn(character, force_birth=False)
        assert character.era == "stuart"
        assert any(m.startswith("A new age begins: the Stuart Era.") for m in result.messages)

    def test_turn_logged(self, peasant_child, seeded_dice):
        result = resolve_turn(peasant_child, force_birth=False)
        turns = get_run_log().get_turns()
        assert len(turns) == 1
        assert turns[0].outcome == "event_presented"
        assert turns[0].event_id == result.event.id


class TestMilestones:

    def test_classmates_at_six(self, seeded_dice):
        character = make_character(age=5)
        result = resolve_turn(character, force_birth=False)
        assert len(character.classmates) == len(CLASSMATE_COHORTS[SocialClass.PEASANT])
        assert any("play with the other children" in m for m in result.messages)

    def test_cohort_generated_once(self, seeded_dice):
        character = make_character(age=5)
        resolve_turn(character, force_birth=False)
        cohort = list(character.classmates)
        character.age = 5
        resolve_turn(character, force_birth=False)
        assert character.classmates == cohort

    def test_adulthood(self, seeded_dice):
        character = make_character(age=12)
        result = resolve_turn(character, force_birth=False)
        assert "You are now considered an adult. Childhood is over." in result.messages


class TestJob:

    def test_job_pays_and_tires(self, employed_adult, seeded_dice):
        with forced_dice(chances={"family expense": False}, default_chance=False):
            resolve_turn(employed_adult, force_birth=False)
        assert employed_adult.money == 25
        assert employed_adult.health == 75

    def test_worked_to_death_ends_turn(self, seeded_dice):
        character = make_character(age=30, health=5)
        character.current_job = make_job(vitality_impact=-10)
        result = resolve_turn(character, force_birth=True)
        assert result.outcome == TurnOutcome.DEATH
        assert result.died
        assert character.health == 0
        assert result.event is None
        assert character.siblings == []
        assert "You worked yourself to death as Field Plower." == result.death_cause
        assert not any(r.startswith("coworker event") for r in roll_reasons())

    def test_eased_work_halves_the_cost(self, employed_adult, seeded_dice):
        employed_adult.narrative_flags.merge({WORK_EASED_FLAG: True})
        with forced_dice(default_chance=False):
            result = resolve_turn(employed_adult, force_birth=False)
        assert employed_adult.health == 78
        assert WORK_EASED_FLAG not in employed_adult.narrative_flags.extra
        assert "A coworker shared your load this year." in result.messages


class TestCoworkerEvents:

    def test_coworker_event_ends_turn(self, employed_adult, seeded_dice):
        with forced_dice(chances={"coworker event: Will 0": True}):
            result = resolve_turn(employed_adult, force_birth=True)
        assert result.outcome == TurnOutcome.COWORKER_EVENT
        assert result.event.kind == EventKind.NPC_REACTIVE
        assert result.event.npc_id == "coworker_0"
        assert employed_adult.siblings == []

    def test_at_most_one_coworker_event(self, employed_adult, seeded_dice):
        employed_adult.current_job = make_job(coworkers=3)
        calls = []

        def every_chance_fires(probability, reason=""):
            calls.append(reason)
            return True

        with patch.object(DiceRoller, "chance", side_effect=every_chance_fires):
            resolve_turn(employed_adult)
        assert len([c for c in calls if c.startswith("coworker event:")]) == 1


class TestBirth:

    def test_forced_birth(self, peasant_child, seeded_dice):
        result = resolve_turn(peasant_child, force_birth=True)
        assert result.outcome == TurnOutcome.SIBLING_BIRTH
        assert result.event is None
        assert len(peasant_child.siblings) == 1
        sibling = peasant_child.siblings[0]
        assert sibling is result.new_sibling
        assert sibling.age == 0
        assert sibling.relationship == NEWBORN_SIBLING_RELATIONSHIP
        assert sibling.stats is not None
        assert any(m.startswith("Joy! Your mother gave birth") for m in result.messages)

    def test_no_birth_when_mother_too_old(self, peasant_child, seeded_dice):
        peasant_child.family.mother.age = 50
        result = resolve_turn(peasant_child, force_birth=True)
        assert result.outcome == TurnOutcome.EVENT_PRESENTED
        assert peasant_child.siblings == []

    def test_mother_turning_past_childbearing_age(self, peasant_child, seeded_dice):
        peasant_child.family.mother.age = MOTHER_MAX_BIRTH_AGE - 1
        result = resolve_turn(peasant_child, force_birth=True)
        assert peasant_child.family.mother.age == MOTHER_MAX_BIRTH_AGE
        assert result.outcome == TurnOutcome.EVENT_PRESENTED
        assert peasant_child.siblings == []

    def test_last_childbearing_year(self, peasant_child, seeded_dice):
        peasant_child.family.mother.age = MOTHER_MAX_BIRTH_AGE - 2
        result = resolve_turn(peasant_child, force_birth=True)
        assert result.outcome == TurnOutcome.SIBLING_BIRTH

    def test_no_birth_when_mother_dead(self, peasant_child, seeded_dice):
        peasant_child.family.mother.alive = False
        result = resolve_turn(peasant_child, force_birth=True)
        assert result.outcome == TurnOutcome.EVENT_PRESENTED

    def test_birth_roll(self, peasant_child, seeded_dice):
        with forced_dice(chances={"sibling birth": True}):
            result = resolve_turn(peasant_child)
        assert result.outcome == TurnOutcome.SIBLING_BIRTH


class TestEventDraw:

    def test_event_presented(self, peasant_child, seeded_dice):
        result = resolve_turn(peasant_child, force_birth=False)
        assert result.outcome == TurnOutcome.EVENT_PRESENTED
        assert result.event.choices

    def test_childhood_events_never_repeat(self, seeded_dice):
        character = make_character(age=0)
        seen = []
        for _ in range(12):
            event = draw_event(character)
            character.age += 1
            if event.kind == EventKind.CHILDHOOD:
                seen.append(event.id)
        assert seen
        assert len(seen) == len(set(seen))
        assert set(seen) == character.used_childhood_events

    @pytest.mark.parametrize("social_class", list(SocialClass))
    def test_money_and_food_never_negative(self, social_class, seeded_dice):
        character = make_character(age=0, social_class=social_class)
        for _ in range(30):
            result = resolve_turn(character)
            assert character.money >= 0
            assert character.food >= 0
            if result.died:
                break
