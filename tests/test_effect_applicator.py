"""
Tests for choice effect application in src/events/effect_applicator.py.
"""

import pytest

from src.data_models import PERCENT_STATS, LogType
from src.events.effect_applicator import EVENT_SIBLING_RELATIONSHIP, apply_choice, classify
from src.tables.table_types import EventKind, GameEvent, choice
from tests.helpers import make_character


def event_with(picked, category: str = "") -> GameEvent:
    return GameEvent(
        id="test_event",
        kind=EventKind.SIMPLE,
        title="Test",
        description="A test event.",
        choices=(picked,),
        category=category,
    )


class TestStatDeltas:
    """Only present deltas apply, with clamping."""

    def test_honor_clamps_to_hundred(self):
        character = make_character(honor=90)
        result = apply_choice(character, choice("brave", "Be brave", honor=15))
        assert character.honor == 100
        assert result.deltas == {"honor": 10}

    @pytest.mark.parametrize("stat", PERCENT_STATS)
    def test_percentage_stats_clamp_at_both_bounds(self, stat):
        high = make_character(**{stat: 95})
        apply_choice(high, choice("up", "Up", **{stat: 40}))
        assert getattr(high, stat) == 100

        low = make_character(**{stat: 5})
        apply_choice(low, choice("down", "Down", **{stat: -40}))
        assert getattr(low, stat) == 0

    def test_absent_stats_untouched(self):
        character = make_character(health=50, faith=20, money=7)
        apply_choice(character, choice("pray", "Pray", faith=5))
        assert character.faith == 25
        assert character.health == 50
        assert character.money == 7

    def test_money_and_food_floor_at_zero(self):
        character = make_character(money=3, food=1)
        apply_choice(character, choice("spend", "Spend", money=-10, food=-5))
        assert character.money == 0
        assert character.food == 0

    def test_message_first(self):
        character = make_character()
        result = apply_choice(character, choice("eat", "Eat", "You ate well.", health=2))
        assert result.messages[0] == "You ate well."
        assert result.log_type == LogType.SUCCESS

    def test_classify(self):
        assert classify({"health": 2, "honor": -1}) == LogType.SUCCESS
        assert classify({"health": -5}) == LogType.FAIL
        assert classify({}) == LogType.NEUTRAL


class TestDeath:

    def test_explicit_death_flag_stops_processing(self):
        character = make_character(health=80, honor=10)
        picked = choice("resist", "Refuse", "The pistol cracked.", death=True, honor=50, add_trait="Brave")
        result = apply_choice(character, picked)
        assert result.died
        assert result.death_cause == "The pistol cracked."
        assert character.honor == 10
        assert "Brave" not in character.traits

    def test_health_reaching_zero_is_death(self):
        character = make_character(health=10)
        picked = choice("plague", "Nurse the sick", health=-10, add_trait="Selfless")
        result = apply_choice(character, picked)
        assert result.died
        assert character.health == 0
        assert character.traits == []

    def test_overkill_clamps_and_dies(self):
        character = make_character(health=5)
        result = apply_choice(character, choice("fall", "Fall", health=-40))
        assert result.died
        assert character.health == 0


class TestSideEffects:
    """Traits, narrative flags and spawned siblings."""

    def test_trait_added_once(self):
        character = make_character()
        picked = choice("pray", "Pray", add_trait="Pious")
        apply_choice(character, picked)
        apply_choice(character, picked)
        assert character.traits == ["Pious"]

    def test_flags_merged(self):
        character = make_character()
        picked = choice("go", "Go to the mill", set_flags={"living_with": "miller", "has_apprentice": True})
        apply_choice(character, picked)
        assert character.narrative_flags.living_with == "miller"
        assert character.narrative_flags.has_apprentice

    def test_danger_event_recorded(self):
        character = make_character()
        picked = choice("herbs", "Drink herbs", health=-1)
        apply_choice(character, picked, event_with(picked, category="danger"))
        assert character.narrative_flags.last_major_event == "test_event"

    def test_ordinary_event_not_recorded(self):
        character = make_character()
        picked = choice("herbs", "Drink herbs", health=-1)
        apply_choice(character, picked, event_with(picked))
        assert character.narrative_flags.last_major_event is None

    def test_sibling_spawned(self, seeded_dice):
        character = make_character()
        result = apply_choice(character, choice("wait", "Wait", add_sibling=True))
        assert len(character.siblings) == 1
        sibling = character.siblings[0]
        assert result.new_sibling is sibling
        assert sibling.age == 0
        assert sibling.relationship == EVENT_SIBLING_RELATIONSHIP
        assert sibling.stats is None
        assert sibling.name
