"""
Unit tests for core data models.

Tests Character, Family and the clamping helpers from src/data_models.py.
"""

import pytest
from src.data_models import (
    LogType,
    NarrativeFlags,
    clamp_resource,
    clamp_stat,
    new_id,
)
from tests.helpers import make_character


class TestClamping:

    def test_clamp_stat_bounds(self):
        assert clamp_stat(-5) == 0
        assert clamp_stat(50) == 50
        assert clamp_stat(105) == 100

    def test_clamp_resource_floor_only(self):
        assert clamp_resource(-3) == 0
        assert clamp_resource(5000) == 5000

    def test_new_id_prefix_and_uniqueness(self):
        first, second = new_id("sibling"), new_id("sibling")
        assert first.startswith("sibling")
        assert first != second


class TestCharacterStats:
    """Tests for Character.adjust_stat."""

    def test_honor_clamps_at_hundred(self):
        character = make_character(honor=90)
        assert character.adjust_stat("honor", 15) == 100
        assert character.honor == 100

    def test_health_clamps_at_zero(self):
        character = make_character(health=5)
        character.adjust_stat("health", -50)
        assert character.health == 0

    def test_money_never_negative(self):
        character = make_character(money=3)
        character.adjust_stat("money", -10)
        assert character.money == 0

    def test_money_has_no_ceiling(self):
        character = make_character(money=95)
        character.adjust_stat("money", 500)
        assert character.money == 595

    def test_unknown_stat_raises(self):
        character = make_character()
        with pytest.raises(KeyError):
            character.adjust_stat("charisma", 5)


class TestCharacterLookups:

    def test_full_name(self):
        assert make_character().full_name == "Thomas Smith"

    def test_is_child_until_thirteen(self):
        assert make_character(age=12).is_child
        assert not make_character(age=13).is_child

    def test_family_get_parent(self):
        character = make_character()
        assert character.family.get_parent("father").name == "John"
        assert character.family.get_parent("uncle") is None

    def test_family_alive_flag_needs_both_parents_dead(self):
        family = make_character().family
        family.father.alive = False
        family.refresh_alive()
        assert family.is_alive

        family.mother.alive = False
        family.refresh_alive()
        assert not family.is_alive


class TestYearLog:
    """Tests for the per-year event log."""

    def test_entry_goes_to_current_year(self):
        character = make_character(year=1520)
        character.add_year_entry("Did a thing", LogType.SUCCESS)
        assert character.event_log[-1].year == 1520
        assert character.event_log[-1].entries[-1].text == "Did a thing"

    def test_bucket_created_when_missing(self):
        character = make_character(year=1520)
        character.current_year = 1521
        character.add_year_entry("New year", LogType.NEUTRAL)
        assert [log.year for log in character.event_log] == [1520, 1521]

    def test_has_interacted_is_per_year(self):
        from src.data_models import InteractionRecord

        character = make_character(year=1520)
        character.interaction_history.append(InteractionRecord(1520, "father", "CHAT"))
        assert character.has_interacted("father", "CHAT")
        character.current_year = 1521
        assert not character.has_interacted("father", "CHAT")


class TestNarrativeFlags:

    def test_merge_known_and_extra_flags(self):
        flags = NarrativeFlags()
        flags.merge({"living_with": "miller", "work_eased": True})
        assert flags.living_with == "miller"
        assert flags.extra == {"work_eased": True}

    def test_snapshot_is_a_copy(self):
        character = make_character()
        character.traits.append("Pious")
        snap = character.snapshot()
        snap["traits"].append("Brave")
        assert character.traits == ["Pious"]
        assert snap["social_class"] == "peasant"
