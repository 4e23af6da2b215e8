"""
Tests for activities, crimes, childhood work and inventory in
src/interactions/activities.py.
"""

import pytest

from src.data_models import Classmate, InventoryItem, ItemType, LogType, SocialClass
from src.interactions.activities import (
    EAT_HEALTH,
    NEW_CLASSMATE_RELATIONSHIP,
    available_activities,
    do_activity,
    do_work,
    eat_item,
    sell_item,
)
from src.tables.activity_tables import PICKPOCKET_PUNISHMENTS, VENISON_VALUE
from tests.helpers import forced_dice, make_character


class TestActivities:

    def test_applies_effect(self, peasant_child):
        strength = peasant_child.strength
        result = do_activity(peasant_child, "carry_wood", 0)
        assert result.success
        assert peasant_child.strength == min(100, strength + 5)
        assert peasant_child.activity_history["carry_wood"] == peasant_child.current_year

    def test_once_per_year(self, peasant_child):
        do_activity(peasant_child, "carry_wood", 0)
        again = do_activity(peasant_child, "carry_wood", 1)
        assert again.blocked

    def test_allowed_again_next_year(self, peasant_child):
        do_activity(peasant_child, "listen_priest", 0)
        peasant_child.current_year += 1
        assert do_activity(peasant_child, "listen_priest", 0).success

    def test_cancel_does_not_use_the_year(self, peasant_child):
        cancelled = do_activity(peasant_child, "play_mud", 2)
        assert cancelled.blocked
        assert "play_mud" not in peasant_child.activity_history
        assert do_activity(peasant_child, "play_mud", 0).success

    def test_bad_choice_index(self, peasant_child):
        assert do_activity(peasant_child, "play_mud", 7).blocked

    def test_unknown_activity(self, peasant_child):
        assert do_activity(peasant_child, "joust", 0).blocked

    def test_crimes_closed_to_landed_classes(self, noble_child):
        assert do_activity(noble_child, "pickpocket", 0).blocked
        assert all(not a.is_crime for a in available_activities(noble_child))

    def test_available_hides_done_activities(self, peasant_child):
        do_activity(peasant_child, "beg_food", 1)
        ids = [a.id for a in available_activities(peasant_child)]
        assert "beg_food" not in ids
        assert "pickpocket" in ids


class TestCrimes:
    """Crimes resolve with a skill roll."""

    def test_easy_pickpocket(self, peasant_adult):
        with forced_dice(chances={"pickpocket (easy)": True}):
            result = do_activity(peasant_adult, "pickpocket", 0)
        assert result.success
        assert peasant_adult.money == 25

    def test_hard_pickpocket(self, peasant_adult):
        with forced_dice(chances={"pickpocket (hard)": True}, ranges={"merchant's purse": 55}):
            do_activity(peasant_adult, "pickpocket", 1)
        assert peasant_adult.money == 75

    def test_caught_strikes_escalate(self, peasant_adult):
        health, honor = peasant_adult.health, peasant_adult.honor
        with forced_dice(chances={"pickpocket (easy)": False}):
            first = do_activity(peasant_adult, "pickpocket", 0)
        assert first.log_type == LogType.FAIL
        assert peasant_adult.crime_strikes == 1
        assert peasant_adult.health == health - PICKPOCKET_PUNISHMENTS[0][0]
        assert peasant_adult.honor == honor - PICKPOCKET_PUNISHMENTS[0][1]

        peasant_adult.current_year += 1
        with forced_dice(chances={"pickpocket (easy)": False}):
            second = do_activity(peasant_adult, "pickpocket", 0)
        assert peasant_adult.crime_strikes == 2
        assert second.message == PICKPOCKET_PUNISHMENTS[1][2]

    def test_punishment_repeats_last_tier(self, peasant_adult):
        peasant_adult.crime_strikes = 5
        with forced_dice(chances={"pickpocket (easy)": False}):
            result = do_activity(peasant_adult, "pickpocket", 0)
        assert result.message == PICKPOCKET_PUNISHMENTS[-1][2]

    def test_poaching_success_gives_venison(self, peasant_adult):
        with forced_dice(chances={"poaching": True}):
            result = do_activity(peasant_adult, "poach", 0)
        assert result.item.item_type == ItemType.FOOD
        assert result.item.value == VENISON_VALUE
        assert result.item in peasant_adult.inventory

    def test_poaching_caught(self, peasant_adult):
        with forced_dice(chances={"poaching": False}):
            do_activity(peasant_adult, "poach", 0)
        assert peasant_adult.health == 50
        assert peasant_adult.honor == 10
        assert peasant_adult.inventory == []


class TestWork:

    def test_too_young(self):
        assert do_work(make_character(age=5)).blocked

    def test_peasant_chore(self, peasant_child):
        with forced_dice(default_chance=False):
            result = do_work(peasant_child)
        assert result.success
        assert peasant_child.health == 77
        assert result.deltas["health"] == -3

    def test_artisan_may_earn_a_coin(self):
        character = make_character(age=8, social_class=SocialClass.ARTISAN)
        with forced_dice(chances={"coin for chores": True}):
            do_work(character)
        assert character.money == 1

    def test_meets_new_classmate(self, peasant_child, seeded_dice):
        peasant_child.classmates = [Classmate(id="classmate_kit", name="Kit", social_class=SocialClass.PEASANT)]
        with forced_dice(chances={"meet new classmate": True}):
            result = do_work(peasant_child)
        assert len(peasant_child.classmates) == 2
        assert peasant_child.classmates[-1].relationship == NEW_CLASSMATE_RELATIONSHIP
        assert "You met" in result.message

    def test_no_new_classmate_before_cohort(self, peasant_child):
        with forced_dice(default_chance=True):
            do_work(peasant_child)
        assert peasant_child.classmates == []


class TestInventory:

    @pytest.fixture
    def stocked(self, peasant_child):
        peasant_child.health = 40
        peasant_child.inventory = [
            InventoryItem(id="venison_1", name="Venison", item_type=ItemType.FOOD, value=15),
            InventoryItem(id="doll_1", name="Wooden Doll", item_type=ItemType.CHILDHOOD, value=1),
        ]
        return peasant_child

    def test_eat_food(self, stocked):
        result = eat_item(stocked, "venison_1")
        assert result.success
        assert stocked.health == 40 + EAT_HEALTH
        assert stocked.get_item("venison_1") is None

    def test_cannot_eat_toys(self, stocked):
        assert eat_item(stocked, "doll_1").blocked
        assert stocked.get_item("doll_1") is not None

    def test_sell(self, stocked):
        result = sell_item(stocked, "venison_1")
        assert stocked.money == 15
        assert result.item.name == "Venison"
        assert len(stocked.inventory) == 1

    def test_sell_missing(self, stocked):
        assert sell_item(stocked, "crown_jewels").blocked
