"""
Pytest fixtures for the Tudor Life test suite.

Provides seeded dice, a clean run log per test, and ready-made characters
at the ages the rules care about.
"""

import pytest

from src.data_models import DiceRoller, SocialClass
from src.game_state.state_machine import StateMachine
from src.observability.run_log import reset_run_log
from tests.helpers import make_character, make_job


# =============================================================================
# DICE FIXTURES
# =============================================================================


@pytest.fixture
def seeded_dice():
    """Provide a seeded DiceRoller for reproducible tests."""
    DiceRoller.clear_roll_log()
    DiceRoller.set_seed(42)
    yield DiceRoller()
    DiceRoller.clear_roll_log()


@pytest.fixture
def clean_dice():
    """Provide a clean DiceRoller without seed."""
    DiceRoller.clear_roll_log()
    yield DiceRoller()
    DiceRoller.clear_roll_log()


@pytest.fixture(autouse=True)
def fresh_run_log():
    """Every test starts with an empty run log."""
    log = reset_run_log()
    log.set_game_time_provider(None)
    yield log
    log.resume()


# =============================================================================
# CHARACTER FIXTURES
# =============================================================================


@pytest.fixture
def baby():
    return make_character(age=0)


@pytest.fixture
def peasant_child():
    """An eight-year-old peasant boy with both parents living."""
    return make_character(age=8)


@pytest.fixture
def noble_child():
    return make_character(age=8, social_class=SocialClass.NOBILITY)


@pytest.fixture
def peasant_adult():
    """A twenty-year-old peasant with some coin and no job."""
    return make_character(age=20, money=20, strength=50, honor=30)


@pytest.fixture
def employed_adult():
    """A twenty-year-old holding a field job with two coworkers."""
    character = make_character(age=20, money=20, strength=50, honor=30)
    character.current_job = make_job()
    return character


@pytest.fixture
def state_machine():
    return StateMachine()
