"""
Event selection.

Picks the event to present for the current year by walking the pools in
priority order: historical calendar, childhood table, era random pool, then
the always-available simple pool and its fillers. Selection never mutates
the character; the caller records childhood ids once the event is shown.
"""

import logging
from typing import Optional

from src.data_models import Character
from src.tables.childhood_event_tables import CHILDHOOD_MAX_AGE, get_childhood_event_by_class
from src.tables.era_tables import get_current_era
from src.tables.historical_event_tables import check_historical_event
from src.tables.random_event_tables import (
    conditions_met,
    filter_choices_for_age,
    get_random_event,
    get_simple_event,
)
from src.tables.table_types import GameEvent


logger = logging.getLogger(__name__)


def select_era_event(character: Character) -> Optional[GameEvent]:
    """
    Draw from the current era's pool.

    Returns None when there is no era, nothing in the pool fits, the drawn
    event's conditions fail, or age filtering leaves it without choices.
    """
    era = get_current_era(character.location, character.current_year)
    if era is None:
        return None
    event = get_random_event(era.tags, character.age)
    if event is None:
        return None
    if not conditions_met(event, character):
        logger.debug(f"Era event {event.id} drawn but conditions not met")
        return None
    choices = filter_choices_for_age(event.choices, character.age)
    if not choices:
        return None
    return event.with_choices(choices)


def select_event(character: Character) -> GameEvent:
    """
    Return the event to present this year. Never returns None: the simple
    pool always yields at least a filler event.
    """
    historical = check_historical_event(character.current_year, character.location, character)
    if historical is not None:
        choices = filter_choices_for_age(historical.choices, character.age)
        return historical.with_choices(choices) if choices else historical

    if character.age <= CHILDHOOD_MAX_AGE:
        childhood = get_childhood_event_by_class(character)
        if childhood is not None:
            return childhood

    era_event = select_era_event(character)
    if era_event is not None:
        return era_event

    return get_simple_event(character)
