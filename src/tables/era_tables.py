"""
Era and calendar tables.

An era is derived from (location, year) by table lookup. Its tags select the
pool of era random events.
"""

from typing import Optional

from src.tables.table_types import Era


DEFAULT_LOCATION = "England"
DEFAULT_START_YEAR = 1500

LOCATION_DESCRIPTIONS: dict[str, str] = {
    "England": "Kingdom of England",
}


ERAS: tuple[Era, ...] = (
    Era(
        id="tudor",
        name="Tudor Era",
        location="England",
        start_year=1485,
        end_year=1602,
        description="The Tudor dynasty rules England. The Church is torn between Rome and the Crown.",
        tags=frozenset({"tudor", "reformation", "rural"}),
    ),
    Era(
        id="stuart",
        name="Stuart Era",
        location="England",
        start_year=1603,
        end_year=1713,
        description="The Stuarts take the throne. Parliament and King will soon come to blows.",
        tags=frozenset({"stuart", "civil_war", "rural"}),
    ),
    Era(
        id="georgian",
        name="Georgian Era",
        location="England",
        start_year=1714,
        end_year=1836,
        description="The Hanoverian Georges reign. Enclosure and industry reshape the land.",
        tags=frozenset({"georgian", "industry", "rural"}),
    ),
)


def get_current_era(location: str, year: int) -> Optional[Era]:
    """Return the era covering `year` at `location`, if any."""
    for era in ERAS:
        if era.location == location and era.contains(year):
            return era
    return None


def did_era_change(location: str, old_year: int, new_year: int) -> Optional[Era]:
    """
    Return the new era if moving from `old_year` to `new_year` crosses an
    era boundary at `location`, otherwise None.
    """
    old_era = get_current_era(location, old_year)
    new_era = get_current_era(location, new_year)
    if new_era is None:
        return None
    if old_era is None or old_era.id != new_era.id:
        return new_era
    return None
