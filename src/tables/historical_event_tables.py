"""
Historical event calendar.

Fixed (year, location) entries that take priority over every other event
pool. A life sees each at most once because the year only moves forward.
"""

from typing import Optional

from src.data_models import Character
from src.tables.table_types import EventKind, GameEvent, choice


def _historical(event_id: str, year: int, title: str, description: str, choices: tuple, **kwargs) -> GameEvent:
    return GameEvent(
        id=event_id,
        kind=EventKind.HISTORICAL,
        title=title,
        description=description,
        choices=choices,
        year=year,
        location=kwargs.pop("location", "England"),
        **kwargs,
    )


HISTORICAL_EVENTS: tuple[GameEvent, ...] = (
    _historical(
        "henry_viii_crowned",
        1509,
        "A New King",
        "Henry VIII is crowned. Bells ring in every parish and ale flows in the streets.",
        (
            choice("celebrate", "Join the celebrations", "You danced until the torches burned out.", health=-2, honor=2),
            choice("pray", "Pray for the new king", "The priest blessed your devotion.", faith=3),
        ),
    ),
    _historical(
        "act_of_supremacy",
        1534,
        "The Act of Supremacy",
        "The King declares himself Supreme Head of the Church in England. Every subject must swear the oath.",
        (
            choice("swear", "Swear the oath", "You swore. Your neighbours nodded in approval.", honor=5, faith=-5),
            choice("refuse", "Refuse in silence", "You kept faith with Rome, and some now watch you closely.", faith=8, honor=-8),
        ),
        min_age=13,
    ),
    _historical(
        "dissolution_of_monasteries",
        1536,
        "Dissolution of the Monasteries",
        "The King's commissioners close the abbeys. Monks are turned out and the land is sold.",
        (
            choice("buy_land", "Bid for abbey land", "You secured a modest plot of former abbey land.", money=-40, honor=6, tags=("adult",)),
            choice("shelter_monk", "Shelter a displaced monk", "The old monk taught you your letters before moving on.", faith=5, intelligence=5),
            choice("watch", "Watch from afar", "The bells of the abbey fell silent."),
        ),
        category="danger",
    ),
    _historical(
        "sweating_sickness",
        1551,
        "The Sweating Sickness",
        "The sweat has returned. Men are merry at dinner and dead by supper.",
        (
            choice("flee", "Flee to the countryside", "You escaped the worst of it, at a price.", money=-10, health=-3),
            choice("stay", "Stay and tend the sick", "You survived, though the fever nearly took you.", health=-20, honor=8, faith=4),
        ),
        category="danger",
    ),
    _historical(
        "queen_mary",
        1553,
        "Mary Takes the Throne",
        "Queen Mary restores the old faith. Protestant preachers flee or burn.",
        (
            choice("conform", "Return to the Mass", "You knelt at the restored altar.", faith=4),
            choice("hide_bible", "Hide your English Bible", "The book stays under the floorboards.", faith=2, sanity=-5),
        ),
    ),
    _historical(
        "elizabeth_crowned",
        1558,
        "Elizabeth Is Crowned",
        "Elizabeth, daughter of Anne Boleyn, is Queen. The realm holds its breath.",
        (
            choice("cheer", "Cheer the procession", "The Queen's barge passed in a blaze of gold.", honor=2, sanity=3),
            choice("stay_home", "Stay at home", "You heard the bells from your window."),
        ),
    ),
    _historical(
        "spanish_armada",
        1588,
        "The Spanish Armada",
        "The Armada sails up the Channel. Beacons burn along the coast.",
        (
            choice("muster", "Answer the muster", "You stood with the trained bands at Tilbury.", strength=5, honor=10, health=-5, tags=("adult",)),
            choice("pray_wind", "Pray for a Protestant wind", "The wind came, and the Spanish fleet was scattered.", faith=6),
        ),
    ),
    _historical(
        "union_of_crowns",
        1603,
        "The Union of the Crowns",
        "The old Queen is dead. James of Scotland rides south to take her throne.",
        (
            choice("welcome", "Welcome the new King", "A new dynasty begins.", honor=3),
            choice("mourn", "Mourn Gloriana", "You wore black for a month.", faith=2, sanity=-2),
        ),
    ),
    _historical(
        "gunpowder_plot",
        1605,
        "The Gunpowder Plot",
        "A plot to blow up Parliament is uncovered. Catholic households are searched.",
        (
            choice("denounce", "Denounce the plotters", "You lit a bonfire with your neighbours.", honor=5),
            choice("keep_quiet", "Keep your head down", "The searchers passed your door.", sanity=-3),
        ),
    ),
    _historical(
        "civil_war",
        1642,
        "Civil War",
        "King and Parliament raise armies. Every household must choose a side.",
        (
            choice("royalist", "Declare for the King", "You rode with the Cavaliers.", honor=8, health=-10, tags=("adult",)),
            choice("parliament", "Declare for Parliament", "You joined the Roundheads.", faith=6, health=-10, tags=("adult",)),
            choice("neutral", "Stay neutral", "Both armies took your grain anyway.", food=-10, money=-10),
        ),
        category="danger",
    ),
    _historical(
        "great_plague",
        1665,
        "The Great Plague",
        "Plague sweeps London. Red crosses are painted on the doors of the sick.",
        (
            choice("flee_city", "Leave the city", "You fled with what you could carry.", money=-20),
            choice("stay_city", "Stay and endure", "You lived, but saw too much.", health=-25, sanity=-15),
        ),
        category="danger",
    ),
    _historical(
        "great_fire",
        1666,
        "The Great Fire of London",
        "A fire in Pudding Lane spreads across the city for four days.",
        (
            choice("fight_fire", "Help fight the fire", "You pulled down houses to make a firebreak.", strength=4, honor=8, health=-10),
            choice("save_goods", "Save your own goods", "You saved your purse, if not your neighbours'.", honor=-4),
        ),
    ),
)


def check_historical_event(year: int, location: str, character: Character) -> Optional[GameEvent]:
    """
    Return the historical event for (year, location), if the character is
    eligible for it.
    """
    for event in HISTORICAL_EVENTS:
        if event.year == year and event.location == location and event.fits_age(character.age):
            return event
    return None
