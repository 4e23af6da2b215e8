"""
Era random events and the always-available simple pool.

Era events are matched against the tags of the current era and the
character's age bracket. A few declare extra conditions (gender, minimum
money). Choices tagged "work" or "adult" are withheld from young children.

The simple pool and the two filler events back up every turn where nothing
else matched, so a year never passes without an event to acknowledge.
"""

from typing import Optional

from src.data_models import Character, DiceRoller, Gender, SocialClass
from src.tables.table_types import (
    ChoiceTag,
    EventChoice,
    EventConditions,
    EventKind,
    GameEvent,
    choice,
)


# Children below this age never see work/adult options
YOUNG_CHILD_AGE = 6

_ALL_CLASSES = frozenset(SocialClass)
_COMMONERS = frozenset({SocialClass.PEASANT, SocialClass.ARTISAN})
_LANDED = frozenset({SocialClass.GENTRY, SocialClass.NOBILITY})


def _random(event_id: str, tags: set, title: str, description: str, choices: tuple,
            min_age: Optional[int] = None, max_age: Optional[int] = None,
            conditions: Optional[EventConditions] = None, category: str = "") -> GameEvent:
    return GameEvent(
        id=event_id,
        kind=EventKind.RANDOM,
        title=title,
        description=description,
        choices=choices,
        min_age=min_age,
        max_age=max_age,
        conditions=conditions,
        tags=frozenset(tags),
        category=category,
    )


def _simple(event_id: str, title: str, description: str, choices: tuple,
            min_age: Optional[int] = None, max_age: Optional[int] = None,
            social_classes: Optional[frozenset] = None) -> GameEvent:
    return GameEvent(
        id=event_id,
        kind=EventKind.SIMPLE,
        title=title,
        description=description,
        choices=choices,
        min_age=min_age,
        max_age=max_age,
        social_classes=social_classes,
    )


# =============================================================================
# ERA RANDOM EVENTS
# =============================================================================


RANDOM_EVENTS: tuple[GameEvent, ...] = (
    _random(
        "village_fair", {"rural"},
        "The Village Fair",
        "Jugglers, pedlars and a travelling preacher have come for the fair.",
        (
            choice("watch_jugglers", "Watch the jugglers", "You laughed until your sides ached.", sanity=4),
            choice("sell_wares", "Sell wares at a stall", "You did a brisk trade.", money=8, health=-2, tags=("work",)),
            choice("drink_ale", "Drink strong ale", "You woke in a hedge.", health=-4, honor=-2, tags=("adult",)),
        ),
        min_age=3,
    ),
    _random(
        "harvest_home", {"rural"},
        "Harvest Home",
        "The last sheaf is cut and carried in on a decorated cart.",
        (
            choice("glean", "Glean the stubble", "You gathered a basket of grain.", food=5),
            choice("reap", "Reap with the men", "Your back ached but the lord paid well.", money=5, strength=3, health=-3,
                   tags=("work",)),
        ),
        min_age=4,
    ),
    _random(
        "church_ale", {"tudor", "reformation"},
        "The Church Ale",
        "The churchwardens brew ale to raise money for the parish.",
        (
            choice("donate", "Give a coin to the church", "The vicar thanked you from the pulpit.", money=-2, faith=3,
                   honor=1),
            choice("enjoy", "Just enjoy the feast", "A fine day for all.", sanity=3),
        ),
        min_age=6,
    ),
    _random(
        "english_bible", {"reformation"},
        "The Great Bible",
        "An English Bible has been chained in the church for all to read.",
        (
            choice("read", "Listen to it being read", "The words of scripture in your own tongue moved you.", faith=5,
                   intelligence=2),
            choice("suspicious", "Distrust the new ways", "You clung to the Latin prayers.", faith=2, sanity=-1),
        ),
        min_age=8,
    ),
    _random(
        "enclosure_riot", {"tudor", "georgian"},
        "Hedges Torn Down",
        "The lord has enclosed the common. Angry villagers gather with spades.",
        (
            choice("join_riot", "Tear down the hedges", "The hedges fell, but the bailiff took names.", honor=-5,
                   strength=2, health=-5, tags=("adult",)),
            choice("stay_out", "Stay out of it", "You watched from the lane.", sanity=-1),
        ),
        min_age=14,
        category="danger",
    ),
    _random(
        "wool_merchant", {"tudor", "stuart"},
        "A Wool Merchant Calls",
        "A merchant from Norwich offers to buy fleeces and spun yarn.",
        (
            choice("sell_yarn", "Sell him yarn", "He paid fairly, for once.", money=10, tags=("work",)),
            choice("haggle", "Haggle hard", "You squeezed out a better price, and a reputation.", money=14, honor=-2,
                   tags=("work",)),
            choice("ignore", "Let him pass", "He rode on to the next village."),
        ),
        min_age=13,
        conditions=EventConditions(min_money=5),
    ),
    _random(
        "suitor_calls", {"tudor", "stuart", "georgian"},
        "A Suitor Calls",
        "A young man from the next parish has come calling with a posy.",
        (
            choice("welcome", "Welcome him", "He stayed for supper. Your mother approved.", sanity=5, honor=2),
            choice("send_away", "Send him away", "He left crestfallen.", honor=1),
        ),
        min_age=15,
        max_age=30,
        conditions=EventConditions(gender=Gender.FEMALE),
    ),
    _random(
        "press_gang", {"stuart", "georgian"},
        "The Press Gang",
        "Sailors with cudgels are pressing men for the fleet.",
        (
            choice("hide", "Hide in the loft", "They passed you by.", sanity=-3),
            choice("fight_off", "Fight them off", "You broke a nose and ran.", health=-10, strength=3, honor=3),
        ),
        min_age=16,
        max_age=45,
        conditions=EventConditions(gender=Gender.MALE),
        category="danger",
    ),
    _random(
        "highwayman", {"stuart", "georgian"},
        "Stand and Deliver",
        "A masked rider bars the road with a pistol.",
        (
            choice("hand_over", "Hand over your purse", "He tipped his hat and rode off.", money=-20),
            choice("resist", "Refuse", "The pistol cracked.", death=True, tags=("adult",)),
        ),
        min_age=16,
        conditions=EventConditions(min_money=20),
        category="danger",
    ),
    _random(
        "witch_accusation", {"tudor", "stuart"},
        "Whispers of Witchcraft",
        "A cow has sickened and an old widow is being blamed.",
        (
            choice("defend", "Defend the widow", "Some now eye you with suspicion.", honor=4, faith=-2),
            choice("accuse", "Join the accusers", "The widow was taken to the assizes.", faith=2, honor=-4, sanity=-3),
        ),
        min_age=10,
    ),
    _random(
        "puritan_preacher", {"civil_war"},
        "A Puritan Preacher",
        "A preacher in a black coat denounces maypoles and Christmas feasting.",
        (
            choice("heed", "Heed his words", "You put away your finery.", faith=6, sanity=-2),
            choice("mock", "Mock him", "The crowd laughed. He cursed you.", honor=-2, sanity=2),
        ),
        min_age=10,
    ),
    _random(
        "coffee_house", {"georgian", "stuart"},
        "The Coffee House",
        "A coffee house has opened. Men argue about news sheets over bitter cups.",
        (
            choice("debate", "Join the debate", "You made a name for your wit.", intelligence=4, money=-1, honor=2,
                   tags=("adult",)),
            choice("pass", "Walk past", "The smell followed you home."),
        ),
        min_age=16,
    ),
    _random(
        "mill_work", {"industry"},
        "Work at the Mill",
        "A new water mill seeks hands to spin cotton.",
        (
            choice("take_work", "Take the work", "Long hours, but coin in your hand.", money=12, health=-8,
                   tags=("work",)),
            choice("refuse_work", "Refuse", "You stayed with the land."),
        ),
        min_age=8,
    ),
    _random(
        "comet", {"tudor", "stuart", "georgian"},
        "A Comet in the Sky",
        "A fiery star hangs over the village. Some say it portends doom.",
        (
            choice("pray_comet", "Pray for deliverance", "Nothing terrible happened. This year.", faith=4),
            choice("stargaze", "Stay up to watch it", "It was beautiful.", sanity=3, health=-1),
        ),
    ),
)


# =============================================================================
# SIMPLE EVENTS AND FILLERS
# =============================================================================


SIMPLE_RANDOM_EVENTS: tuple[GameEvent, ...] = (
    _simple(
        "stray_dog", "A Stray Dog",
        "A thin dog follows you home.",
        (
            choice("feed_dog", "Feed it", "It wagged its tail and stayed.", food=-1, sanity=3),
            choice("chase_dog", "Chase it off", "It slunk away.", honor=-1),
        ),
        min_age=3,
    ),
    _simple(
        "rainy_spring", "A Wet Spring",
        "It has rained for forty days. Everything is mud.",
        (
            choice("stay_in", "Stay by the fire", "You caught a chill anyway.", health=-2),
        ),
        min_age=5,
    ),
    _simple(
        "found_coin", "A Glint in the Mud",
        "Something shines in the rutted lane.",
        (
            choice("keep_coin", "Keep it", "A silver penny!", money=1),
            choice("give_alms", "Put it in the poor box", "The sexton saw you do it.", faith=2, honor=1),
        ),
        min_age=5,
        social_classes=_COMMONERS,
    ),
    _simple(
        "feast_day", "Saint's Day Feast",
        "The household celebrates a saint's day with roast meats.",
        (
            choice("overeat", "Eat your fill", "You groaned contentedly all evening.", health=3),
            choice("fast", "Fast and pray instead", "You felt closer to God.", faith=3, health=-1),
        ),
        min_age=5,
        social_classes=_LANDED,
    ),
    _simple(
        "sore_tooth", "A Sore Tooth",
        "A tooth throbs in your jaw.",
        (
            choice("barber", "Visit the barber-surgeon", "He pulled it with pliers.", health=-3, money=-1),
            choice("endure", "Endure it", "It ached for weeks.", sanity=-3),
        ),
        min_age=10,
    ),
)

BABY_CALM_EVENT = _simple(
    "baby_calm", "A Quiet Day",
    "You spent the day in your mother's arms.",
    (
        choice("sleep", "Sleep", "You slept peacefully.", health=1),
    ),
)

ORDINARY_DAY_EVENT = _simple(
    "fallback", "An Ordinary Day",
    "Nothing special happened today.",
    (
        choice("continue", "Carry on", "You went on with your life."),
    ),
)


# =============================================================================
# LOOKUPS
# =============================================================================


def filter_choices_for_age(choices: tuple[EventChoice, ...], age: int) -> tuple[EventChoice, ...]:
    """Drop work and adult-only choices when the character is a young child."""
    if age >= YOUNG_CHILD_AGE:
        return choices
    blocked = {ChoiceTag.WORK.value, ChoiceTag.ADULT.value}
    return tuple(c for c in choices if not (c.tags & blocked))


def conditions_met(event: GameEvent, character: Character) -> bool:
    conditions = event.conditions
    if conditions is None:
        return True
    if conditions.gender is not None and character.gender != conditions.gender:
        return False
    if conditions.min_money is not None and character.money < conditions.min_money:
        return False
    return True


def get_random_event(era_tags: frozenset, age: int) -> Optional[GameEvent]:
    """Draw one era random event whose tags overlap the era's and whose bracket fits `age`."""
    pool = [event for event in RANDOM_EVENTS if event.tags & era_tags and event.fits_age(age)]
    if not pool:
        return None
    return DiceRoller.choice(pool, "era random event")


def get_simple_event(character: Character) -> GameEvent:
    """
    Draw from the always-available pool, falling back to a filler event.

    Never returns None.
    """
    pool = [
        event for event in SIMPLE_RANDOM_EVENTS
        if event.fits_age(character.age) and event.fits_class(character.social_class)
    ]
    if pool:
        return DiceRoller.choice(pool, "simple event")
    if character.age <= 4:
        return BABY_CALM_EVENT
    return ORDINARY_DAY_EVENT
