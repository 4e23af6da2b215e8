"""
Body and soul activities, crimes, and childhood work chores.

Activities can be done once per calendar year each. The last choice of every
activity is a cancel option: it carries no effect and does not use up the
year's turn.
"""

from dataclasses import dataclass
from typing import Optional

from src.data_models import SocialClass
from src.tables.table_types import ChoiceEffect, effect


@dataclass(frozen=True)
class ActivityChoice:
    label: str
    effect: Optional[ChoiceEffect] = None
    log_text: str = ""

    @property
    def is_cancel(self) -> bool:
        return self.effect is None

    def preview(self) -> str:
        return self.effect.preview() if self.effect else ""


@dataclass(frozen=True)
class Activity:
    id: str
    label: str
    title: str
    description: str
    choices: tuple[ActivityChoice, ...]
    is_crime: bool = False
    social_classes: Optional[frozenset] = None

    def fits_class(self, social_class: SocialClass) -> bool:
        return self.social_classes is None or social_class in self.social_classes


_CRIMINAL_CLASSES = frozenset({SocialClass.PEASANT, SocialClass.ARTISAN})


ACTIVITIES: tuple[Activity, ...] = (
    Activity(
        id="play_mud",
        label="Play in the Mud",
        title="The Muddy Yard",
        description="It has rained for days and the yard is nothing but mud.",
        choices=(
            ActivityChoice("Play alone", effect(strength=2),
                           "You played alone in the mud for hours. Fun, if a little lonely."),
            ActivityChoice("Mud fight with friends", effect(strength=1, health=1),
                           "A glorious mud fight! You came home filthy and happy."),
            ActivityChoice("Give up"),
        ),
    ),
    Activity(
        id="listen_priest",
        label="Listen to the Priest",
        title="Sunday Sermon",
        description="The priest preaches on the fires of hell.",
        choices=(
            ActivityChoice("Listen in fear", effect(faith=4),
                           "The sermon gave you shivers. You promised to be better."),
            ActivityChoice("Help at the altar", effect(faith=2, honor=2),
                           "You polished the altar in silence. The priest gave you blessed bread."),
            ActivityChoice("Doze off"),
        ),
    ),
    Activity(
        id="carry_wood",
        label="Carry Firewood",
        title="Winter Stores",
        description="Your father needs help bringing in the firewood.",
        choices=(
            ActivityChoice("Carry the heavy log", effect(strength=5),
                           "Your arms ache from the heavy log, but your father praised you."),
            ActivityChoice("Carry kindling", effect(strength=2),
                           "You carried only light sticks. The work was soon done."),
            ActivityChoice("Run off"),
        ),
    ),
    Activity(
        id="beg_food",
        label="Beg for Food",
        title="The Royal Carriage",
        description="Nobles are passing along the road.",
        choices=(
            ActivityChoice("Beg for scraps", effect(health=10, honor=-5),
                           "You humbled yourself in the road. A noble threw scraps with disgust."),
            ActivityChoice("Dance for coins", effect(health=5, honor=-2),
                           "You danced and capered. They laughed, but threw you a coin."),
            ActivityChoice("Hide"),
        ),
    ),
    Activity(
        id="pickpocket",
        label="Cut Purses",
        title="The Village Market",
        description="The market is crowded today. Fat purses swing from careless belts.",
        choices=(
            ActivityChoice("Rob a drunkard (easy)", effect(money=5)),
            ActivityChoice("Rob a merchant (hard)", effect(money=50)),
            ActivityChoice("Give up"),
        ),
        is_crime=True,
        social_classes=_CRIMINAL_CLASSES,
    ),
    Activity(
        id="poach",
        label="Poach Deer",
        title="The Lord's Forest",
        description="The lord's hunting grounds teem with fat deer. Hunger bites.",
        choices=(
            ActivityChoice("Hunt a deer", effect(health=20)),
            ActivityChoice("Give up"),
        ),
        is_crime=True,
        social_classes=_CRIMINAL_CLASSES,
    ),
)


# Skill-roll odds standing in for the reflex mini-games
PICKPOCKET_EASY_CHANCE = 0.60
PICKPOCKET_HARD_CHANCE = 0.25
POACHING_CHANCE = 0.50

PICKPOCKET_EASY_REWARD = 5
PICKPOCKET_HARD_REWARD = (40, 70)

# (health, honor) penalties by strike number; the last entry repeats
PICKPOCKET_PUNISHMENTS: tuple[tuple[int, int, str], ...] = (
    (10, 5, "The watch gave you a warning beating."),
    (30, 20, "A repeat offender! You were flogged at the whipping post."),
    (60, 50, "The mark of justice! They cropped your ear as a lasting warning."),
)

POACHING_PENALTY = (30, 20)
VENISON_VALUE = 15


def get_activity(activity_id: str) -> Optional[Activity]:
    for activity in ACTIVITIES:
        if activity.id == activity_id:
            return activity
    return None


def get_activities_for(social_class: SocialClass) -> tuple[Activity, ...]:
    return tuple(a for a in ACTIVITIES if a.fits_class(social_class))


# =============================================================================
# CHILDHOOD WORK
# =============================================================================


@dataclass(frozen=True)
class WorkChore:
    title: str
    log_text: str
    effect: ChoiceEffect
    coin_chance: float = 0.0


WORK_MIN_AGE = 6
NEW_CLASSMATE_CHANCE = 0.10

WORK_CHORES: dict[SocialClass, WorkChore] = {
    SocialClass.NOBILITY: WorkChore(
        title="Page",
        log_text="You drilled with your master-at-arms. Your muscles ache but your honor grows.",
        effect=effect(strength=2, honor=1, health=-2),
    ),
    SocialClass.GENTRY: WorkChore(
        title="Scholar",
        log_text="Your tutor taught you the history of your forebears.",
        effect=effect(honor=2, faith=1, health=-1),
    ),
    SocialClass.ARTISAN: WorkChore(
        title="Shop Boy",
        log_text="You helped in the shop and learned the worth of a coin.",
        effect=effect(honor=1, health=-1),
        coin_chance=0.5,
    ),
    SocialClass.PEASANT: WorkChore(
        title="Village Helper",
        log_text="You hoed the plot under a hard sun. God sees your toil.",
        effect=effect(strength=2, faith=1, health=-3),
    ),
}
