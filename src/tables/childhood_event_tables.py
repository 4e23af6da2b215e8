"""
Childhood event tables, one pool per social class.

Childhood events are offered up to age 12. An event id, once presented, is
recorded on the character and never offered again in that life.
"""

from typing import Optional

from src.data_models import Character, DiceRoller, SocialClass
from src.tables.table_types import EventKind, GameEvent, choice


CHILDHOOD_MAX_AGE = 12


def _childhood(event_id: str, social_class: SocialClass, title: str, description: str,
               choices: tuple, min_age: int = 0, max_age: int = CHILDHOOD_MAX_AGE,
               category: str = "") -> GameEvent:
    return GameEvent(
        id=event_id,
        kind=EventKind.CHILDHOOD,
        title=title,
        description=description,
        choices=choices,
        min_age=min_age,
        max_age=max_age,
        social_classes=frozenset({social_class}),
        category=category,
    )


CHILDHOOD_EVENTS: dict[SocialClass, tuple[GameEvent, ...]] = {
    SocialClass.PEASANT: (
        _childhood(
            "peasant_first_steps", SocialClass.PEASANT,
            "First Steps on the Dirt Floor",
            "You pull yourself up on the edge of the hearth and totter forward.",
            (
                choice("walk", "Walk to your mother", "Your mother scooped you up, laughing.", health=2),
                choice("crawl", "Crawl to the goat", "The goat was unimpressed.", strength=1),
            ),
            min_age=1, max_age=3,
        ),
        _childhood(
            "peasant_hungry_winter", SocialClass.PEASANT,
            "A Hungry Winter",
            "The harvest failed. There is barely enough pottage for everyone.",
            (
                choice("share", "Share your bowl with your mother", "She kissed your forehead.", health=-5, honor=3, faith=2),
                choice("eat", "Eat every scrap", "Your belly was full for once.", health=3),
            ),
            min_age=3,
        ),
        _childhood(
            "peasant_scare_crows", SocialClass.PEASANT,
            "Scaring Crows",
            "You are sent to the fields with a rattle to keep the birds off the seed.",
            (
                choice("diligent", "Run the rows all day", "Not a single seed was lost.", strength=3, health=-2),
                choice("nap", "Nap under the hedge", "The crows feasted. Your father was furious.", honor=-2),
            ),
            min_age=5,
        ),
        _childhood(
            "peasant_new_baby", SocialClass.PEASANT,
            "The Midwife Comes",
            "The midwife bustles in and you are sent outside to wait in the cold.",
            (
                choice("wait", "Wait by the door", "You heard a thin cry. A new sibling!", add_sibling=True),
            ),
            min_age=3, max_age=10,
        ),
        _childhood(
            "peasant_fever", SocialClass.PEASANT,
            "Marsh Fever",
            "A fever burns through the village. You shiver under a pile of sacking.",
            (
                choice("herbs", "Drink the wise woman's herbs", "The bitter brew broke the fever.", health=-8, faith=-1),
                choice("prayers", "Trust in prayer", "You recovered slowly.", health=-12, faith=4),
            ),
            min_age=2,
            category="danger",
        ),
        _childhood(
            "peasant_orphan_rumour", SocialClass.PEASANT,
            "Taken in by the Miller",
            "Your parents cannot feed every mouth this year. The miller offers to take you on.",
            (
                choice("go", "Go to the mill", "You sleep among the flour sacks now.", strength=3,
                       set_flags={"living_with": "miller", "has_apprentice": True}),
                choice("stay", "Beg to stay home", "Your mother could not send you away.", health=-3),
            ),
            min_age=8,
        ),
    ),
    SocialClass.ARTISAN: (
        _childhood(
            "artisan_workshop_sawdust", SocialClass.ARTISAN,
            "Sawdust and Shavings",
            "You play in the curls of wood beneath your father's bench.",
            (
                choice("build", "Build a little tower", "It stood for a whole minute.", intelligence=2),
                choice("eat_shavings", "Taste the shavings", "They were not good.", health=-1),
            ),
            min_age=1, max_age=4,
        ),
        _childhood(
            "artisan_guild_feast", SocialClass.ARTISAN,
            "The Guild Feast",
            "The guild holds its feast day. Masters in their best coats fill the hall.",
            (
                choice("serve", "Help serve the masters", "A master praised your manners.", honor=3),
                choice("steal_pie", "Steal a pie", "It was delicious, and nobody saw.", health=2, honor=-1),
            ),
            min_age=5,
        ),
        _childhood(
            "artisan_letters", SocialClass.ARTISAN,
            "Learning Your Letters",
            "The parish clerk teaches the craftsmen's children to read on Sundays.",
            (
                choice("study", "Study hard", "You can read the shop signs now.", intelligence=5, add_trait="Literate"),
                choice("skip", "Skip the lesson", "You went fishing instead.", sanity=2),
            ),
            min_age=6,
        ),
        _childhood(
            "artisan_burnt_hand", SocialClass.ARTISAN,
            "Too Close to the Forge",
            "You reach for a glowing nail in the workshop.",
            (
                choice("grab", "Grab it", "You will carry the scar forever.", health=-10, add_trait="Scarred Hand"),
                choice("tongs", "Use the tongs like Father", "Your father nodded slowly.", intelligence=2),
            ),
            min_age=4,
            category="danger",
        ),
        _childhood(
            "artisan_market_day", SocialClass.ARTISAN,
            "Market Day",
            "You mind the stall while your mother haggles over thread.",
            (
                choice("sell", "Sell a bowl yourself", "A farmer paid you two coins.", money=2, honor=1),
                choice("wander", "Wander off to see the bear", "The dancing bear was magnificent.", sanity=3),
            ),
            min_age=7,
        ),
    ),
    SocialClass.GENTRY: (
        _childhood(
            "gentry_wet_nurse", SocialClass.GENTRY,
            "The Wet Nurse",
            "A village woman has been hired to nurse you.",
            (
                choice("thrive", "Thrive", "You grew plump and rosy.", health=4),
            ),
            min_age=0, max_age=2,
        ),
        _childhood(
            "gentry_tutor", SocialClass.GENTRY,
            "A Tutor Arrives",
            "Your father has engaged a Cambridge man to teach you Latin.",
            (
                choice("apply", "Apply yourself", "Amo, amas, amat.", intelligence=6),
                choice("mischief", "Put a frog in his boot", "He left within the month.", intelligence=-1, sanity=3),
            ),
            min_age=6,
        ),
        _childhood(
            "gentry_hunt", SocialClass.GENTRY,
            "Your First Hunt",
            "You are allowed to ride behind the hunt on a small pony.",
            (
                choice("keep_up", "Keep up with the hounds", "You were blooded at the kill.", strength=3, honor=3),
                choice("fall", "Take the hedge too fast", "You landed in a ditch.", health=-6),
            ),
            min_age=8,
            category="danger",
        ),
        _childhood(
            "gentry_church_pew", SocialClass.GENTRY,
            "The Family Pew",
            "You sit in the family pew at the front of the church while the village watches.",
            (
                choice("pious", "Sit still and pray", "The vicar commended your piety.", faith=4, honor=1),
                choice("fidget", "Fidget and whisper", "Your mother pinched your arm.", honor=-1),
            ),
            min_age=4,
        ),
        _childhood(
            "gentry_dowry_talk", SocialClass.GENTRY,
            "Talk of a Match",
            "Your parents discuss a future match with a neighbouring family.",
            (
                choice("agree", "Promise to obey", "Your father was pleased.", honor=3),
                choice("protest", "Protest loudly", "You were sent to bed without supper.", health=-1, sanity=2),
            ),
            min_age=10,
        ),
    ),
    SocialClass.NOBILITY: (
        _childhood(
            "nobility_christening", SocialClass.NOBILITY,
            "A Grand Christening",
            "Half the county attends your christening. A duke stands godparent.",
            (
                choice("cry", "Wail through the service", "It is said to drive out the devil.", faith=2),
                choice("sleep", "Sleep peacefully", "The guests declared you a perfect child.", honor=2),
            ),
            min_age=0, max_age=1,
        ),
        _childhood(
            "nobility_page", SocialClass.NOBILITY,
            "Sent as a Page",
            "You are sent to serve in a great household to learn courtly ways.",
            (
                choice("serve", "Serve with grace", "Your lord noticed your diligence.", honor=5, intelligence=2,
                       set_flags={"living_with": "great_household"}),
                choice("homesick", "Weep for home", "The other pages mocked you.", sanity=-5),
            ),
            min_age=7,
        ),
        _childhood(
            "nobility_fencing", SocialClass.NOBILITY,
            "Fencing Lessons",
            "An Italian master drills you with the rapier.",
            (
                choice("practice", "Practice until dusk", "Your wrist is strong now.", strength=4, health=-2,
                       add_trait="Swordsman"),
                choice("bribe", "Bribe the master to end early", "He pocketed the coin and shrugged.", money=-5),
            ),
            min_age=8,
        ),
        _childhood(
            "nobility_court_visit", SocialClass.NOBILITY,
            "A Visit to Court",
            "You are presented at court. The hall glitters with silk and jewels.",
            (
                choice("bow", "Bow deeply", "A lady of the chamber smiled at you.", honor=4),
                choice("stare", "Stare at the King", "A courtier cuffed your ear.", honor=-2, sanity=2),
            ),
            min_age=5,
        ),
        _childhood(
            "nobility_pox", SocialClass.NOBILITY,
            "Smallpox",
            "Spots appear on your face. The physicians are summoned.",
            (
                choice("bleed", "Submit to bleeding", "You survived, pale and weak.", health=-15),
                choice("red_room", "Lie in the red room", "The red cloth did little but you recovered.", health=-10,
                       add_trait="Pockmarked"),
            ),
            min_age=2,
            category="danger",
        ),
    ),
}


def get_childhood_event_by_class(character: Character) -> Optional[GameEvent]:
    """
    Pick a random unused childhood event for the character's social class
    that fits the current age.
    """
    pool = CHILDHOOD_EVENTS.get(character.social_class, CHILDHOOD_EVENTS[SocialClass.PEASANT])
    available = [
        event for event in pool
        if event.id not in character.used_childhood_events and event.fits_age(character.age)
    ]
    if not available:
        return None
    return DiceRoller.choice(available, "childhood event")
