"""
Life and NPC generation.

Creates the character at the start of a new life (family background, class,
starting stats), and the NPCs that join later: siblings, the classmate
cohort, and coworkers when a job is taken.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.data_models import (
    Character,
    Classmate,
    Coworker,
    DiceRoller,
    Family,
    Gender,
    NPCStats,
    Parent,
    Sibling,
    SocialClass,
    YearLog,
    new_id,
)
from src.tables.era_tables import (
    DEFAULT_LOCATION,
    DEFAULT_START_YEAR,
    LOCATION_DESCRIPTIONS,
    get_current_era,
)
from src.tables.job_tables import COWORKER_ROLES
from src.tables.name_tables import (
    CLASS_NAMES,
    COWORKER_BYNAMES,
    HOUSING,
    PARENT_OCCUPATIONS,
    random_first_name,
    random_gender,
    random_surname,
)


logger = logging.getLogger(__name__)


# Weighted class draw for a newborn, out of 100
SOCIAL_CLASS_WEIGHTS: tuple[tuple[SocialClass, int], ...] = (
    (SocialClass.PEASANT, 60),
    (SocialClass.ARTISAN, 25),
    (SocialClass.GENTRY, 10),
    (SocialClass.NOBILITY, 5),
)

# (honor range, money range) for NPC stat bundles, per class
NPC_CLASS_RANGES: dict[SocialClass, tuple[tuple[int, int], tuple[int, int]]] = {
    SocialClass.NOBILITY: ((70, 100), (500, 1000)),
    SocialClass.GENTRY: ((50, 80), (100, 300)),
    SocialClass.ARTISAN: ((30, 60), (50, 200)),
    SocialClass.PEASANT: ((10, 40), (0, 25)),
}

# Classmate cohort composition at age 6, per class
CLASSMATE_COHORTS: dict[SocialClass, tuple[SocialClass, ...]] = {
    SocialClass.NOBILITY: (SocialClass.NOBILITY, SocialClass.NOBILITY, SocialClass.GENTRY),
    SocialClass.GENTRY: (SocialClass.GENTRY, SocialClass.GENTRY, SocialClass.GENTRY, SocialClass.NOBILITY),
    SocialClass.ARTISAN: (
        SocialClass.ARTISAN, SocialClass.ARTISAN, SocialClass.ARTISAN,
        SocialClass.PEASANT, SocialClass.PEASANT,
    ),
    SocialClass.PEASANT: (
        SocialClass.PEASANT, SocialClass.PEASANT, SocialClass.PEASANT,
        SocialClass.PEASANT, SocialClass.PEASANT, SocialClass.ARTISAN,
    ),
}

FATHER_RELATIONSHIP = 75
MOTHER_RELATIONSHIP = 85
NEWBORN_SIBLING_RELATIONSHIP = 50
DEFAULT_NPC_RELATIONSHIP = 50


@dataclass
class NewLifeResult:
    """A freshly generated character and the opening narrative lines."""
    character: Character
    messages: list[str] = field(default_factory=list)


class LifeGenerator:
    """
    Generator for new lives and the NPCs around them.

    Usage:
        generator = LifeGenerator()
        result = generator.generate_new_life()
        cohort = generator.generate_classmates(result.character.social_class)
    """

    # =========================================================================
    # NEW LIFE
    # =========================================================================

    def roll_social_class(self) -> SocialClass:
        roll = DiceRoller.roll_range(1, 100, "social class")
        threshold = 0
        for social_class, weight in SOCIAL_CLASS_WEIGHTS:
            threshold += weight
            if roll <= threshold:
                return social_class
        return SocialClass.PEASANT

    def generate_npc_stats(self, social_class: SocialClass) -> NPCStats:
        honor_range, money_range = NPC_CLASS_RANGES[social_class]
        return NPCStats(
            vitality=DiceRoller.roll_range(50, 100, "npc vitality"),
            faith=DiceRoller.roll_range(20, 100, "npc faith"),
            strength=DiceRoller.roll_range(20, 80, "npc strength"),
            honor=DiceRoller.roll_range(*honor_range, "npc honor"),
            money=DiceRoller.roll_range(*money_range, "npc money"),
        )

    def generate_family(self, social_class: SocialClass) -> Family:
        father_occupation = DiceRoller.choice(PARENT_OCCUPATIONS[social_class], "father occupation")
        father = Parent(
            name=random_first_name(Gender.MALE),
            age=DiceRoller.roll_range(25, 34, "father age"),
            relationship=FATHER_RELATIONSHIP,
            occupation=father_occupation,
            stats=self.generate_npc_stats(social_class),
        )
        mother = Parent(
            name=random_first_name(Gender.FEMALE),
            age=DiceRoller.roll_range(20, 27, "mother age"),
            relationship=MOTHER_RELATIONSHIP,
            occupation="Wife and mother",
            stats=self.generate_npc_stats(social_class),
        )
        return Family(
            father=father,
            mother=mother,
            housing=HOUSING[social_class],
            description=f"A {CLASS_NAMES[social_class].lower()} household.",
        )

    def generate_new_life(
        self,
        location: str = DEFAULT_LOCATION,
        start_year: int = DEFAULT_START_YEAR,
        force_class: Optional[SocialClass] = None,
        force_gender: Optional[Gender] = None,
    ) -> NewLifeResult:
        """
        Create a newborn character with a fresh family.

        Args:
            location: Where the life begins
            start_year: Birth year
            force_class: Optional class override for testing
            force_gender: Optional gender override for testing
        """
        gender = force_gender or random_gender("newborn gender")
        social_class = force_class or self.roll_social_class()
        family = self.generate_family(social_class)
        era = get_current_era(location, start_year)

        character = Character(
            name=random_first_name(gender),
            surname=random_surname(social_class),
            gender=gender,
            social_class=social_class,
            family=family,
            age=0,
            health=DiceRoller.roll_range(70, 90, "newborn health"),
            honor=DiceRoller.roll_range(0, 10, "newborn honor"),
            strength=DiceRoller.roll_range(0, 5, "newborn strength"),
            sanity=100,
            location=location,
            birth_year=start_year,
            current_year=start_year,
            era=era.id if era else "tudor",
        )
        character.event_log.append(YearLog(year=start_year))

        child = "a boy" if gender == Gender.MALE else "a girl"
        messages = [
            f"{character.full_name} was born, {child}.",
            f"Social class: {CLASS_NAMES[social_class]}",
            f"Your father: {family.father.name}, {family.father.occupation}",
            f"Your mother: {family.mother.name}",
            f"Your family lives in {family.housing}.",
            f"Year: {start_year} - {LOCATION_DESCRIPTIONS.get(location, location)}",
        ]
        if era:
            messages.append(era.name)

        logger.info(f"New life: {character.full_name} ({social_class.value}, {gender.value})")
        return NewLifeResult(character=character, messages=messages)

    # =========================================================================
    # LATER NPCS
    # =========================================================================

    def generate_sibling(
        self,
        social_class: SocialClass,
        relationship: int = NEWBORN_SIBLING_RELATIONSHIP,
        with_stats: bool = True,
    ) -> Sibling:
        gender = random_gender("sibling gender")
        return Sibling(
            id=new_id("sibling"),
            name=random_first_name(gender),
            gender=gender,
            age=0,
            relationship=relationship,
            stats=self.generate_npc_stats(social_class) if with_stats else None,
        )

    def generate_classmate(self, social_class: SocialClass) -> Classmate:
        gender = random_gender("classmate gender")
        return Classmate(
            id=new_id("classmate"),
            name=f"{random_first_name(gender)} {random_surname(social_class)}",
            social_class=social_class,
            relationship=DEFAULT_NPC_RELATIONSHIP,
        )

    def generate_classmates(self, social_class: SocialClass) -> list[Classmate]:
        cohort = CLASSMATE_COHORTS.get(social_class, CLASSMATE_COHORTS[SocialClass.PEASANT])
        return [self.generate_classmate(member_class) for member_class in cohort]

    def generate_coworkers(self, social_class: SocialClass) -> list[Coworker]:
        """Two or three coworkers, roles cycling through the class role list."""
        roles = COWORKER_ROLES.get(social_class, COWORKER_ROLES[SocialClass.PEASANT])
        count = DiceRoller.roll_range(2, 3, "coworker count")
        coworkers = []
        for i in range(count):
            gender = random_gender("coworker gender")
            byname = DiceRoller.choice(COWORKER_BYNAMES, "coworker byname")
            coworkers.append(Coworker(
                id=new_id("coworker"),
                name=f"{random_first_name(gender)} {byname}",
                role=roles[i % len(roles)],
                relationship=DEFAULT_NPC_RELATIONSHIP,
            ))
        return coworkers
