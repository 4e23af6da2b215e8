"""
Name generation tables.

Purely cosmetic: nothing here affects state transitions beyond the strings
stored on records.
"""

from src.data_models import DiceRoller, Gender, SocialClass


ENGLISH_NAMES: dict[str, tuple[str, ...]] = {
    "male": (
        "William", "John", "Henry", "Edward", "Thomas",
        "Richard", "George", "Robert", "James", "Charles",
    ),
    "female": (
        "Elizabeth", "Mary", "Catherine", "Anne", "Margaret",
        "Jane", "Alice", "Dorothy", "Joan", "Agnes",
    ),
}

SURNAMES_BY_CLASS: dict[SocialClass, tuple[str, ...]] = {
    SocialClass.NOBILITY: ("Howard", "Percy", "Neville", "Stanley", "Talbot", "Courtenay"),
    SocialClass.GENTRY: ("Ashby", "Whitmore", "Fairfax", "Harcourt", "Pelham", "Verney"),
    SocialClass.ARTISAN: ("Smith", "Taylor", "Baker", "Cooper", "Turner", "Mason", "Wright"),
    SocialClass.PEASANT: ("Brown", "Wood", "Hall", "Clark", "White", "Moore", "Field"),
}

# Epithets used for coworkers, who are known by first name and byname
COWORKER_BYNAMES = ("the Elder", "the Younger", "of the Town", "of the Fields", "the Wise", "the Strong")

PARENT_OCCUPATIONS: dict[SocialClass, tuple[str, ...]] = {
    SocialClass.NOBILITY: ("Earl", "Baron", "Lord of the Manor"),
    SocialClass.GENTRY: ("Squire", "Justice of the Peace", "Landowner"),
    SocialClass.ARTISAN: ("Blacksmith", "Carpenter", "Weaver", "Cordwainer"),
    SocialClass.PEASANT: ("Tenant Farmer", "Labourer", "Cottager"),
}

HOUSING: dict[SocialClass, str] = {
    SocialClass.NOBILITY: "a great stone manor with a deer park",
    SocialClass.GENTRY: "a timbered hall with its own orchard",
    SocialClass.ARTISAN: "rooms above the family workshop in the market town",
    SocialClass.PEASANT: "a one-room cottage of wattle and daub",
}

CLASS_NAMES: dict[SocialClass, str] = {
    SocialClass.NOBILITY: "Nobility",
    SocialClass.GENTRY: "Gentry",
    SocialClass.ARTISAN: "Artisan",
    SocialClass.PEASANT: "Peasant",
}


def random_first_name(gender: Gender) -> str:
    return DiceRoller.choice(ENGLISH_NAMES[gender.value], "first name")


def random_surname(social_class: SocialClass) -> str:
    return DiceRoller.choice(SURNAMES_BY_CLASS[social_class], "surname")


def random_gender(reason: str = "gender") -> Gender:
    return Gender.MALE if DiceRoller.chance(0.5, reason) else Gender.FEMALE
