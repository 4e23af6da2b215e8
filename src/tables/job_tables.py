"""
Job catalog.

Each social class has its own listings. A listing carries the fixed annual
impacts copied onto the Job at acceptance, and the minimum stats required
to take it.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from src.data_models import Character, SocialClass


@dataclass(frozen=True)
class JobRequirements:
    strength: Optional[int] = None
    honor: Optional[int] = None

    def met_by(self, character: Character) -> bool:
        if self.strength is not None and character.strength < self.strength:
            return False
        if self.honor is not None and character.honor < self.honor:
            return False
        return True

    def describe(self) -> str:
        parts = []
        if self.strength is not None:
            parts.append(f"Strength {self.strength}+")
        if self.honor is not None:
            parts.append(f"Honor {self.honor}+")
        return ", ".join(parts) or "None"


@dataclass(frozen=True)
class JobListing:
    id: str
    title: str
    description: str
    income: int
    vitality_impact: int = 0
    strength_impact: int = 0
    honor_impact: int = 0
    faith_impact: int = 0
    requirements: JobRequirements = field(default_factory=JobRequirements)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "income": self.income,
            "vitality_impact": self.vitality_impact,
            "strength_impact": self.strength_impact,
            "honor_impact": self.honor_impact,
            "faith_impact": self.faith_impact,
            "requirements": self.requirements.describe(),
        }


JOB_LISTINGS: dict[SocialClass, tuple[JobListing, ...]] = {
    SocialClass.PEASANT: (
        JobListing(
            id="field_plower",
            title="Field Plower",
            description="Back-breaking work ploughing and sowing the lord's fields.",
            income=5,
            vitality_impact=-10,
            strength_impact=2,
            requirements=JobRequirements(strength=30),
        ),
        JobListing(
            id="shepherd",
            title="Shepherd",
            description="Tending the flock on the hills. Light work, but lonely.",
            income=3,
            vitality_impact=-5,
            faith_impact=1,
            requirements=JobRequirements(strength=10),
        ),
    ),
    SocialClass.ARTISAN: (
        JobListing(
            id="market_trader",
            title="Market Trader",
            description="Selling goods at the market and haggling with customers.",
            income=15,
            vitality_impact=-5,
            honor_impact=2,
            requirements=JobRequirements(honor=40),
        ),
        JobListing(
            id="craft_officer",
            title="Journeyman",
            description="Working in the family workshop and learning the whole craft.",
            income=12,
            vitality_impact=-8,
            honor_impact=5,
            requirements=JobRequirements(honor=50),
        ),
    ),
    SocialClass.GENTRY: (
        JobListing(
            id="estate_manager",
            title="Estate Steward",
            description="Managing the family's lands and rents.",
            income=30,
            vitality_impact=-5,
            honor_impact=10,
            requirements=JobRequirements(honor=60),
        ),
        JobListing(
            id="clerk",
            title="Clerk",
            description="Drafting deeds and contracts for the courts.",
            income=25,
            vitality_impact=-3,
            honor_impact=5,
            requirements=JobRequirements(honor=50),
        ),
    ),
    SocialClass.NOBILITY: (
        JobListing(
            id="court_advisor",
            title="Court Advisor",
            description="Counselling the great lords and sitting in on weighty decisions.",
            income=50,
            vitality_impact=-2,
            honor_impact=15,
            requirements=JobRequirements(honor=70),
        ),
        JobListing(
            id="knight_squire",
            title="Squire",
            description="Serving a knight and training for knighthood.",
            income=40,
            vitality_impact=-10,
            honor_impact=12,
            strength_impact=5,
            requirements=JobRequirements(honor=60),
        ),
    ),
}


COWORKER_ROLES: dict[SocialClass, tuple[str, ...]] = {
    SocialClass.PEASANT: ("Master", "Old Hand", "Apprentice"),
    SocialClass.ARTISAN: ("Master Craftsman", "Overseer", "Journeyman"),
    SocialClass.GENTRY: ("Senior Counsellor", "Fellow Steward", "Assistant"),
    SocialClass.NOBILITY: ("Veteran Lord", "Courtier", "Knight"),
}


def get_available_jobs(social_class: SocialClass) -> tuple[JobListing, ...]:
    return JOB_LISTINGS.get(social_class, JOB_LISTINGS[SocialClass.PEASANT])


def get_job_listing(social_class: SocialClass, job_id: str) -> Optional[JobListing]:
    for listing in get_available_jobs(social_class):
        if listing.id == job_id:
            return listing
    return None


def can_take_job(character: Character, listing: JobListing) -> bool:
    return not character.is_child and listing.requirements.met_by(character)
