"""Taking and leaving jobs."""

import logging
from typing import Optional

from src.data_models import Character, Job, LogType
from src.interactions.interaction_types import InteractionResult, fail, record
from src.npc.npc_generator import LifeGenerator
from src.tables.job_tables import get_job_listing


logger = logging.getLogger(__name__)


def take_job(character: Character, job_id: str, generator: Optional[LifeGenerator] = None) -> InteractionResult:
    """
    Accept a job from the character's class catalog.

    The listing's annual impacts are copied onto a new Job and a fresh set of
    coworkers is generated. Any job already held is replaced.
    """
    if character.is_child:
        return fail("You are too young to take a job.", job_id)
    listing = get_job_listing(character.social_class, job_id)
    if listing is None:
        return fail("No such position is open to you.", job_id)
    if not listing.requirements.met_by(character):
        return fail(f"You do not meet the requirements ({listing.requirements.describe()}).", job_id)

    generator = generator or LifeGenerator()
    job = Job(
        id=listing.id,
        title=listing.title,
        description=listing.description,
        income=listing.income,
        vitality_impact=listing.vitality_impact,
        strength_impact=listing.strength_impact,
        honor_impact=listing.honor_impact,
        faith_impact=listing.faith_impact,
        coworkers=generator.generate_coworkers(character.social_class),
    )
    character.current_job = job
    logger.info(f"{character.full_name} took job {job.id}")

    colleagues = ", ".join(f"{c.name} ({c.role})" for c in job.coworkers)
    result = InteractionResult(
        success=True,
        message=f"You began your career as {job.title}. Your colleagues: {colleagues}.",
        log_type=LogType.SUCCESS,
        target_id=job.id,
        action="take_job",
    )
    return record(character, result)


def resign_job(character: Character) -> InteractionResult:
    job = character.current_job
    if job is None:
        return fail("You have no job to leave.")
    character.current_job = None
    logger.info(f"{character.full_name} resigned from {job.id}")
    result = InteractionResult(
        success=True,
        message=f"You left your post as {job.title}.",
        log_type=LogType.NEUTRAL,
        target_id=job.id,
        action="resign_job",
    )
    return record(character, result)
