"""
Static content tables for the Tudor Life simulation.

This module provides:
- Event types shared by every pool (historical, childhood, era random, simple)
- Era and calendar lookup by (location, year)
- Job catalog, activities, crimes and childhood work chores
- Cosmetic name tables
"""

from src.tables.table_types import (
    # Enums
    EventKind,
    ChoiceTag,
    # Data classes
    ChoiceEffect,
    EventChoice,
    EventConditions,
    GameEvent,
    Era,
    # Constants
    EFFECT_STATS,
    STAT_LABELS,
    # Helpers
    effect,
    choice,
)

from src.tables.era_tables import (
    DEFAULT_LOCATION,
    DEFAULT_START_YEAR,
    ERAS,
    get_current_era,
    did_era_change,
)

from src.tables.historical_event_tables import (
    HISTORICAL_EVENTS,
    check_historical_event,
)

from src.tables.childhood_event_tables import (
    CHILDHOOD_EVENTS,
    CHILDHOOD_MAX_AGE,
    get_childhood_event_by_class,
)

from src.tables.random_event_tables import (
    RANDOM_EVENTS,
    SIMPLE_RANDOM_EVENTS,
    BABY_CALM_EVENT,
    ORDINARY_DAY_EVENT,
    YOUNG_CHILD_AGE,
    filter_choices_for_age,
    conditions_met,
    get_random_event,
    get_simple_event,
)

from src.tables.job_tables import (
    JobRequirements,
    JobListing,
    JOB_LISTINGS,
    COWORKER_ROLES,
    get_available_jobs,
    get_job_listing,
    can_take_job,
)

from src.tables.activity_tables import (
    Activity,
    ActivityChoice,
    ACTIVITIES,
    WorkChore,
    WORK_CHORES,
    get_activity,
    get_activities_for,
)

__all__ = [
    # Event types
    "EventKind",
    "ChoiceTag",
    "ChoiceEffect",
    "EventChoice",
    "EventConditions",
    "GameEvent",
    "Era",
    "EFFECT_STATS",
    "STAT_LABELS",
    "effect",
    "choice",
    # Eras
    "DEFAULT_LOCATION",
    "DEFAULT_START_YEAR",
    "ERAS",
    "get_current_era",
    "did_era_change",
    # Historical events
    "HISTORICAL_EVENTS",
    "check_historical_event",
    # Childhood events
    "CHILDHOOD_EVENTS",
    "CHILDHOOD_MAX_AGE",
    "get_childhood_event_by_class",
    # Random events
    "RANDOM_EVENTS",
    "SIMPLE_RANDOM_EVENTS",
    "BABY_CALM_EVENT",
    "ORDINARY_DAY_EVENT",
    "YOUNG_CHILD_AGE",
    "filter_choices_for_age",
    "conditions_met",
    "get_random_event",
    "get_simple_event",
    # Jobs
    "JobRequirements",
    "JobListing",
    "JOB_LISTINGS",
    "COWORKER_ROLES",
    "get_available_jobs",
    "get_job_listing",
    "can_take_job",
    # Activities
    "Activity",
    "ActivityChoice",
    "ACTIVITIES",
    "WorkChore",
    "WORK_CHORES",
    "get_activity",
    "get_activities_for",
]
