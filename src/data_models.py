"""
Shared data structures for the Tudor Life simulation.

A single Character record is the root of all mutable game state. It is
created once per life, mutated by the turn resolver, the effect applicator
and the interaction handlers, and replaced wholesale when the character dies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Sequence, TypeVar
import random
import uuid


T = TypeVar("T")

STAT_MIN = 0
STAT_MAX = 100

# Percentage-type stats on the player character
PERCENT_STATS = ("health", "honor", "faith", "strength", "intelligence", "sanity")

# Unbounded-above resources on the player character
RESOURCE_STATS = ("money", "food")

# Childhood ends, and work and adult choices open, at this age
ADULT_AGE = 13


# =============================================================================
# ENUMS
# =============================================================================


class SocialClass(str, Enum):
    """The four fixed social classes. Gates jobs, income and event pools."""
    NOBILITY = "nobility"
    GENTRY = "gentry"
    ARTISAN = "artisan"
    PEASANT = "peasant"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class LogType(str, Enum):
    """Classification of an entry in the per-year event log."""
    SUCCESS = "success"
    NEUTRAL = "neutral"
    FAIL = "fail"


class ItemType(str, Enum):
    """Kinds of inventory items."""
    CHILDHOOD = "childhood"  # Toys
    FOOD = "food"            # Edible, can also be sold
    VALUABLE = "valuable"


# =============================================================================
# DICE AND RANDOMIZATION
# =============================================================================


class DiceRoller:
    """
    Centralized randomization interface.
    All random draws must go through this class for reproducibility and logging.
    """

    _instance = None
    _seed: Optional[int] = None
    _roll_log: list = []

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def set_seed(cls, seed: int) -> None:
        """Set random seed for reproducibility."""
        cls._seed = seed
        random.seed(seed)

    @classmethod
    def get_seed(cls) -> Optional[int]:
        return cls._seed

    @classmethod
    def roll(cls, dice: str, reason: str = "") -> "DiceResult":
        """
        Roll dice using standard notation (e.g., '2d6', '1d20+5', '3d6-2').

        Args:
            dice: Dice notation string
            reason: Why this roll is being made (for logging)

        Returns:
            DiceResult with individual rolls and total
        """
        # Parse dice notation
        modifier = 0
        if '+' in dice:
            dice_part, mod_part = dice.split('+')
            modifier = int(mod_part)
        elif '-' in dice:
            dice_part, mod_part = dice.split('-')
            modifier = -int(mod_part)
        else:
            dice_part = dice

        num_dice, die_size = dice_part.lower().split('d')
        num_dice = int(num_dice) if num_dice else 1
        die_size = int(die_size)

        rolls = [random.randint(1, die_size) for _ in range(num_dice)]
        total = sum(rolls) + modifier

        result = DiceResult(
            notation=dice,
            rolls=rolls,
            modifier=modifier,
            total=total,
            reason=reason
        )

        cls._record(result)
        return result

    @classmethod
    def roll_range(cls, low: int, high: int, reason: str = "") -> int:
        """
        Roll an integer uniformly in [low, high], inclusive on both ends.

        Most of the life tables are expressed as ranges ("vitality 50-100")
        rather than dice, so this is the workhorse draw.
        """
        if high < low:
            low, high = high, low
        value = random.randint(low, high)
        cls._record(DiceResult(
            notation=f"{low}..{high}",
            rolls=[value],
            modifier=0,
            total=value,
            reason=reason,
        ))
        return value

    @classmethod
    def chance(cls, probability: float, reason: str = "") -> bool:
        """
        Percentage check: True with the given probability (0.0 - 1.0).

        Logged as a d100 roll so the run log reads like the rest of the rolls.
        """
        draw = random.random()
        success = draw < probability
        cls._record(DiceResult(
            notation=f"p<{probability:.2f}",
            rolls=[int(draw * 100) + 1],
            modifier=0,
            total=1 if success else 0,
            reason=reason,
        ))
        return success

    @classmethod
    def choice(cls, options: Sequence[T], reason: str = "") -> T:
        """Pick one element uniformly from a non-empty sequence."""
        if not options:
            raise ValueError(f"Cannot choose from an empty table ({reason or 'no reason'})")
        index = random.randrange(len(options))
        cls._record(DiceResult(
            notation=f"1d{len(options)}",
            rolls=[index + 1],
            modifier=0,
            total=index + 1,
            reason=reason,
        ))
        return options[index]

    @classmethod
    def roll_percentile(cls, reason: str = "") -> "DiceResult":
        """Roll d100 for percentile checks."""
        return cls.roll("1d100", reason)

    @classmethod
    def get_roll_log(cls) -> list:
        """Get the complete roll log for the session."""
        return cls._roll_log.copy()

    @classmethod
    def clear_roll_log(cls) -> None:
        """Clear the roll log."""
        cls._roll_log = []

    @classmethod
    def _record(cls, result: "DiceResult") -> None:
        cls._roll_log.append(result)

        from src.observability.run_log import get_run_log

        get_run_log().log_roll(
            notation=result.notation,
            rolls=result.rolls,
            modifier=result.modifier,
            total=result.total,
            reason=result.reason,
        )


@dataclass
class DiceResult:
    """Result of a dice roll with full information."""
    notation: str
    rolls: list[int]
    modifier: int
    total: int
    reason: str
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        if self.modifier > 0:
            return f"{self.notation}: {self.rolls} + {self.modifier} = {self.total}"
        elif self.modifier < 0:
            return f"{self.notation}: {self.rolls} - {abs(self.modifier)} = {self.total}"
        return f"{self.notation}: {self.rolls} = {self.total}"


# =============================================================================
# CLAMPING
# =============================================================================


def clamp_stat(value: int) -> int:
    """Clamp a percentage-type stat to [0, 100]."""
    return max(STAT_MIN, min(STAT_MAX, value))


def clamp_resource(value: int) -> int:
    """Clamp money/food: never negative, no upper bound."""
    return max(0, value)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


# =============================================================================
# NPC STRUCTURES
# =============================================================================


@dataclass
class NPCStats:
    """Stat bundle carried by parents and siblings."""
    vitality: int = 75
    faith: int = 50
    strength: int = 50
    honor: int = 50
    money: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "vitality": self.vitality,
            "faith": self.faith,
            "strength": self.strength,
            "honor": self.honor,
            "money": self.money,
        }


@dataclass
class Parent:
    """
    A father or mother record.

    Once `alive` flips to False the record is frozen: aging skips it and
    no interaction mutates it.
    """
    name: str
    age: int
    relationship: int
    occupation: str = ""
    alive: bool = True
    stats: Optional[NPCStats] = None


@dataclass
class Family:
    father: Parent
    mother: Parent
    housing: str = ""
    description: str = ""
    is_alive: bool = True

    def get_parent(self, npc_id: str) -> Optional[Parent]:
        if npc_id == "father":
            return self.father
        if npc_id == "mother":
            return self.mother
        return None

    def refresh_alive(self) -> None:
        """Overall flag goes false once both parents are dead."""
        if not self.father.alive and not self.mother.alive:
            self.is_alive = False


@dataclass
class Sibling:
    id: str
    name: str
    gender: Gender
    age: int = 0
    relationship: int = 50
    stats: Optional[NPCStats] = None


@dataclass
class Classmate:
    id: str
    name: str
    social_class: SocialClass
    relationship: int = 50


@dataclass
class Coworker:
    id: str
    name: str
    role: str
    relationship: int = 50


@dataclass
class Job:
    """A job held by the character. Annual impacts are fixed at acceptance."""
    id: str
    title: str
    description: str
    income: int
    vitality_impact: int = 0
    strength_impact: int = 0
    honor_impact: int = 0
    faith_impact: int = 0
    coworkers: list[Coworker] = field(default_factory=list)

    def get_coworker(self, coworker_id: str) -> Optional[Coworker]:
        for coworker in self.coworkers:
            if coworker.id == coworker_id:
                return coworker
        return None


@dataclass
class InventoryItem:
    id: str
    name: str
    item_type: ItemType
    value: int = 0


# =============================================================================
# CHARACTER
# =============================================================================


@dataclass
class NarrativeFlags:
    """Persistent markers consulted by later event filtering."""
    is_orphan: bool = False
    has_apprentice: bool = False
    living_with: str = "parents"
    last_major_event: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def merge(self, flags: dict[str, Any]) -> None:
        for key, value in flags.items():
            if hasattr(self, key) and key != "extra":
                setattr(self, key, value)
            else:
                self.extra[key] = value


@dataclass
class YearLogEntry:
    text: str
    log_type: LogType


@dataclass
class YearLog:
    year: int
    entries: list[YearLogEntry] = field(default_factory=list)


@dataclass
class InteractionRecord:
    year: int
    npc_id: str
    action: str


@dataclass
class Character:
    """
    The single mutable root of game state.

    Percentage stats are kept in [0, 100] and money/food non-negative by
    every mutating routine; nothing writes these fields without clamping.
    """
    name: str
    surname: str
    gender: Gender
    social_class: SocialClass
    family: Family
    age: int = 0
    health: int = 80
    honor: int = 0
    faith: int = 0
    strength: int = 0
    intelligence: int = 0
    sanity: int = 100
    money: int = 0
    food: int = 0
    location: str = "England"
    birth_year: int = 1500
    current_year: int = 1500
    era: str = "tudor"
    traits: list[str] = field(default_factory=list)
    narrative_flags: NarrativeFlags = field(default_factory=NarrativeFlags)
    used_childhood_events: set[str] = field(default_factory=set)
    siblings: list[Sibling] = field(default_factory=list)
    classmates: list[Classmate] = field(default_factory=list)
    event_log: list[YearLog] = field(default_factory=list)
    interaction_history: list[InteractionRecord] = field(default_factory=list)
    activity_history: dict[str, int] = field(default_factory=dict)
    inventory: list[InventoryItem] = field(default_factory=list)
    current_job: Optional[Job] = None
    crime_strikes: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"

    @property
    def is_child(self) -> bool:
        return self.age < ADULT_AGE

    def adjust_stat(self, stat: str, delta: int) -> int:
        """
        Apply a delta to one stat with the right clamp and return the new value.
        """
        if stat in PERCENT_STATS:
            value = clamp_stat(getattr(self, stat) + delta)
        elif stat in RESOURCE_STATS:
            value = clamp_resource(getattr(self, stat) + delta)
        else:
            raise KeyError(f"Unknown character stat: {stat}")
        setattr(self, stat, value)
        return value

    def get_sibling(self, sibling_id: str) -> Optional[Sibling]:
        for sibling in self.siblings:
            if sibling.id == sibling_id:
                return sibling
        return None

    def get_classmate(self, classmate_id: str) -> Optional[Classmate]:
        for classmate in self.classmates:
            if classmate.id == classmate_id:
                return classmate
        return None

    def get_item(self, item_id: str) -> Optional[InventoryItem]:
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None

    def add_year_entry(self, text: str, log_type: LogType) -> None:
        """Append to the per-year event log, creating the year bucket if needed."""
        for year_log in self.event_log:
            if year_log.year == self.current_year:
                year_log.entries.append(YearLogEntry(text, log_type))
                return
        self.event_log.append(
            YearLog(year=self.current_year, entries=[YearLogEntry(text, log_type)])
        )

    def has_interacted(self, npc_id: str, action: str) -> bool:
        return any(
            record.year == self.current_year and record.npc_id == npc_id and record.action == action
            for record in self.interaction_history
        )

    def snapshot(self) -> dict[str, Any]:
        """Read-only view for presentation collaborators."""
        return {
            "name": self.full_name,
            "age": self.age,
            "gender": self.gender.value,
            "social_class": self.social_class.value,
            "year": self.current_year,
            "era": self.era,
            "location": self.location,
            "health": self.health,
            "honor": self.honor,
            "faith": self.faith,
            "strength": self.strength,
            "intelligence": self.intelligence,
            "sanity": self.sanity,
            "money": self.money,
            "food": self.food,
            "traits": list(self.traits),
            "job": self.current_job.title if self.current_job else None,
            "siblings": len(self.siblings),
            "classmates": len(self.classmates),
            "inventory": [item.name for item in self.inventory],
        }


# =============================================================================
# STATE TRACKING
# =============================================================================


@dataclass
class TransitionLog:
    """Record of a lifecycle state transition."""
    timestamp: datetime
    from_state: str
    to_state: str
    trigger: str
    context: dict[str, Any] = field(default_factory=dict)
