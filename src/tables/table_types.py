"""
Core types for the static content tables.

Every event the player can be shown, whether from the historical calendar,
a childhood table, an era pool, the always-available simple pool or a
coworker reaction, is a GameEvent discriminated by EventKind. Events are
immutable templates; selection filters the tables against the character,
and the applicator reads the declared ChoiceEffect of the picked choice.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from src.data_models import Gender, SocialClass


class EventKind(str, Enum):
    """Discriminator for the event variants."""
    HISTORICAL = "historical"
    CHILDHOOD = "childhood"
    RANDOM = "random"
    SIMPLE = "simple"
    NPC_REACTIVE = "npc_reactive"


class ChoiceTag(str, Enum):
    """Tags used to filter choices out for young children."""
    WORK = "work"
    ADULT = "adult"


# Stat fields a ChoiceEffect may carry, in display order
EFFECT_STATS = (
    "health",
    "sanity",
    "honor",
    "intelligence",
    "faith",
    "strength",
    "money",
    "food",
)

STAT_LABELS = {
    "health": "Health",
    "sanity": "Sanity",
    "honor": "Honor",
    "intelligence": "Intelligence",
    "faith": "Faith",
    "strength": "Strength",
    "money": "Coins",
    "food": "Food",
    "relationship": "Relationship",
}


@dataclass(frozen=True)
class ChoiceEffect:
    """
    Declared consequences of a choice.

    Every stat delta is optional; None means "not present" and the applicator
    leaves that stat alone. `relationship` only has meaning for NPC reactive
    events, where it targets the coworker that raised the event.
    """
    health: Optional[int] = None
    sanity: Optional[int] = None
    honor: Optional[int] = None
    intelligence: Optional[int] = None
    faith: Optional[int] = None
    strength: Optional[int] = None
    money: Optional[int] = None
    food: Optional[int] = None
    relationship: Optional[int] = None
    add_trait: Optional[str] = None
    set_flags: Optional[dict[str, Any]] = None
    add_sibling: bool = False
    death: bool = False

    def deltas(self) -> dict[str, int]:
        """Present character-stat deltas, excluding relationship."""
        return {
            stat: getattr(self, stat)
            for stat in EFFECT_STATS
            if getattr(self, stat) is not None
        }

    def preview(self) -> str:
        parts = []
        for stat, value in self.deltas().items():
            parts.append(f"{value:+d} {STAT_LABELS[stat]}")
        if self.relationship is not None:
            parts.append(f"{self.relationship:+d} {STAT_LABELS['relationship']}")
        if self.add_trait:
            parts.append(f"Trait: {self.add_trait}")
        return ", ".join(parts)


@dataclass(frozen=True)
class EventChoice:
    id: str
    label: str
    message: str = ""
    effect: ChoiceEffect = field(default_factory=ChoiceEffect)
    tags: frozenset = frozenset()
    preview_text: str = ""

    def preview(self) -> str:
        return self.preview_text or self.effect.preview()

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "label": self.label, "preview": self.preview()}


@dataclass(frozen=True)
class EventConditions:
    """Extra conditions declared by an era random event."""
    gender: Optional[Gender] = None
    min_money: Optional[int] = None


@dataclass(frozen=True)
class GameEvent:
    """
    A presentable event template.

    Which optional fields matter depends on `kind`: historical events use
    `year`/`location`, childhood events `social_classes` and the age
    bracket, random events `tags` and `conditions`, NPC reactive events
    `npc_id`.
    """
    id: str
    kind: EventKind
    title: str
    description: str
    choices: tuple[EventChoice, ...]
    category: str = ""
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    social_classes: Optional[frozenset] = None
    conditions: Optional[EventConditions] = None
    tags: frozenset = frozenset()
    year: Optional[int] = None
    location: Optional[str] = None
    npc_id: Optional[str] = None

    def fits_age(self, age: int) -> bool:
        if self.min_age is not None and age < self.min_age:
            return False
        if self.max_age is not None and age > self.max_age:
            return False
        return True

    def fits_class(self, social_class: SocialClass) -> bool:
        return self.social_classes is None or social_class in self.social_classes

    def get_choice(self, choice_id: str) -> Optional[EventChoice]:
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None

    def with_choices(self, choices: tuple[EventChoice, ...]) -> "GameEvent":
        return replace(self, choices=choices)

    def to_descriptor(self) -> dict[str, Any]:
        """Pending-event descriptor handed to the presentation layer."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "title": self.title,
            "description": self.description,
            "choices": [choice.to_dict() for choice in self.choices],
        }


@dataclass(frozen=True)
class Era:
    id: str
    name: str
    location: str
    start_year: int
    end_year: int
    description: str = ""
    tags: frozenset = frozenset()

    def contains(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year


def effect(**kwargs: Any) -> ChoiceEffect:
    """Shorthand used by the content tables."""
    return ChoiceEffect(**kwargs)


def choice(
    choice_id: str,
    label: str,
    message: str = "",
    tags: tuple = (),
    preview: str = "",
    **effects: Any,
) -> EventChoice:
    """Shorthand used by the content tables."""
    return EventChoice(
        id=choice_id,
        label=label,
        message=message,
        effect=ChoiceEffect(**effects),
        tags=frozenset(tags),
        preview_text=preview,
    )
