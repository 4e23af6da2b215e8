"""
Shared types for the interaction handlers.

Every handler is a function of (character, target id, action) returning an
InteractionResult. Preconditions that are not met produce a failed result
with a message and leave the character untouched.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from src.data_models import Character, InventoryItem, LogType, clamp_stat


class FamilyAction(str, Enum):
    CHAT = "CHAT"
    MONEY = "MONEY"
    HELP_WORK = "HELP_WORK"
    ASK_TOY = "ASK_TOY"
    TANTRUM = "TANTRUM"


class CoworkerAction(str, Enum):
    COMPLIMENT = "COMPLIMENT"
    TAVERN = "TAVERN"
    GIFT = "GIFT"
    LOAN = "LOAN"
    PLEASE = "PLEASE"
    HELP = "HELP"
    REPORT = "REPORT"
    INSULT = "INSULT"
    SABOTAGE = "SABOTAGE"
    HERESY = "HERESY"
    DUEL = "DUEL"


class ClassmateAction(str, Enum):
    PLAY = "PLAY"
    CHAT = "CHAT"
    FIGHT = "FIGHT"


@dataclass
class InteractionResult:
    """Outcome of one interaction."""
    success: bool
    message: str
    log_type: LogType = LogType.NEUTRAL
    target_id: str = ""
    action: str = ""
    deltas: dict[str, int] = field(default_factory=dict)
    relationship_delta: int = 0
    item: Optional[InventoryItem] = None
    blocked: bool = False  # a precondition failed; nothing was touched

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "log_type": self.log_type.value,
            "target_id": self.target_id,
            "action": self.action,
            "deltas": dict(self.deltas),
            "relationship_delta": self.relationship_delta,
            "item": self.item.name if self.item else None,
        }


def fail(message: str, target_id: str = "", action: str = "") -> InteractionResult:
    """A precondition failed; nothing was changed."""
    return InteractionResult(
        success=False,
        message=message,
        log_type=LogType.FAIL,
        target_id=target_id,
        action=action,
        blocked=True,
    )


def apply_stat_deltas(character: Character, deltas: dict[str, int]) -> dict[str, int]:
    """Apply clamped deltas and return the changes actually made."""
    applied: dict[str, int] = {}
    for stat, delta in deltas.items():
        if not delta:
            continue
        before = getattr(character, stat)
        after = character.adjust_stat(stat, delta)
        applied[stat] = after - before
    return applied


def shift_relationship(holder: Any, delta: int) -> int:
    """Shift a `relationship` attribute within [0, 100]; return the real change."""
    before = holder.relationship
    holder.relationship = clamp_stat(before + delta)
    return holder.relationship - before


def record(character: Character, result: InteractionResult) -> InteractionResult:
    """Append the result's message to this year's event log unless it was blocked."""
    if result.blocked:
        return result
    character.add_year_entry(result.message, result.log_type)
    return result
