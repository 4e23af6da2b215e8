"""
Strength contests.

Fights, confrontations and duels all compare the player's strength with an
opponent strength rolled in a fixed range. Duels grade the margin into four
tiers.
"""

from dataclasses import dataclass
from enum import Enum

from src.data_models import DiceRoller


class ContestTier(str, Enum):
    DECISIVE_WIN = "decisive_win"
    NARROW_WIN = "narrow_win"
    NARROW_LOSS = "narrow_loss"
    DECISIVE_LOSS = "decisive_loss"


@dataclass
class ContestResult:
    player_strength: int
    opponent_strength: int

    @property
    def margin(self) -> int:
        return self.player_strength - self.opponent_strength

    @property
    def won(self) -> bool:
        return self.player_strength > self.opponent_strength

    @property
    def tier(self) -> ContestTier:
        return classify_margin(self.margin)


def classify_margin(margin: int) -> ContestTier:
    if margin > 20:
        return ContestTier.DECISIVE_WIN
    if margin > 0:
        return ContestTier.NARROW_WIN
    if margin > -20:
        return ContestTier.NARROW_LOSS
    return ContestTier.DECISIVE_LOSS


def strength_contest(player_strength: int, low: int, high: int, reason: str = "opponent strength") -> ContestResult:
    """Roll an opponent in [low, high] and compare."""
    opponent = DiceRoller.roll_range(low, high, reason)
    return ContestResult(player_strength=player_strength, opponent_strength=opponent)
