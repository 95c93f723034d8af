"""Mastery tier models."""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class MasteryTier:
    """A named mastery bracket with a score lower bound."""

    key: str
    name: str
    rank: int  # 1 = lowest
    emoji: str
    min_score: float


@dataclass(frozen=True)
class MasteryStats:
    """Snapshot of the numbers that justify a tier."""

    games: int
    winrate: float  # percentage, one decimal
    kda: float  # two decimals


@dataclass(frozen=True)
class MasteryResult:
    """Output of the mastery calculator for one hero."""

    tier: str
    tier_rank: int
    level: int  # sub-level within the tier, 0 for heroes with no games
    progress: int  # 0-100 toward the next tier
    score: float
    is_max_tier: bool
    next_tier: Optional[str]
    stats: MasteryStats

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.tier_rank, self.progress, self.stats.games)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class NextTierRequirement:
    """What it takes to reach the next tier."""

    message: str
    is_max_tier: bool
    next_tier: Optional[str] = None
    wins_needed: Optional[int] = None
    kda_needed: Optional[float] = None
    score_gap: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)
