"""Streak and momentum models."""

from dataclasses import asdict, dataclass
from typing import Literal, Optional

StreakType = Literal["win", "loss", "none"]


@dataclass(frozen=True)
class WinLossRecord:
    wins: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses


@dataclass(frozen=True)
class StreakResult:
    """Streak analysis for one hero over a trailing window."""

    hero_id: int
    streak_type: StreakType
    current_streak: int
    win_loss_record: WinLossRecord
    games_analyzed: int
    win_rate: int = 0  # rounded percentage over decided games
    recent_form: str = "no_data"
    momentum: str = "neutral"  # improving, declining, neutral
    last_played: Optional[int] = None  # start_time of the newest match in the window

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MomentumEntry:
    """A hero on an active streak."""

    hero_id: int
    hero_name: str
    streak: int
    recent_form: str
    win_rate: int
    momentum: str
    last_played: Optional[int] = None


@dataclass(frozen=True)
class OverallMomentum:
    """Cross-hero extremes of active streaks."""

    hot_streak: Optional[MomentumEntry] = None
    cold_spell: Optional[MomentumEntry] = None
    total_hot_heroes: int = 0
    total_cold_heroes: int = 0
    momentum: str = "neutral"  # positive, negative, neutral

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class TrendResult:
    """Recent-window vs older-window win rate comparison."""

    trend: str  # improving, declining, stable, insufficient_data
    direction: str  # up, down, none
    strength: int  # 0-3
    confidence: str  # low, medium, high
    recent_win_rate: Optional[int] = None
    older_win_rate: Optional[int] = None
    improvement: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)
