"""Per-hero and dashboard-wide summary models."""

from dataclasses import asdict, dataclass, field

from dota_insights.models.achievement import (
    Achievement,
    AchievementCompletion,
    AchievementProgress,
)
from dota_insights.models.mastery import MasteryResult, NextTierRequirement
from dota_insights.models.session import SessionSummary
from dota_insights.models.streak import OverallMomentum, StreakResult, TrendResult


@dataclass(frozen=True)
class HeroSummary:
    """Everything the hero widgets need for one hero."""

    hero_id: int
    name: str
    games: int
    mastery: MasteryResult
    next_tier: NextTierRequirement
    streak: StreakResult
    achievements: list[Achievement] = field(default_factory=list)
    completion: AchievementCompletion | None = None
    next_achievements: list[AchievementProgress] = field(default_factory=list)
    trend: TrendResult | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DashboardSummary:
    """Fan-out result of one pass over a player's data."""

    heroes: list[HeroSummary]
    momentum: OverallMomentum
    mastery_summary: dict
    recommendations: dict[str, list[str]]
    recent_achievements: list[Achievement]
    session: SessionSummary

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return {
            "heroes": [hero.to_dict() for hero in self.heroes],
            "momentum": self.momentum.to_dict(),
            "mastery_summary": dict(self.mastery_summary),
            "recommendations": {k: list(v) for k, v in self.recommendations.items()},
            "recent_achievements": [a.to_dict() for a in self.recent_achievements],
            "session": self.session.to_dict(),
        }
