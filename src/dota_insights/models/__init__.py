"""Data models for the Dota insights core."""

from dota_insights.models.match import HeroAggregateStats, MatchRecord, NormalizedMatch
from dota_insights.models.mastery import (
    MasteryResult,
    MasteryStats,
    MasteryTier,
    NextTierRequirement,
)
from dota_insights.models.streak import (
    MomentumEntry,
    OverallMomentum,
    StreakResult,
    TrendResult,
    WinLossRecord,
)
from dota_insights.models.achievement import (
    Achievement,
    AchievementCompletion,
    AchievementProgress,
    CategoryCompletion,
)
from dota_insights.models.session import SessionSummary
from dota_insights.models.dashboard import DashboardSummary, HeroSummary

__all__ = [
    "HeroAggregateStats",
    "MatchRecord",
    "NormalizedMatch",
    "MasteryResult",
    "MasteryStats",
    "MasteryTier",
    "NextTierRequirement",
    "MomentumEntry",
    "OverallMomentum",
    "StreakResult",
    "TrendResult",
    "WinLossRecord",
    "Achievement",
    "AchievementCompletion",
    "AchievementProgress",
    "CategoryCompletion",
    "SessionSummary",
    "DashboardSummary",
    "HeroSummary",
]
