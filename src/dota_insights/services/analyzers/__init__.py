"""Core analysis components for the dashboard pipeline."""
from dota_insights.services.analyzers.match_normalizer import normalize_match, normalize_matches
from dota_insights.services.analyzers.mastery_calculator import MasteryCalculator, MasteryWeights
from dota_insights.services.analyzers.streak_analyzer import StreakAnalyzer
from dota_insights.services.analyzers.achievement_engine import AchievementEngine
from dota_insights.services.analyzers.session_aggregator import SessionAggregator

__all__ = [
    "normalize_match",
    "normalize_matches",
    "MasteryCalculator",
    "MasteryWeights",
    "StreakAnalyzer",
    "AchievementEngine",
    "SessionAggregator",
]
