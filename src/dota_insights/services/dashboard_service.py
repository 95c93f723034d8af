"""Fan-out of the analysis pipeline into per-hero and dashboard summaries."""
import logging
from dataclasses import replace
from datetime import datetime, tzinfo
from typing import Iterable, Optional, Sequence, Union

from dota_insights.config import settings
from dota_insights.models.dashboard import DashboardSummary, HeroSummary
from dota_insights.models.match import HeroAggregateStats, NormalizedMatch
from dota_insights.models.session import SessionSummary
from dota_insights.services.analyzers.achievement_engine import (
    AchievementEngine,
    get_recent_achievements,
)
from dota_insights.services.analyzers.mastery_calculator import (
    MasteryCalculator,
    calculate_mastery_summary,
    get_mastery_recommendations,
    sort_heroes_by_mastery,
)
from dota_insights.services.analyzers.match_normalizer import normalize_matches
from dota_insights.services.analyzers.session_aggregator import SessionAggregator
from dota_insights.services.analyzers.streak_analyzer import StreakAnalyzer
from dota_insights.utils.hero_directory import HeroDirectory, HeroSource

logger = logging.getLogger(__name__)

HeroStatsInput = Union[HeroAggregateStats, dict]


def coerce_hero_stats(hero_stats: Iterable[HeroStatsInput]) -> list[HeroAggregateStats]:
    """Read hero aggregates, skipping entries without a usable hero id."""
    if not isinstance(hero_stats, (list, tuple)):
        raise TypeError(f"hero_stats must be a list, got {type(hero_stats).__name__}")

    parsed = []
    for entry in hero_stats:
        if isinstance(entry, HeroAggregateStats):
            parsed.append(entry)
            continue
        try:
            parsed.append(HeroAggregateStats.from_api(entry))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping unreadable hero stats entry: {e!r}")
    return parsed


class DashboardService:
    """Runs every analyzer over one snapshot of a player's data.

    Holds no per-player state; each call is a pure fold over its inputs.
    """

    def __init__(
        self,
        mastery_calculator: Optional[MasteryCalculator] = None,
        streak_analyzer: Optional[StreakAnalyzer] = None,
        achievement_engine: Optional[AchievementEngine] = None,
        session_aggregator: Optional[SessionAggregator] = None,
        min_hero_games: Optional[int] = None,
    ):
        self.mastery_calculator = mastery_calculator or MasteryCalculator()
        self.streak_analyzer = streak_analyzer or StreakAnalyzer()
        self.achievement_engine = achievement_engine or AchievementEngine()
        self.session_aggregator = session_aggregator or SessionAggregator()
        self.min_hero_games = (
            min_hero_games if min_hero_games is not None else settings.min_hero_games
        )

    def build_hero_summary(
        self,
        stats: HeroAggregateStats,
        matches: Sequence[NormalizedMatch],
        heroes: HeroDirectory,
    ) -> HeroSummary:
        mastery = self.mastery_calculator.calculate_mastery(stats)
        achievements = self.achievement_engine.check_achievements(stats, mastery)
        return HeroSummary(
            hero_id=stats.hero_id,
            name=heroes.name_for(stats.hero_id),
            games=stats.games,
            mastery=mastery,
            next_tier=self.mastery_calculator.calculate_next_tier_requirements(stats, mastery),
            streak=self.streak_analyzer.analyze_streak(matches, stats.hero_id),
            achievements=achievements,
            completion=self.achievement_engine.calculate_achievement_completion(achievements),
            next_achievements=self.achievement_engine.get_next_achievements(
                stats, mastery, achievements
            ),
            trend=self.streak_analyzer.analyze_trend(matches, stats.hero_id),
        )

    def build_dashboard(
        self,
        hero_stats: Sequence[HeroStatsInput],
        matches: Sequence,
        heroes: Union[HeroDirectory, HeroSource] = None,
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None,
        recent_achievement_limit: int = 5,
    ) -> DashboardSummary:
        """Build every widget's data from hero aggregates and recent matches."""
        directory = heroes if isinstance(heroes, HeroDirectory) else HeroDirectory(heroes)
        normalized = normalize_matches(matches, tz=tz)
        stats = self._with_last_played(coerce_hero_stats(hero_stats), normalized)
        stats = self._fill_missing_totals(stats, normalized)
        eligible = [s for s in stats if s.games >= self.min_hero_games]

        summaries = sort_heroes_by_mastery(
            [self.build_hero_summary(s, normalized, directory) for s in eligible]
        )
        logger.debug(
            f"Built {len(summaries)} hero summaries from {len(stats)} heroes "
            f"and {len(normalized)} matches"
        )

        return DashboardSummary(
            heroes=summaries,
            momentum=self.streak_analyzer.get_overall_momentum(
                normalized, eligible, heroes=directory
            ),
            mastery_summary=calculate_mastery_summary([h.mastery for h in summaries]),
            recommendations=get_mastery_recommendations(summaries),
            recent_achievements=get_recent_achievements(
                [h.achievements for h in summaries], limit=recent_achievement_limit
            ),
            session=self.session_aggregator.calculate_today_session(normalized, now=now, tz=tz),
        )

    def build_session(
        self,
        matches: Sequence,
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None,
    ) -> SessionSummary:
        return self.session_aggregator.calculate_today_session(
            normalize_matches(matches, tz=tz), now=now, tz=tz
        )

    @staticmethod
    def _fill_missing_totals(
        stats: list[HeroAggregateStats], matches: Sequence[NormalizedMatch]
    ) -> list[HeroAggregateStats]:
        """Estimate sums the aggregate lacks from the match window.

        OpenDota's /players/{id}/heroes reports games and wins only. KDA is a
        ratio of sums, so window K/D/A sums are used as they are. Last hits
        and GPM feed per-game averages, so the window average is scaled up
        to the hero's full game count.
        """
        totals: dict[int, list[int]] = {}
        for match in matches:
            record = match.record
            bucket = totals.setdefault(match.hero_id, [0, 0, 0, 0, 0, 0])
            bucket[0] += 1
            bucket[1] += record.kills
            bucket[2] += record.deaths
            bucket[3] += record.assists
            bucket[4] += record.last_hits
            bucket[5] += record.gold_per_min

        filled = []
        for s in stats:
            if s.games <= 0 or s.hero_id not in totals:
                filled.append(s)
                continue
            count, kills, deaths, assists, last_hits, gpm = totals[s.hero_id]
            if not (s.sum_kills or s.sum_deaths or s.sum_assists):
                s = replace(s, sum_kills=kills, sum_deaths=deaths, sum_assists=assists)
            if not s.sum_last_hits and last_hits:
                s = replace(s, sum_last_hits=round(last_hits / count * s.games))
            if not s.sum_gold_per_min and gpm:
                s = replace(s, sum_gold_per_min=round(gpm / count * s.games))
            filled.append(s)
        return filled

    @staticmethod
    def _with_last_played(
        stats: list[HeroAggregateStats], matches: Sequence[NormalizedMatch]
    ) -> list[HeroAggregateStats]:
        """Fill last_played from the match list where the aggregate lacks it."""
        newest: dict[int, int] = {}
        for match in matches:
            if match.start_time > newest.get(match.hero_id, -1):
                newest[match.hero_id] = match.start_time
        return [
            replace(s, last_played=newest[s.hero_id])
            if s.last_played is None and s.hero_id in newest
            else s
            for s in stats
        ]
