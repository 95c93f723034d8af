"""Win/loss streak, recent form and cross-hero momentum analysis."""
from typing import Iterable, Optional, Sequence

from dota_insights.config import settings
from dota_insights.models.match import HeroAggregateStats, NormalizedMatch
from dota_insights.models.streak import (
    MomentumEntry,
    OverallMomentum,
    StreakResult,
    TrendResult,
    WinLossRecord,
)
from dota_insights.services.analyzers.match_normalizer import (
    consecutive_outcomes,
    sort_newest_first,
)
from dota_insights.utils.hero_directory import HeroDirectory


def _win_rate(matches: Sequence[NormalizedMatch]) -> Optional[float]:
    decided = [m for m in matches if m.is_win is not None]
    if not decided:
        return None
    return sum(1 for m in decided if m.is_win) / len(decided)


class StreakAnalyzer:
    """Analyzes streaks over a hero's most recent matches."""

    FORM_THRESHOLDS = (
        (70, "excellent"),
        (60, "good"),
        (40, "average"),
        (30, "poor"),
    )
    MOMENTUM_SWING = 0.2

    def __init__(self, lookback: Optional[int] = None, min_streak: Optional[int] = None):
        self.lookback = lookback if lookback is not None else settings.streak_lookback
        self.min_streak = min_streak if min_streak is not None else settings.momentum_min_streak

    def hero_matches(
        self, matches: Iterable[NormalizedMatch], hero_id: int, limit: Optional[int] = None
    ) -> list[NormalizedMatch]:
        """A hero's matches, newest first, truncated to ``limit``."""
        if not isinstance(matches, (list, tuple)):
            raise TypeError(f"matches must be a list, got {type(matches).__name__}")
        filtered = sort_newest_first(m for m in matches if m.hero_id == hero_id)
        if limit is not None:
            filtered = filtered[: max(limit, 0)]
        return filtered

    def analyze_streak(
        self,
        matches: Sequence[NormalizedMatch],
        hero_id: int,
        lookback: Optional[int] = None,
    ) -> StreakResult:
        """Current streak and W/L record over the hero's trailing window.

        Matches are re-sorted newest-first before the walk. The streak and
        the record both use the same window, so the streak never exceeds
        games_analyzed.
        """
        window = self.hero_matches(matches, hero_id, lookback if lookback is not None else self.lookback)

        if not window:
            return StreakResult(
                hero_id=hero_id,
                streak_type="none",
                current_streak=0,
                win_loss_record=WinLossRecord(),
                games_analyzed=0,
            )

        streak_type, current_streak = consecutive_outcomes(window)
        wins = sum(1 for m in window if m.is_win is True)
        losses = sum(1 for m in window if m.is_win is False)
        rate = _win_rate(window)
        win_rate = round(rate * 100) if rate is not None else 0

        return StreakResult(
            hero_id=hero_id,
            streak_type=streak_type,
            current_streak=current_streak,
            win_loss_record=WinLossRecord(wins=wins, losses=losses),
            games_analyzed=len(window),
            win_rate=win_rate,
            recent_form=self._recent_form(rate),
            momentum=self._momentum(window),
            last_played=window[0].start_time,
        )

    def _recent_form(self, rate: Optional[float]) -> str:
        if rate is None:
            return "no_data"
        pct = rate * 100
        for threshold, label in self.FORM_THRESHOLDS:
            if pct >= threshold:
                return label
        return "terrible"

    def _momentum(self, window: Sequence[NormalizedMatch]) -> str:
        """Newer half vs older half of the window."""
        if len(window) < 4:
            return "neutral"
        half = len(window) // 2
        newer = _win_rate(window[:half])
        older = _win_rate(window[half:])
        if newer is None or older is None:
            return "neutral"
        if newer > older + self.MOMENTUM_SWING:
            return "improving"
        if newer < older - self.MOMENTUM_SWING:
            return "declining"
        return "neutral"

    # ------------------------------------------------------------------
    # Cross-hero momentum
    # ------------------------------------------------------------------

    def _streaking_heroes(
        self,
        matches: Sequence[NormalizedMatch],
        hero_stats: Sequence[HeroAggregateStats],
        streak_type: str,
        min_streak: int,
        heroes: Optional[HeroDirectory],
    ) -> list[MomentumEntry]:
        directory = heroes or HeroDirectory()
        entries = []
        for hero in hero_stats:
            result = self.analyze_streak(matches, hero.hero_id)
            if result.streak_type != streak_type or result.current_streak < min_streak:
                continue
            entries.append(MomentumEntry(
                hero_id=hero.hero_id,
                hero_name=directory.name_for(hero.hero_id),
                streak=result.current_streak,
                recent_form=result.recent_form,
                win_rate=result.win_rate,
                momentum=result.momentum,
                last_played=result.last_played,
            ))
        # Longest first; ties go to the most recently played hero, then lowest id
        return sorted(
            entries,
            key=lambda e: (-e.streak, -(e.last_played or 0), e.hero_id),
        )

    def find_hot_streak_heroes(
        self,
        matches: Sequence[NormalizedMatch],
        hero_stats: Sequence[HeroAggregateStats],
        min_streak: Optional[int] = None,
        heroes: Optional[HeroDirectory] = None,
    ) -> list[MomentumEntry]:
        threshold = min_streak if min_streak is not None else self.min_streak
        return self._streaking_heroes(matches, hero_stats, "win", threshold, heroes)

    def find_cold_spell_heroes(
        self,
        matches: Sequence[NormalizedMatch],
        hero_stats: Sequence[HeroAggregateStats],
        min_streak: Optional[int] = None,
        heroes: Optional[HeroDirectory] = None,
    ) -> list[MomentumEntry]:
        threshold = min_streak if min_streak is not None else self.min_streak
        return self._streaking_heroes(matches, hero_stats, "loss", threshold, heroes)

    def get_overall_momentum(
        self,
        matches: Sequence[NormalizedMatch],
        hero_stats: Sequence[HeroAggregateStats],
        min_streak: Optional[int] = None,
        heroes: Optional[HeroDirectory] = None,
    ) -> OverallMomentum:
        """Hottest win streak and coldest loss streak across all heroes."""
        if not isinstance(hero_stats, (list, tuple)):
            raise TypeError(f"hero_stats must be a list, got {type(hero_stats).__name__}")

        hot = self.find_hot_streak_heroes(matches, hero_stats, min_streak, heroes)
        cold = self.find_cold_spell_heroes(matches, hero_stats, min_streak, heroes)

        if len(hot) > len(cold):
            overall = "positive"
        elif len(cold) > len(hot):
            overall = "negative"
        else:
            overall = "neutral"

        return OverallMomentum(
            hot_streak=hot[0] if hot else None,
            cold_spell=cold[0] if cold else None,
            total_hot_heroes=len(hot),
            total_cold_heroes=len(cold),
            momentum=overall,
        )

    # ------------------------------------------------------------------
    # Trend
    # ------------------------------------------------------------------

    def analyze_trend(
        self, matches: Sequence[NormalizedMatch], hero_id: int, window_size: int = 5
    ) -> TrendResult:
        """Compare the newest window of games against the window before it."""
        hero_matches = self.hero_matches(matches, hero_id, window_size * 2)

        if len(hero_matches) < window_size * 2:
            return TrendResult(
                trend="insufficient_data",
                direction="none",
                strength=0,
                confidence="low",
            )

        recent = _win_rate(hero_matches[:window_size])
        older = _win_rate(hero_matches[window_size:])
        if recent is None or older is None:
            return TrendResult(
                trend="insufficient_data",
                direction="none",
                strength=0,
                confidence="low",
            )

        difference = recent - older
        magnitude = abs(difference)

        if magnitude >= 0.4:
            strength, confidence = 3, "high"
        elif magnitude >= 0.2:
            strength, confidence = 2, "medium"
        elif magnitude >= 0.1:
            strength, confidence = 1, "low"
        else:
            strength, confidence = 0, "medium"

        if difference > 0.1:
            trend, direction = "improving", "up"
        elif difference < -0.1:
            trend, direction = "declining", "down"
        else:
            trend, direction = "stable", "none"

        return TrendResult(
            trend=trend,
            direction=direction,
            strength=strength,
            confidence=confidence,
            recent_win_rate=round(recent * 100),
            older_win_rate=round(older * 100),
            improvement=round(difference * 100),
        )
