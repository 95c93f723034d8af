"""Hero mastery scoring with tiered levels and promotion requirements."""
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from dota_insights.config import settings
from dota_insights.models.dashboard import HeroSummary
from dota_insights.models.mastery import (
    MasteryResult,
    MasteryStats,
    MasteryTier,
    NextTierRequirement,
)
from dota_insights.models.match import HeroAggregateStats

# Ordered lowest to highest; bounds must be strictly increasing.
MASTERY_TIERS: tuple[MasteryTier, ...] = (
    MasteryTier(key="bronze", name="Bronze", rank=1, emoji="🥉", min_score=0.0),
    MasteryTier(key="silver", name="Silver", rank=2, emoji="🥈", min_score=25.0),
    MasteryTier(key="gold", name="Gold", rank=3, emoji="🥇", min_score=45.0),
    MasteryTier(key="platinum", name="Platinum", rank=4, emoji="⭐", min_score=65.0),
    MasteryTier(key="diamond", name="Diamond", rank=5, emoji="💎", min_score=85.0),
)
TIERS_BY_KEY = {tier.key: tier for tier in MASTERY_TIERS}


@dataclass(frozen=True)
class MasteryWeights:
    """Constants of the mastery score formula."""

    games_weight: float = 40.0
    games_cap: int = 100
    winrate_weight: float = 0.8
    winrate_baseline: float = 50.0
    kda_weight: float = 10.0
    kda_baseline: float = 2.0
    kda_cap: float = 6.0

    @classmethod
    def from_settings(cls) -> "MasteryWeights":
        return cls(
            games_weight=settings.mastery_games_weight,
            games_cap=settings.mastery_games_cap,
            winrate_weight=settings.mastery_winrate_weight,
            winrate_baseline=settings.mastery_winrate_baseline,
            kda_weight=settings.mastery_kda_weight,
            kda_baseline=settings.mastery_kda_baseline,
            kda_cap=settings.mastery_kda_cap,
        )


class MasteryCalculator:
    """Turns a hero's aggregate stats into a tier, level and progress."""

    LEVELS_PER_TIER = 3
    MAX_EXTRA_WINS = 10_000

    def __init__(self, weights: Optional[MasteryWeights] = None):
        self.weights = weights or MasteryWeights.from_settings()

    # ------------------------------------------------------------------
    # Score
    # ------------------------------------------------------------------

    def games_term(self, games: int) -> float:
        """Diminishing-returns credit for experience, capped at games_weight."""
        w = self.weights
        if games <= 0:
            return 0.0
        return w.games_weight * min(1.0, math.log1p(games) / math.log1p(w.games_cap))

    def winrate_term(self, winrate: float) -> float:
        w = self.weights
        return w.winrate_weight * (winrate - w.winrate_baseline)

    def kda_term(self, kda: float) -> float:
        w = self.weights
        return w.kda_weight * (min(max(kda, 0.0), w.kda_cap) - w.kda_baseline)

    def score(self, games: int, wins: int, kda: float) -> float:
        """Mastery score for a stats snapshot, floored at 0."""
        if games <= 0:
            return 0.0
        winrate = wins / games * 100
        total = self.games_term(games) + self.winrate_term(winrate) + self.kda_term(kda)
        return max(0.0, total)

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------

    @staticmethod
    def tier_for_score(score: float) -> MasteryTier:
        for tier in reversed(MASTERY_TIERS):
            if score >= tier.min_score:
                return tier
        return MASTERY_TIERS[0]

    @staticmethod
    def next_tier_after(tier: MasteryTier) -> Optional[MasteryTier]:
        if tier.rank >= len(MASTERY_TIERS):
            return None
        return MASTERY_TIERS[tier.rank]

    def calculate_mastery(self, stats: HeroAggregateStats) -> MasteryResult:
        """Calculate hero mastery tier, sub-level and progress to the next tier."""
        games = stats.games if stats.games > 0 else 0
        lowest = MASTERY_TIERS[0]

        if games == 0:
            return MasteryResult(
                tier=lowest.key,
                tier_rank=lowest.rank,
                level=0,
                progress=0,
                score=0.0,
                is_max_tier=False,
                next_tier=MASTERY_TIERS[1].key,
                stats=MasteryStats(games=0, winrate=0.0, kda=0.0),
            )

        kda = stats.kda
        score = self.score(games, stats.win, kda)
        tier = self.tier_for_score(score)
        next_tier = self.next_tier_after(tier)

        if next_tier is None:
            level = self.LEVELS_PER_TIER
            progress = 100
        else:
            span = next_tier.min_score - tier.min_score
            fraction = (score - tier.min_score) / span
            progress = int(min(100, max(0, math.floor(fraction * 100))))
            level = 1 + min(self.LEVELS_PER_TIER - 1, int(fraction * self.LEVELS_PER_TIER))

        return MasteryResult(
            tier=tier.key,
            tier_rank=tier.rank,
            level=level,
            progress=progress,
            score=round(score, 2),
            is_max_tier=next_tier is None,
            next_tier=next_tier.key if next_tier else None,
            stats=MasteryStats(
                games=games,
                winrate=round(stats.winrate, 1),
                kda=round(kda, 2),
            ),
        )

    # ------------------------------------------------------------------
    # Promotion requirements
    # ------------------------------------------------------------------

    def calculate_next_tier_requirements(
        self, stats: HeroAggregateStats, mastery: MasteryResult
    ) -> NextTierRequirement:
        """Describe what it takes to reach the next tier.

        Inverts the score formula: first by asking how many consecutive wins
        at the current KDA reach the next bound, then, if no amount of wins
        is enough, by solving for the KDA needed at the current record.
        """
        if mastery.is_max_tier or mastery.next_tier is None:
            return NextTierRequirement(
                message="Maximum mastery level achieved!",
                is_max_tier=True,
            )

        target = TIERS_BY_KEY[mastery.next_tier]
        current_score = self.score(stats.games, stats.win, stats.kda)
        score_gap = round(max(0.0, target.min_score - current_score), 2)

        wins_needed = self._wins_to_reach(stats, target.min_score)
        if wins_needed is not None:
            noun = "win" if wins_needed == 1 else "wins"
            return NextTierRequirement(
                message=f"{wins_needed} more {noun} needed to reach {target.name}",
                is_max_tier=False,
                next_tier=target.key,
                wins_needed=wins_needed,
                score_gap=score_gap,
            )

        kda_needed = self._kda_to_reach(stats, target.min_score)
        if kda_needed is not None:
            return NextTierRequirement(
                message=f"Raise KDA to {kda_needed:.2f} to reach {target.name}",
                is_max_tier=False,
                next_tier=target.key,
                kda_needed=kda_needed,
                score_gap=score_gap,
            )

        return NextTierRequirement(
            message=f"Improve both win rate and KDA to reach {target.name}",
            is_max_tier=False,
            next_tier=target.key,
            score_gap=score_gap,
        )

    def _wins_to_reach(self, stats: HeroAggregateStats, bound: float) -> Optional[int]:
        """Smallest n where n extra wins at the same KDA reach ``bound``."""
        kda = stats.kda

        def reaches(extra: int) -> bool:
            return self.score(stats.games + extra, stats.win + extra, kda) >= bound

        if reaches(0):
            return 0
        hi = self.MAX_EXTRA_WINS
        if not reaches(hi):
            return None

        # Score grows monotonically with extra wins
        lo = 0
        while hi - lo > 1:
            mid = (lo + hi) // 2
            if reaches(mid):
                hi = mid
            else:
                lo = mid
        return hi

    def _kda_to_reach(self, stats: HeroAggregateStats, bound: float) -> Optional[float]:
        """KDA that reaches ``bound`` at the current games and win rate."""
        w = self.weights
        if stats.games <= 0 or w.kda_weight <= 0:
            return None
        needed_term = bound - self.games_term(stats.games) - self.winrate_term(stats.winrate)
        kda_needed = w.kda_baseline + needed_term / w.kda_weight
        if kda_needed > w.kda_cap:
            return None
        return math.ceil(max(kda_needed, 0.0) * 100) / 100


def sort_heroes_by_mastery(heroes: Sequence[HeroSummary]) -> list[HeroSummary]:
    """Rank heroes by tier, then progress, then games played (all descending)."""
    return sorted(heroes, key=lambda h: h.mastery.sort_key, reverse=True)


def calculate_mastery_summary(masteries: Sequence[MasteryResult]) -> dict:
    """Overall mastery picture across a player's heroes."""
    if not masteries:
        return {
            "total_heroes": 0,
            "average_level": 0.0,
            "tier_distribution": {},
            "top_tier": MASTERY_TIERS[0].key,
            "mastery_score": 0,
            "max_level": 0,
        }

    tier_counts: dict[str, int] = {}
    for tier in MASTERY_TIERS:
        count = sum(1 for m in masteries if m.tier == tier.key)
        if count:
            tier_counts[tier.key] = count

    ranks = [m.tier_rank for m in masteries]
    max_rank = max(ranks)
    top_tier = next(m.tier for m in masteries if m.tier_rank == max_rank)

    return {
        "total_heroes": len(masteries),
        "average_level": round(sum(ranks) / len(ranks), 2),
        "tier_distribution": tier_counts,
        "top_tier": top_tier,
        "mastery_score": sum(ranks),
        "max_level": max_rank,
    }


def get_mastery_recommendations(heroes: Sequence[HeroSummary]) -> dict[str, list[str]]:
    """Heroes to practice, focus on, or rest, by name."""
    if not heroes:
        return {"practice": [], "focus": [], "avoid": []}

    ranked = sort_heroes_by_mastery(heroes)

    # Close to promotion
    practice = [
        h for h in ranked
        if h.mastery.progress > 75 and not h.mastery.is_max_tier
    ][:3]

    # Strong numbers on a small sample
    focus = [
        h for h in ranked
        if h.mastery.stats.games < 15
        and h.mastery.stats.winrate > 55
        and h.mastery.stats.kda > 2.0
    ][:3]

    # Enough games to be sure it is going badly; weakest last
    avoid = [
        h for h in ranked
        if h.mastery.stats.games >= 10
        and (h.mastery.stats.winrate < 40 or h.mastery.stats.kda < 1.0)
    ][-3:]

    return {
        "practice": [h.name for h in practice],
        "focus": [h.name for h in focus],
        "avoid": [h.name for h in avoid],
    }
