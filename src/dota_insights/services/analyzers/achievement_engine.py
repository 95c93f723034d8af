"""Hero achievement unlocks from aggregate stats and mastery."""
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from dota_insights.models.achievement import (
    Achievement,
    AchievementCompletion,
    AchievementProgress,
    CategoryCompletion,
)
from dota_insights.models.mastery import MasteryResult
from dota_insights.models.match import HeroAggregateStats

logger = logging.getLogger(__name__)

Predicate = Callable[[HeroAggregateStats, MasteryResult], bool]


@dataclass(frozen=True)
class AchievementRule:
    """A predicate over (stats, mastery) and the badge it unlocks."""

    id: str
    name: str
    description: str
    emoji: str
    category: str
    check: Predicate


def _avg(total: int, games: int) -> float:
    return total / games if games > 0 else 0.0


def _min_games(n: int) -> Predicate:
    return lambda stats, _mastery: stats.games >= n


def _winrate_at(winrate: float, games: int) -> Predicate:
    return lambda stats, _mastery: stats.games >= games and stats.winrate >= winrate


def _kda_at(kda: float, games: int) -> Predicate:
    return lambda stats, _mastery: stats.games >= games and stats.kda >= kda


def _tier_at_least(rank: int) -> Predicate:
    return lambda stats, mastery: stats.games > 0 and mastery.tier_rank >= rank


def _avg_at(field: str, threshold: float, games: int) -> Predicate:
    return lambda stats, _mastery: (
        stats.games >= games and _avg(getattr(stats, field), stats.games) >= threshold
    )


ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (
    # Experience
    AchievementRule("specialist", "Hero Specialist", "Play 25+ games with a hero", "🎓", "experience", _min_games(25)),
    AchievementRule("expert", "Hero Expert", "Play 50+ games with a hero", "🔬", "experience", _min_games(50)),
    AchievementRule("master", "Hero Master", "Play 100+ games with a hero", "👑", "experience", _min_games(100)),
    # Win rate
    AchievementRule("consistent", "Consistent Performer", "70%+ win rate with 10+ games", "🎯", "performance", _winrate_at(70, 10)),
    AchievementRule("reliable", "Reliable Hero", "65%+ win rate with 20+ games", "⚡", "performance", _winrate_at(65, 20)),
    # KDA
    AchievementRule("clutch", "Clutch Player", "3.0+ KDA with 15+ games", "💪", "skill", _kda_at(3.0, 15)),
    AchievementRule("dominator", "Hero Dominator", "4.0+ KDA with 20+ games", "🔥", "skill", _kda_at(4.0, 20)),
    # Mastery tiers
    AchievementRule("bronze_mastery", "Bronze Mastery", "Achieve Bronze mastery level", "🥉", "mastery", _tier_at_least(1)),
    AchievementRule("silver_mastery", "Silver Mastery", "Achieve Silver mastery level", "🥈", "mastery", _tier_at_least(2)),
    AchievementRule("gold_mastery", "Gold Mastery", "Achieve Gold mastery level", "🥇", "mastery", _tier_at_least(3)),
    AchievementRule("platinum_mastery", "Platinum Mastery", "Achieve Platinum mastery level", "⭐", "mastery", _tier_at_least(4)),
    AchievementRule("diamond_mastery", "Diamond Mastery", "Achieve Diamond mastery level", "💎", "mastery", _tier_at_least(5)),
    # Farming / economy
    AchievementRule("farmer", "Efficient Farmer", "60+ last hits per game average (15+ games)", "🌾", "farming", _avg_at("sum_last_hits", 60, 15)),
    AchievementRule("economist", "Gold Economist", "500+ GPM average (15+ games)", "💰", "economy", _avg_at("sum_gold_per_min", 500, 15)),
)

# rule id -> (required games, required win rate or None)
_PROGRESS_TARGETS = {
    "specialist": (25, None),
    "expert": (50, None),
    "master": (100, None),
    "consistent": (10, 70.0),
    "reliable": (20, 65.0),
}


class AchievementEngine:
    """Evaluates the fixed rule table against one hero at a time."""

    def __init__(self, rules: Sequence[AchievementRule] = ACHIEVEMENT_RULES):
        self.rules = tuple(rules)

    @property
    def total(self) -> int:
        return len(self.rules)

    def check_achievements(
        self, stats: HeroAggregateStats, mastery: MasteryResult
    ) -> list[Achievement]:
        """All rules whose predicate holds, in rule-table order."""
        earned = []
        for index, rule in enumerate(self.rules):
            try:
                unlocked = rule.check(stats, mastery)
            except (ArithmeticError, AttributeError, TypeError, ValueError) as e:
                logger.warning(f"Achievement rule {rule.id} failed for hero {stats.hero_id}: {e}")
                continue
            if unlocked:
                earned.append(Achievement(
                    id=rule.id,
                    name=rule.name,
                    description=rule.description,
                    emoji=rule.emoji,
                    category=rule.category,
                    hero_id=stats.hero_id,
                    order_key=index,
                    last_played=stats.last_played,
                ))
        return earned

    def group_achievements_by_category(
        self, achievements: Iterable[Achievement]
    ) -> dict[str, list[Achievement]]:
        grouped: dict[str, list[Achievement]] = {
            category: [] for category in dict.fromkeys(r.category for r in self.rules)
        }
        for achievement in achievements:
            grouped.setdefault(achievement.category, []).append(achievement)
        return grouped

    def calculate_achievement_completion(
        self, achievements: Sequence[Achievement]
    ) -> AchievementCompletion:
        """Earned count against the size of the rule table."""
        total = self.total
        earned = len(achievements)
        percentage = round(earned / total * 100) if total > 0 else 0

        by_category = {}
        for category, items in self.group_achievements_by_category(achievements).items():
            category_total = sum(1 for r in self.rules if r.category == category)
            by_category[category] = CategoryCompletion(
                earned=len(items),
                total=category_total,
                percentage=round(len(items) / category_total * 100, 1) if category_total else 0.0,
            )

        return AchievementCompletion(
            earned=earned,
            total=total,
            percentage=percentage,
            by_category=by_category,
        )

    def get_next_achievements(
        self,
        stats: HeroAggregateStats,
        mastery: MasteryResult,
        earned: Sequence[Achievement],
    ) -> list[AchievementProgress]:
        """Unearned game-count and win-rate badges that are over half way there."""
        earned_ids = {a.id for a in earned}
        upcoming = []
        for rule in self.rules:
            if rule.id in earned_ids or rule.id not in _PROGRESS_TARGETS:
                continue
            games_target, winrate_target = _PROGRESS_TARGETS[rule.id]

            if winrate_target is None:
                progress = min(100.0, stats.games / games_target * 100)
                requirement = f"{max(0, games_target - stats.games)} more games"
            elif stats.games >= games_target:
                progress = min(100.0, stats.winrate / winrate_target * 100)
                if stats.winrate >= winrate_target:
                    requirement = "Ready!"
                else:
                    requirement = f"{winrate_target - stats.winrate:.1f}% WR needed"
            else:
                progress = 0.0
                requirement = f"{games_target - stats.games} more games + {winrate_target:.0f}% WR"

            if progress > 50:
                upcoming.append(AchievementProgress(
                    id=rule.id,
                    name=rule.name,
                    emoji=rule.emoji,
                    progress=round(progress),
                    requirement=requirement,
                ))

        return sorted(upcoming, key=lambda a: -a.progress)


def get_recent_achievements(
    hero_achievements: Iterable[Sequence[Achievement]], limit: int = 5
) -> list[Achievement]:
    """Approximate "recently unlocked" badges across heroes.

    No unlock timestamps exist, so this orders by the hero's last played
    match (unknown sorts last), then by higher rule index, which favours the
    harder badges. The order is stable for identical input.
    """
    flattened = [a for achievements in hero_achievements for a in achievements]
    ordered = sorted(
        flattened,
        key=lambda a: (-(a.last_played or 0), -a.order_key, a.hero_id),
    )
    return ordered[: max(limit, 0)]
