"""Tests for the achievement rule table."""
import logging

import pytest

from dota_insights.models.mastery import MasteryResult, MasteryStats
from dota_insights.models.match import HeroAggregateStats
from dota_insights.services.analyzers.achievement_engine import (
    ACHIEVEMENT_RULES,
    AchievementEngine,
    AchievementRule,
    get_recent_achievements,
)


@pytest.fixture
def engine():
    return AchievementEngine()


def _mastery(rank: int, games: int = 10) -> MasteryResult:
    keys = ["bronze", "silver", "gold", "platinum", "diamond"]
    return MasteryResult(
        tier=keys[rank - 1],
        tier_rank=rank,
        level=1,
        progress=0,
        score=0.0,
        is_max_tier=rank == 5,
        next_tier=keys[rank] if rank < 5 else None,
        stats=MasteryStats(games=games, winrate=0.0, kda=0.0),
    )


def _veteran(hero_id: int = 8, last_played=None) -> HeroAggregateStats:
    """25 games, 72% win rate, 4.0 KDA."""
    return HeroAggregateStats(
        hero_id=hero_id,
        games=25,
        win=18,
        sum_kills=250,
        sum_deaths=100,
        sum_assists=150,
        last_played=last_played,
    )


def test_rule_ids_are_unique():
    ids = [rule.id for rule in ACHIEVEMENT_RULES]
    assert len(ids) == len(set(ids)) == 14


def test_no_games_earns_nothing(engine):
    """Even the lowest mastery badge needs at least one game."""
    assert engine.check_achievements(HeroAggregateStats(hero_id=1), _mastery(1, games=0)) == []


def test_veteran_hero_achievements(engine):
    earned = engine.check_achievements(_veteran(), _mastery(4))
    assert [a.id for a in earned] == [
        "specialist",
        "consistent",
        "reliable",
        "clutch",
        "dominator",
        "bronze_mastery",
        "silver_mastery",
        "gold_mastery",
        "platinum_mastery",
    ]
    assert all(a.hero_id == 8 for a in earned)


def test_order_key_follows_rule_table(engine):
    earned = engine.check_achievements(_veteran(), _mastery(4))
    keys = [a.order_key for a in earned]
    assert keys == sorted(keys)


def test_winrate_boundary_is_inclusive(engine):
    stats = HeroAggregateStats(hero_id=1, games=10, win=7)
    ids = {a.id for a in engine.check_achievements(stats, _mastery(1))}
    assert "consistent" in ids


def test_farming_and_economy(engine):
    stats = HeroAggregateStats(
        hero_id=1, games=20, win=10, sum_last_hits=1300, sum_gold_per_min=9000
    )
    ids = {a.id for a in engine.check_achievements(stats, _mastery(1))}
    assert "farmer" in ids
    assert "economist" not in ids


def test_failing_rule_is_skipped(engine, caplog):
    def broken(stats, mastery):
        return 1 / 0

    rules = (
        AchievementRule("broken", "Broken", "never", "x", "misc", broken),
        *ACHIEVEMENT_RULES[:1],
    )
    with caplog.at_level(logging.WARNING):
        earned = AchievementEngine(rules).check_achievements(_veteran(), _mastery(4))
    assert [a.id for a in earned] == ["specialist"]
    assert "Achievement rule broken failed" in caplog.text


def test_completion(engine):
    earned = engine.check_achievements(_veteran(), _mastery(4))
    completion = engine.calculate_achievement_completion(earned)

    assert completion.earned == 9
    assert completion.total == 14
    assert completion.percentage == 64
    assert completion.by_category["performance"].earned == 2
    assert completion.by_category["performance"].percentage == 100.0
    assert completion.by_category["mastery"].total == 5
    assert completion.by_category["farming"].earned == 0


def test_completion_empty(engine):
    completion = engine.calculate_achievement_completion([])
    assert completion.earned == 0
    assert completion.total == len(ACHIEVEMENT_RULES)
    assert completion.percentage == 0


def test_group_by_category_keeps_empty_categories(engine):
    grouped = engine.group_achievements_by_category([])
    assert set(grouped) == {"experience", "performance", "skill", "mastery", "farming", "economy"}


def test_next_achievements(engine):
    stats = HeroAggregateStats(hero_id=1, games=20, win=12)
    upcoming = engine.get_next_achievements(stats, _mastery(2), earned=[])

    assert [a.id for a in upcoming] == ["reliable", "consistent", "specialist"]
    assert upcoming[0].requirement == "5.0% WR needed"
    assert upcoming[1].progress == 86
    assert upcoming[2].requirement == "5 more games"


def test_next_achievements_skip_earned(engine):
    stats = _veteran()
    earned = engine.check_achievements(stats, _mastery(4))
    upcoming = engine.get_next_achievements(stats, _mastery(4), earned)
    assert "specialist" not in {a.id for a in upcoming}


def test_recent_achievements_prefer_recent_heroes(engine):
    old = engine.check_achievements(_veteran(hero_id=1, last_played=1000), _mastery(2))
    new = engine.check_achievements(_veteran(hero_id=2, last_played=2000), _mastery(2))

    recent = get_recent_achievements([old, new], limit=3)

    assert len(recent) == 3
    assert all(a.hero_id == 2 for a in recent)
    # harder badges of the same hero come first
    assert [a.id for a in recent] == ["silver_mastery", "bronze_mastery", "dominator"]


def test_recent_achievements_is_stable(engine):
    a = engine.check_achievements(_veteran(hero_id=1), _mastery(3))
    b = engine.check_achievements(_veteran(hero_id=2), _mastery(3))
    assert get_recent_achievements([a, b]) == get_recent_achievements([a, b])
    assert get_recent_achievements([a, b], limit=0) == []
