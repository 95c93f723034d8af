"""Tests for the data models."""
import pytest

from dota_insights.models import HeroAggregateStats, MatchRecord, WinLossRecord


class TestHeroAggregateStats:
    def test_from_api_clamps_wins(self):
        stats = HeroAggregateStats.from_api({"hero_id": "8", "games": 5, "win": 9})
        assert stats.hero_id == 8
        assert stats.win == 5
        assert stats.losses == 0

    def test_from_api_negative_counts(self):
        stats = HeroAggregateStats.from_api({"hero_id": 8, "games": -3, "win": -1, "sum_kills": -4})
        assert stats.games == 0
        assert stats.win == 0
        assert stats.sum_kills == 0

    def test_winrate_with_no_games(self):
        assert HeroAggregateStats(hero_id=1).winrate == 0.0

    def test_kda_is_ratio_of_sums(self):
        stats = HeroAggregateStats(hero_id=1, games=10, win=7, sum_kills=70, sum_deaths=30, sum_assists=50)
        assert stats.kda == pytest.approx(4.0)
        assert stats.winrate == 70.0

    def test_kda_without_deaths(self):
        stats = HeroAggregateStats(hero_id=1, games=1, win=1, sum_kills=3, sum_assists=4)
        assert stats.kda == 7.0

    def test_from_api_requires_hero_id(self):
        with pytest.raises(KeyError):
            HeroAggregateStats.from_api({"games": 1})


def test_match_record_sides():
    assert MatchRecord(match_id=1, hero_id=1, start_time=0, player_slot=4).is_radiant
    assert not MatchRecord(match_id=1, hero_id=1, start_time=0, player_slot=128).is_radiant


def test_win_loss_total():
    assert WinLossRecord(wins=3, losses=2).total == 5
