"""Utility modules for dota_insights."""

from dota_insights.utils.hero_directory import HeroDirectory, fallback_hero_name

__all__ = [
    "HeroDirectory",
    "fallback_hero_name",
]
