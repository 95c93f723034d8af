"""Achievement models."""

from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Achievement:
    """An unlocked achievement badge for a hero.

    There is no persisted unlock time, so ``order_key`` is the index of the
    rule that produced the badge. ``last_played`` carries the hero's most
    recent match time when known and is used to approximate recency.
    """

    id: str
    name: str
    description: str
    emoji: str
    category: str
    hero_id: int
    order_key: int
    last_played: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CategoryCompletion:
    earned: int
    total: int
    percentage: float


@dataclass(frozen=True)
class AchievementCompletion:
    """Earned vs available achievements."""

    earned: int
    total: int
    percentage: int
    by_category: dict[str, CategoryCompletion] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AchievementProgress:
    """An achievement not yet earned and how close the hero is."""

    id: str
    name: str
    emoji: str
    progress: int
    requirement: str

    def to_dict(self) -> dict:
        return asdict(self)
