"""Session models."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SessionSummary:
    """Today's matches folded into a scoreline.

    ``estimated_mmr_change`` is a constant-delta estimate; the stats API
    never exposes real MMR movement.
    """

    wins: int = 0
    losses: int = 0
    current_streak: int = 0
    streak_type: str = "none"  # win, loss, none
    estimated_mmr_change: int = 0
    games_played: int = 0
    win_rate: int = 0
    average_kda: float = 0.0
    average_duration_minutes: float = 0.0
    games_until_behavior_update: int = 15

    def to_dict(self) -> dict:
        return asdict(self)
