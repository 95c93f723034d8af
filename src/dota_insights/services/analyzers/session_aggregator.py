"""Today's session: wins, losses, streak and an estimated MMR swing."""
from datetime import datetime, tzinfo
from typing import Optional, Sequence

from dota_insights.config import settings
from dota_insights.models.match import NormalizedMatch
from dota_insights.models.session import SessionSummary
from dota_insights.services.analyzers.match_normalizer import (
    consecutive_outcomes,
    local_datetime,
    sort_newest_first,
)


class SessionAggregator:
    """Folds the matches played on the viewer's current calendar day."""

    BEHAVIOR_UPDATE_GAMES = 15

    def __init__(self, mmr_delta: Optional[int] = None):
        self.mmr_delta = mmr_delta if mmr_delta is not None else settings.session_mmr_delta

    def today_matches(
        self,
        matches: Sequence[NormalizedMatch],
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None,
    ) -> list[NormalizedMatch]:
        """Matches whose local start date is today, newest first.

        The local date is recomputed from start_time in ``tz`` so a match
        normalized in another zone is still bucketed correctly. Without
        ``tz``, an aware ``now`` supplies the zone.
        """
        if not isinstance(matches, (list, tuple)):
            raise TypeError(f"matches must be a list, got {type(matches).__name__}")
        if tz is None and now is not None and now.tzinfo is not None:
            tz = now.tzinfo
        if now is None:
            now = datetime.now(tz)
        elif tz is not None and now.tzinfo is not None:
            now = now.astimezone(tz)
        today = now.date()
        todays = [m for m in matches if local_datetime(m.start_time, tz).date() == today]
        return sort_newest_first(todays)

    def calculate_today_session(
        self,
        matches: Sequence[NormalizedMatch],
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None,
    ) -> SessionSummary:
        todays = self.today_matches(matches, now=now, tz=tz)
        if not todays:
            return SessionSummary()

        wins = sum(1 for m in todays if m.is_win is True)
        losses = sum(1 for m in todays if m.is_win is False)
        streak_type, current_streak = consecutive_outcomes(todays)
        decided = wins + losses

        return SessionSummary(
            wins=wins,
            losses=losses,
            current_streak=current_streak,
            streak_type=streak_type,
            estimated_mmr_change=(wins - losses) * self.mmr_delta,
            games_played=len(todays),
            win_rate=round(wins / decided * 100) if decided else 0,
            average_kda=round(sum(m.kda for m in todays) / len(todays), 2),
            average_duration_minutes=round(
                sum(m.record.duration_seconds for m in todays) / len(todays) / 60, 1
            ),
            games_until_behavior_update=max(0, self.BEHAVIOR_UPDATE_GAMES - len(todays)),
        )
