"""Match and hero aggregate models."""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional


def _as_int(value, default: int = 0) -> int:
    if value is None:
        return default
    return int(value)


def _as_result(value) -> Optional[bool]:
    """Parse radiant_win, which exports sometimes carry as 0/1 or "true"/"false"."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
        if lowered in ("", "null", "none"):
            return None
    raise ValueError(f"unreadable radiant_win: {value!r}")


@dataclass(frozen=True)
class MatchRecord:
    """A single completed match from the player's perspective."""

    match_id: int
    hero_id: int
    start_time: int  # Unix seconds
    duration_seconds: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    player_slot: int = 0  # < 128 Radiant, >= 128 Dire
    radiant_win: Optional[bool] = None  # None when the API has no result
    game_mode: Optional[int] = None
    gold_per_min: int = 0
    xp_per_min: int = 0
    last_hits: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "MatchRecord":
        """Build from an OpenDota match payload (recentMatches / matches)."""
        return cls(
            match_id=_as_int(data["match_id"]),
            hero_id=_as_int(data["hero_id"]),
            start_time=_as_int(data.get("start_time")),
            duration_seconds=_as_int(data.get("duration", data.get("duration_seconds"))),
            kills=_as_int(data.get("kills")),
            deaths=_as_int(data.get("deaths")),
            assists=_as_int(data.get("assists")),
            player_slot=_as_int(data.get("player_slot")),
            radiant_win=_as_result(data.get("radiant_win")),
            game_mode=data.get("game_mode"),
            gold_per_min=_as_int(data.get("gold_per_min")),
            xp_per_min=_as_int(data.get("xp_per_min")),
            last_hits=_as_int(data.get("last_hits")),
        )

    @property
    def is_radiant(self) -> bool:
        return self.player_slot < 128


@dataclass(frozen=True)
class NormalizedMatch:
    """A match plus the derived facts every downstream analyzer uses."""

    record: MatchRecord
    is_win: Optional[bool]
    kda: float
    duration_minutes: int
    time_bucket: str  # night, morning, afternoon, evening
    local_date: date

    @property
    def hero_id(self) -> int:
        return self.record.hero_id

    @property
    def start_time(self) -> int:
        return self.record.start_time

    @property
    def match_id(self) -> int:
        return self.record.match_id

    def to_dict(self) -> dict:
        return {
            **asdict(self.record),
            "is_win": self.is_win,
            "kda": round(self.kda, 2),
            "duration_minutes": self.duration_minutes,
            "time_bucket": self.time_bucket,
            "local_date": self.local_date.isoformat(),
        }


@dataclass(frozen=True)
class HeroAggregateStats:
    """Per-hero totals across all recorded matches for that hero."""

    hero_id: int
    games: int = 0
    win: int = 0
    sum_kills: int = 0
    sum_deaths: int = 0
    sum_assists: int = 0
    sum_last_hits: int = 0
    sum_gold_per_min: int = 0
    last_played: Optional[int] = None  # Unix seconds, when the API reports it

    @classmethod
    def from_api(cls, data: dict) -> "HeroAggregateStats":
        """Build from an OpenDota /players/{id}/heroes entry or a pre-aggregated dict."""
        games = max(0, _as_int(data.get("games")))
        win = min(games, max(0, _as_int(data.get("win"))))
        last_played = data.get("last_played")
        return cls(
            hero_id=_as_int(data["hero_id"]),
            games=games,
            win=win,
            sum_kills=max(0, _as_int(data.get("sum_kills"))),
            sum_deaths=max(0, _as_int(data.get("sum_deaths"))),
            sum_assists=max(0, _as_int(data.get("sum_assists"))),
            sum_last_hits=max(0, _as_int(data.get("sum_last_hits"))),
            sum_gold_per_min=max(0, _as_int(data.get("sum_gold_per_min"))),
            last_played=None if last_played is None else _as_int(last_played),
        )

    @property
    def losses(self) -> int:
        return self.games - self.win

    @property
    def winrate(self) -> float:
        """Win percentage, 0 for heroes with no games."""
        if self.games <= 0:
            return 0.0
        return self.win / self.games * 100

    @property
    def kda(self) -> float:
        """Aggregate KDA, deaths floored at 1."""
        return (self.sum_kills + self.sum_assists) / max(self.sum_deaths, 1)

    def to_dict(self) -> dict:
        return asdict(self)
