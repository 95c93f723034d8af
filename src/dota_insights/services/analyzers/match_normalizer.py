"""Per-match derived facts shared by every analyzer."""
import logging
from datetime import datetime, tzinfo
from typing import Iterable, Optional, Union

from dota_insights.models.match import MatchRecord, NormalizedMatch

logger = logging.getLogger(__name__)

RADIANT_SLOT_LIMIT = 128

# (start hour inclusive, bucket), checked in order; earlier hours are night
TIME_BUCKETS = (
    (18, "evening"),
    (12, "afternoon"),
    (6, "morning"),
)

MatchInput = Union[MatchRecord, NormalizedMatch, dict]


def is_win(match: MatchRecord) -> Optional[bool]:
    """Player outcome, or None when the match has no recorded result."""
    if match.radiant_win is None:
        return None
    return match.radiant_win == (match.player_slot < RADIANT_SLOT_LIMIT)


def match_kda(kills: int, deaths: int, assists: int) -> float:
    """(kills + assists) / deaths, with deaths floored at 1."""
    return ((kills or 0) + (assists or 0)) / max(deaths or 0, 1)


def local_datetime(start_time: int, tz: Optional[tzinfo] = None) -> datetime:
    """Start time in ``tz``, or the process-local zone when tz is None."""
    return datetime.fromtimestamp(start_time, tz)


def time_bucket(hour: int) -> str:
    for start, bucket in TIME_BUCKETS:
        if hour >= start:
            return bucket
    return "night"


def normalize_match(match: MatchRecord, tz: Optional[tzinfo] = None) -> NormalizedMatch:
    """Attach is_win, KDA, whole minutes, time-of-day bucket and local date."""
    started = local_datetime(match.start_time, tz)
    return NormalizedMatch(
        record=match,
        is_win=is_win(match),
        kda=match_kda(match.kills, match.deaths, match.assists),
        duration_minutes=max(match.duration_seconds, 0) // 60,
        time_bucket=time_bucket(started.hour),
        local_date=started.date(),
    )


def normalize_matches(
    matches: Iterable[MatchInput], tz: Optional[tzinfo] = None
) -> list[NormalizedMatch]:
    """Normalize a batch of matches.

    Accepts MatchRecord objects, already-normalized matches, or raw OpenDota
    dicts. An entry that cannot be read is logged and skipped so the rest of
    the batch still counts.
    """
    if not isinstance(matches, (list, tuple)):
        raise TypeError(f"matches must be a list, got {type(matches).__name__}")

    normalized: list[NormalizedMatch] = []
    for entry in matches:
        if isinstance(entry, NormalizedMatch):
            normalized.append(entry)
            continue
        try:
            record = entry if isinstance(entry, MatchRecord) else MatchRecord.from_api(entry)
            normalized.append(normalize_match(record, tz))
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
            logger.warning(f"Skipping unreadable match entry: {e!r}")
    return normalized


def sort_newest_first(matches: Iterable[NormalizedMatch]) -> list[NormalizedMatch]:
    """Sort by start_time descending; match_id breaks ties for a stable order."""
    return sorted(matches, key=lambda m: (m.start_time, m.match_id), reverse=True)


def consecutive_outcomes(matches: list[NormalizedMatch]) -> tuple[str, int]:
    """Length and type of the run of identical outcomes at the head of the list.

    The list must already be newest-first. An undecided head match yields
    ("none", 0).
    """
    if not matches or matches[0].is_win is None:
        return "none", 0

    head = matches[0].is_win
    count = 0
    for match in matches:
        if match.is_win != head:
            break
        count += 1
    return ("win" if head else "loss"), count
