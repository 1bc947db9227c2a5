"""
backend/livescores/services/match_filter.py

Purpose:
    Temporal/status predicates for the match list (live, today, upcoming,
    finished) and the display ordering: live fixtures first in input order,
    then the rest by kickoff ascending. Records without a kickoff sort last.

Dependencies:
    - livescores.models.match
    - livescores.utils
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterable, Literal

from livescores.models.match import Match, MatchStatus
from livescores.utils import ensure_utc

FilterCriterion = Literal["live", "today", "upcoming", "finished"]
FILTER_CRITERIA: tuple[str, ...] = ("live", "today", "upcoming", "finished")


def local_day_bounds(reference_time: datetime) -> tuple[datetime, datetime]:
    """[midnight, next midnight) of the reference time's own day and zone."""
    ref = ensure_utc(reference_time)
    start = ref.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def _predicate(criterion: str, reference_time: datetime) -> Callable[[Match], bool]:
    now = ensure_utc(reference_time)
    if criterion == "live":
        return lambda m: m.is_live
    if criterion == "today":
        start, end = local_day_bounds(now)
        return lambda m: m.match_date_time is not None and start <= m.match_date_time < end
    if criterion == "upcoming":
        return lambda m: m.match_date_time is not None and m.match_date_time > now and not m.is_live
    if criterion == "finished":
        return lambda m: m.status == MatchStatus.FINISHED
    raise ValueError(f"Unknown match filter: {criterion}")


def filter_matches(matches: Iterable[Match], criterion: str, reference_time: datetime) -> list[Match]:
    keep = _predicate(criterion, reference_time)
    return [m for m in matches if keep(m)]


def _sort_key(match: Match) -> tuple:
    if match.is_live:
        return (0,)
    if match.match_date_time is None:
        return (2,)
    return (1, match.match_date_time.timestamp())


def sort_matches(matches: Iterable[Match]) -> list[Match]:
    # sorted() is stable, so ties keep their input order.
    return sorted(matches, key=_sort_key)
