"""
backend/livescores/services/change_detector.py

Purpose:
    Compare the previous snapshot of a tracked match with the current one and
    emit score events: goals for football, wickets for cricket. Pure
    comparison; persisting the new snapshot and delivering alerts is the
    caller's job.

Notes:
    - When both sides change in the same tick only one event is emitted and
      the home side is reported. This preference is arbitrary and kept for
      compatibility, not a rule about which change happened first.
    - A football score of None ("not started") compares as 0 so the first
      0-0 result slot does not look like a goal.
    - A current football score of None emits nothing; the caller keeps the
      last known score in the snapshot.
"""

from __future__ import annotations

from livescores.models.match import Match, MatchStatus, Sport
from livescores.services.event_models import (
    DomainEvent,
    GoalEvent,
    MatchEndedEvent,
    MatchStartedEvent,
    WicketEvent,
)


def _goals(value) -> int:
    return value if isinstance(value, int) else 0


def detect_changes(previous: Match | None, current: Match) -> list[DomainEvent]:
    if previous is None:
        return []

    if current.sport == Sport.FOOTBALL:
        # A missing current score is a feed gap, not a change.
        if current.home_score is None or current.away_score is None:
            return []
        prev_home, prev_away = _goals(previous.home_score), _goals(previous.away_score)
        cur_home, cur_away = _goals(current.home_score), _goals(current.away_score)
        if cur_home != prev_home:
            return [GoalEvent(match=current, scoring_side="home", new_score=cur_home)]
        if cur_away != prev_away:
            return [GoalEvent(match=current, scoring_side="away", new_score=cur_away)]
        return []

    if current.home_wickets != previous.home_wickets:
        return [WicketEvent(match=current, side="home", wicket_count=current.home_wickets)]
    if current.away_wickets != previous.away_wickets:
        return [WicketEvent(match=current, side="away", wicket_count=current.away_wickets)]
    return []


def football_winner(match: Match) -> str:
    home, away = _goals(match.home_score), _goals(match.away_score)
    if home > away:
        return match.home_team
    if away > home:
        return match.away_team
    return "Draw"


def detect_transitions(previous: Match | None, current: Match) -> list[DomainEvent]:
    """Lifecycle events, kept apart from score diffs.

    A match entering the tracked set while already live counts as started;
    a tracked match moving into finished counts as ended.
    """
    if previous is None:
        if current.is_live:
            return [MatchStartedEvent(match=current)]
        return []

    events: list[DomainEvent] = []
    if current.is_live and not previous.is_live and previous.status == MatchStatus.UPCOMING:
        events.append(MatchStartedEvent(match=current))
    if current.status == MatchStatus.FINISHED and previous.status != MatchStatus.FINISHED:
        winner = football_winner(current) if current.sport == Sport.FOOTBALL else ""
        events.append(MatchEndedEvent(match=current, winner=winner))
    return events
