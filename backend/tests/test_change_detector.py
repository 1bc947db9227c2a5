"""
backend/tests/test_change_detector.py

Purpose:
    Unit tests for goal/wicket detection, lifecycle transitions and alert
    rendering.
"""

import sys

sys.path.insert(0, "backend")

from livescores.models.match import CricketScore, Match, MatchStatus, Sport
from livescores.services.alerts import render_alert
from livescores.services.change_detector import detect_changes, detect_transitions
from livescores.services.event_models import GoalEvent, MatchEndedEvent, MatchStartedEvent, WicketEvent


def _football(home, away, **kwargs) -> Match:
    base = dict(
        id="ol_1",
        sport=Sport.FOOTBALL,
        league="Bundesliga",
        home_team="Bayern",
        away_team="Dortmund",
        home_score=home,
        away_score=away,
        status=MatchStatus.LIVE,
        is_live=True,
    )
    base.update(kwargs)
    return Match(**base)


def _cricket(home_wkts, away_wkts, **kwargs) -> Match:
    base = dict(
        id="cric-1",
        sport=Sport.CRICKET,
        league="IPL",
        home_team="Mumbai Indians",
        away_team="Chennai Super Kings",
        home_score=CricketScore(runs=150, wickets=home_wkts, overs="17.2"),
        away_score=CricketScore(runs=0, wickets=away_wkts, overs=""),
        status=MatchStatus.LIVE,
        is_live=True,
    )
    base.update(kwargs)
    return Match(**base)


def test_first_observation_emits_nothing():
    assert detect_changes(None, _football(1, 0)) == []


def test_identical_snapshot_is_idempotent():
    match = _football(1, 1)
    assert detect_changes(match, match) == []
    cricket = _cricket(3, 0)
    assert detect_changes(cricket, cricket) == []


def test_home_goal():
    events = detect_changes(_football(1, 0), _football(2, 0))
    assert len(events) == 1
    assert isinstance(events[0], GoalEvent)
    assert events[0].scoring_side == "home"
    assert events[0].new_score == 2
    assert events[0].scoring_team == "Bayern"


def test_away_goal():
    events = detect_changes(_football(1, 0), _football(1, 1))
    assert [(e.scoring_side, e.new_score) for e in events] == [("away", 1)]


def test_simultaneous_change_prefers_home_side():
    events = detect_changes(_football(0, 0), _football(1, 1))
    assert [(e.scoring_side, e.new_score) for e in events] == [("home", 1)]


def test_not_started_compares_as_zero():
    assert detect_changes(_football(None, None), _football(0, 0)) == []
    events = detect_changes(_football(None, None), _football(0, 1))
    assert [(e.scoring_side, e.new_score) for e in events] == [("away", 1)]


def test_wicket_detection_and_tie_break():
    events = detect_changes(_cricket(3, 0), _cricket(4, 0))
    assert len(events) == 1
    assert isinstance(events[0], WicketEvent)
    assert (events[0].side, events[0].wicket_count) == ("home", 4)

    both = detect_changes(_cricket(3, 0), _cricket(4, 1))
    assert [(e.side, e.wicket_count) for e in both] == [("home", 4)]

    away = detect_changes(_cricket(3, 0), _cricket(3, 1))
    assert [(e.side, e.wicket_count) for e in away] == [("away", 1)]


def test_cricket_runs_alone_do_not_emit():
    previous = _cricket(3, 0)
    current = _cricket(3, 0, home_score=CricketScore(runs=170, wickets=3, overs="18.0"))
    assert detect_changes(previous, current) == []


def test_transitions_start_and_end():
    started = detect_transitions(None, _football(0, 0))
    assert len(started) == 1 and isinstance(started[0], MatchStartedEvent)

    assert detect_transitions(None, _football(None, None, is_live=False, status=MatchStatus.UPCOMING)) == []

    ended = detect_transitions(_football(2, 1), _football(2, 1, is_live=False, status=MatchStatus.FINISHED))
    assert len(ended) == 1
    assert isinstance(ended[0], MatchEndedEvent)
    assert ended[0].winner == "Bayern"

    draw = detect_transitions(_football(1, 1), _football(1, 1, is_live=False, status=MatchStatus.FINISHED))
    assert draw[0].winner == "Draw"


def test_render_goal_alert():
    event = detect_changes(_football(1, 0), _football(1, 1))[0]
    alert = render_alert(event)
    assert alert.alert_id.startswith("goal-ol_1-")
    assert alert.title == "⚽ GOAL! Bundesliga"
    assert alert.body == "Dortmund scores!\nBayern 1 - 1 Dortmund"
    assert alert.priority == 2


def test_render_wicket_alert():
    event = detect_changes(_cricket(3, 0), _cricket(4, 0))[0]
    alert = render_alert(event)
    assert alert.title == "🏏 WICKET! IPL"
    assert alert.body.startswith("Mumbai Indians loses a wicket! (4 down)\n")
    assert "150/4" in alert.body


def test_render_lifecycle_alerts():
    start = render_alert(MatchStartedEvent(match=_football(0, 0)))
    assert start.alert_id == "start-ol_1"
    assert start.title == "⚽ Match Started!"
    assert start.priority == 1

    end = render_alert(MatchEndedEvent(match=_football(2, 0), winner="Bayern"))
    assert end.alert_id == "end-ol_1"
    assert end.body == "Bayern 2 - 0 Dortmund\nWinner: Bayern"


def test_missing_current_score_emits_nothing():
    assert detect_changes(_football(1, 0), _football(None, None)) == []
    assert detect_changes(_football(1, 0), _football(None, 0)) == []
