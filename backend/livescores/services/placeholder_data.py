"""
backend/livescores/services/placeholder_data.py

Purpose:
    Sample cricket fixtures shown when no CricAPI key is configured, so the
    cricket view renders in degraded mode instead of failing.
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from livescores.config_leagues import LEAGUE_ICONS
from livescores.models.match import CricketScore, Match, MatchStatus, Sport
from livescores.services.match_normalizer import format_display_time


def placeholder_cricket_matches(reference_time: datetime, display_tz: tzinfo = ZoneInfo("UTC")) -> list[Match]:
    icon = LEAGUE_ICONS["cricket"]
    later = reference_time + timedelta(hours=1)
    return [
        Match(
            id="c1",
            sport=Sport.CRICKET,
            league="ICC World Cup",
            league_icon=icon,
            home_team="India",
            away_team="Australia",
            home_score=CricketScore(runs=287, wickets=6, overs="48.2"),
            away_score=CricketScore(runs=245, wickets=8, overs="45.0"),
            status=MatchStatus.LIVE,
            is_live=True,
            overs="48.2",
            match_date_time=reference_time,
            time="Live",
            venue="Melbourne Cricket Ground",
        ),
        Match(
            id="c2",
            sport=Sport.CRICKET,
            league="IPL",
            league_icon=icon,
            home_team="Mumbai Indians",
            away_team="Chennai Super Kings",
            home_score=CricketScore(runs=186, wickets=4, overs="20.0"),
            away_score=CricketScore(runs=142, wickets=5, overs="16.3"),
            status=MatchStatus.LIVE,
            is_live=True,
            overs="20.0",
            match_date_time=reference_time,
            time="Live",
            venue="Wankhede Stadium",
        ),
        Match(
            id="c3",
            sport=Sport.CRICKET,
            league="Big Bash League",
            league_icon=icon,
            home_team="Sydney Sixers",
            away_team="Melbourne Stars",
            home_score=CricketScore(runs=0, wickets=0, overs="0.0"),
            away_score=CricketScore(runs=0, wickets=0, overs="0.0"),
            status=MatchStatus.UPCOMING,
            is_live=False,
            match_date_time=later,
            time=format_display_time(later, display_tz),
            venue="SCG",
        ),
    ]
