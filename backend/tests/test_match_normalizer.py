"""
backend/tests/test_match_normalizer.py

Purpose:
    Fixture-driven tests for each provider normalizer against a known
    canonical Match.
"""

from datetime import datetime, timezone
import sys

sys.path.insert(0, "backend")

from livescores.models.match import CricketScore, MatchStatus, Sport
from livescores.services.match_normalizer import (
    ProviderContext,
    normalize_cricapi,
    normalize_openligadb,
    normalize_thesportsdb,
)

REF = datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)


def _ctx(league: str = "", endpoint: str = "current") -> ProviderContext:
    return ProviderContext(league_name=league, reference_time=REF, endpoint=endpoint)


OPENLIGADB_RUNNING = {
    "matchID": 66870,
    "matchDateTime": "2024-08-23T20:30:00",
    "matchDateTimeUTC": "2024-08-23T18:30:00Z",
    "leagueName": "1. Fußball-Bundesliga 2024/2025",
    "team1": {"teamId": 87, "teamName": "Borussia Mönchengladbach"},
    "team2": {"teamId": 6, "teamName": "Bayer 04 Leverkusen"},
    "matchIsFinished": False,
    "matchIsRunning": True,
    "matchResults": [
        {"resultTypeID": 1, "resultName": "Halbzeit", "pointsTeam1": 1, "pointsTeam2": 0},
        {"resultTypeID": 2, "resultName": "Endergebnis", "pointsTeam1": 2, "pointsTeam2": 1},
    ],
    "location": {"locationCity": "Mönchengladbach", "locationStadium": "Borussia-Park"},
}


def test_openligadb_running_match():
    match = normalize_openligadb(OPENLIGADB_RUNNING, _ctx("Bundesliga"))
    assert match.id == "ol_66870"
    assert match.sport == Sport.FOOTBALL
    assert match.league == "Bundesliga"
    assert match.league_icon == "⚽"
    assert match.home_team == "Borussia Mönchengladbach"
    assert match.away_team == "Bayer 04 Leverkusen"
    assert match.home_score == 2
    assert match.away_score == 1
    assert match.status == MatchStatus.LIVE
    assert match.is_live is True
    assert match.minute == "Endergebnis"
    assert match.match_date_time == datetime(2024, 8, 23, 18, 30, tzinfo=timezone.utc)
    assert match.time == "06:30 PM"
    assert match.venue == "Mönchengladbach"


def test_openligadb_falls_back_to_first_result_slot():
    raw = dict(OPENLIGADB_RUNNING, matchIsRunning=False, matchResults=[
        {"resultTypeID": 1, "resultName": "Halbzeit", "pointsTeam1": 0, "pointsTeam2": 3},
    ])
    match = normalize_openligadb(raw, _ctx("Bundesliga"))
    assert match.home_score == 0
    assert match.away_score == 3
    assert match.status == MatchStatus.FINISHED
    assert match.is_live is False
    assert match.minute == ""


def test_openligadb_not_started_and_missing_fields():
    raw = {"matchID": 1, "matchDateTime": "not-a-date", "matchResults": []}
    match = normalize_openligadb(raw, _ctx())
    assert match.home_team == "Team A"
    assert match.away_team == "Team B"
    assert match.home_score is None
    assert match.away_score is None
    assert match.score_text("home") == "-"
    assert match.status == MatchStatus.UPCOMING
    assert match.league == "Unknown League"
    assert match.match_date_time is None
    assert match.time == "TBD"


def test_openligadb_uses_raw_league_name_without_context():
    match = normalize_openligadb(OPENLIGADB_RUNNING, _ctx())
    assert match.league == "1. Fußball-Bundesliga 2024/2025"


SPORTSDB_LIVE = {
    "idEvent": "2052711",
    "strLeague": "English Premier League",
    "strHomeTeam": "Arsenal",
    "strAwayTeam": "Chelsea",
    "intHomeScore": "2",
    "intAwayScore": "1",
    "strTimestamp": "2024-10-05T16:30:00",
    "dateEvent": "2024-10-05",
    "strTime": "16:30:00",
    "strProgress": "67'",
    "strStatus": "2H",
    "strVenue": "Emirates Stadium",
}


def test_thesportsdb_live_match():
    match = normalize_thesportsdb(SPORTSDB_LIVE, _ctx("Premier League"))
    assert match.id == "sdb_2052711"
    assert match.league == "English Premier League"
    assert match.home_score == 2
    assert match.away_score == 1
    assert match.is_live is True
    assert match.status == MatchStatus.LIVE
    assert match.minute == "67'"
    assert match.venue == "Emirates Stadium"
    assert match.match_date_time == datetime(2024, 10, 5, 16, 30, tzinfo=timezone.utc)


def test_thesportsdb_half_time_counts_as_live():
    match = normalize_thesportsdb(dict(SPORTSDB_LIVE, strProgress="ht", strStatus=""), _ctx())
    assert match.is_live is True
    assert match.minute == "HT"


def test_thesportsdb_finished_when_both_scores_present():
    raw = dict(SPORTSDB_LIVE, strProgress=None, strStatus="Match Finished", intHomeScore="3", intAwayScore="0")
    match = normalize_thesportsdb(raw, _ctx())
    assert match.status == MatchStatus.FINISHED
    assert match.is_live is False
    assert match.home_score == 3


def test_thesportsdb_upcoming_builds_kickoff_from_date_and_time():
    raw = {
        "idEvent": "99",
        "strHomeTeam": "Mumbai City FC",
        "strAwayTeam": "Kerala Blasters",
        "intHomeScore": None,
        "intAwayScore": None,
        "dateEvent": "2024-10-20",
        "strTime": "14:00:00",
        "strStatus": "Not Started",
    }
    match = normalize_thesportsdb(raw, _ctx("Indian Super League"))
    assert match.league == "Indian Super League"
    assert match.status == MatchStatus.UPCOMING
    assert match.home_score is None
    assert match.match_date_time == datetime(2024, 10, 20, 14, 0, tzinfo=timezone.utc)


def test_thesportsdb_unparsable_date_keeps_record():
    match = normalize_thesportsdb({"idEvent": "5", "strHomeTeam": "A", "strAwayTeam": "B"}, _ctx())
    assert match.id == "sdb_5"
    assert match.match_date_time is None
    assert match.time == "TBD"


CRICAPI_CURRENT = {
    "id": "a1b2c3",
    "name": "India vs Australia, 3rd ODI",
    "series_id": "series-77",
    "status": "Australia need 45 runs in 30 balls - 2nd innings",
    "venue": "Melbourne Cricket Ground",
    "dateTimeGMT": "2024-09-01T03:30:00",
    "teams": ["India", "Australia"],
    "score": ["186/4 (20 Ov)", "142/10"],
}


def test_cricapi_current_match():
    match = normalize_cricapi(CRICAPI_CURRENT, _ctx())
    assert match.id == "a1b2c3"
    assert match.sport == Sport.CRICKET
    assert match.league == "India vs Australia"
    assert match.league_icon == "🏏"
    assert match.home_score == CricketScore(runs=186, wickets=4, overs="20")
    assert match.away_score == CricketScore(runs=142, wickets=10, overs="")
    assert match.home_wickets == 4
    assert match.overs == "20"
    assert match.status == MatchStatus.LIVE
    assert match.is_live is True
    assert match.venue == "Melbourne Cricket Ground"
    assert match.time == "03:30 AM"


def test_cricapi_finished_vocabulary():
    match = normalize_cricapi(dict(CRICAPI_CURRENT, status="India won by 44 runs"), _ctx())
    assert match.status == MatchStatus.FINISHED
    assert match.is_live is False


def test_cricapi_schedule_endpoint_ignores_innings_and_scores():
    raw = dict(CRICAPI_CURRENT, status="Innings break")
    match = normalize_cricapi(raw, _ctx(endpoint="schedule"))
    assert match.status == MatchStatus.UPCOMING
    assert match.is_live is False
    assert match.home_score == CricketScore()
    assert match.overs == ""


def test_cricapi_innings_objects_and_defaults():
    raw = {
        "name": None,
        "series_id": "",
        "status": "Match not started",
        "score": [{"r": 99, "w": 2, "o": 14.3}],
    }
    match = normalize_cricapi(raw, _ctx())
    assert match.home_team == "Team A"
    assert match.away_team == "Team B"
    assert match.league == "International"
    assert match.home_score == CricketScore(runs=99, wickets=2, overs="14.3")
    assert match.away_score == CricketScore()
    assert match.id.startswith("cricket_")
    assert match.id == normalize_cricapi(raw, _ctx()).id
    assert match.match_date_time == REF
    assert match.time == "TBD"


def test_normalizers_accept_non_dict_input():
    assert normalize_openligadb(None, _ctx()).home_team == "Team A"
    assert normalize_thesportsdb([], _ctx()).away_team == "Team B"
    assert normalize_cricapi("oops", _ctx()).league == "International"
