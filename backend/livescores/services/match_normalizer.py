"""
backend/livescores/services/match_normalizer.py

Purpose:
    Map raw provider records (OpenLigaDB, TheSportsDB, CricAPI) onto the
    canonical Match. Every normalizer is a total function: missing or oddly
    typed fields fall back along explicit candidate chains and never raise.

Dependencies:
    - livescores.models.match
    - livescores.services.score_parser
    - livescores.utils
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Iterable, Literal
from zoneinfo import ZoneInfo

from livescores.config_leagues import LEAGUE_ICONS
from livescores.models.match import TBD, CricketScore, Match, MatchStatus, Sport
from livescores.services.score_parser import EMPTY_SCORE, score_from_entry
from livescores.utils import try_parse_utc, utcnow

HOME_PLACEHOLDER = "Team A"
AWAY_PLACEHOLDER = "Team B"

CRICKET_LIVE_TERMS = ("live", "in progress", "innings")
CRICKET_SCHEDULE_LIVE_TERMS = ("live", "in progress")
CRICKET_FINISHED_TERMS = ("won", "draw", "tied", "result")

_UTC = ZoneInfo("UTC")


@dataclass(frozen=True)
class ProviderContext:
    """Per-call information the raw record does not carry itself."""

    league_name: str = ""
    reference_time: datetime = field(default_factory=utcnow)
    display_tz: tzinfo = _UTC
    endpoint: Literal["current", "schedule"] = "current"


def _dig(obj: Any, *path: Any) -> Any:
    """Walk dict keys / list indexes, returning None on the first miss."""
    cur = obj
    for step in path:
        if isinstance(step, int):
            if not isinstance(cur, list) or step >= len(cur) or step < -len(cur):
                return None
            cur = cur[step]
        else:
            if not isinstance(cur, dict):
                return None
            cur = cur.get(step)
        if cur is None:
            return None
    return cur


def _first_present(candidates: Iterable[Any]) -> Any:
    for value in candidates:
        if value is not None:
            return value
    return None


def _first_text(candidates: Iterable[Any], default: str = "") -> str:
    for value in candidates:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return default


def _as_goals(value: Any) -> int | None:
    """Goals arrive as ints (OpenLigaDB) or numeric strings (TheSportsDB)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    return None


def format_display_time(kickoff: datetime | None, display_tz: tzinfo = _UTC) -> str:
    if kickoff is None:
        return TBD
    return kickoff.astimezone(display_tz).strftime("%I:%M %p")


# ---------------------------------------------------------------------------
# OpenLigaDB
# ---------------------------------------------------------------------------

def openligadb_status(raw: dict[str, Any]) -> MatchStatus:
    if raw.get("matchIsRunning"):
        return MatchStatus.LIVE
    if _dig(raw, "matchResults", 0) is not None:
        return MatchStatus.FINISHED
    return MatchStatus.UPCOMING


def normalize_openligadb(raw: dict[str, Any], context: ProviderContext) -> Match:
    if not isinstance(raw, dict):
        raw = {}

    # The second result slot is the running/final score; not-yet-started
    # fixtures sometimes only populate the first one.
    home_score = _as_goals(_first_present((
        _dig(raw, "matchResults", 1, "pointsTeam1"),
        _dig(raw, "matchResults", 0, "pointsTeam1"),
    )))
    away_score = _as_goals(_first_present((
        _dig(raw, "matchResults", 1, "pointsTeam2"),
        _dig(raw, "matchResults", 0, "pointsTeam2"),
    )))
    kickoff = try_parse_utc(_first_present((raw.get("matchDateTimeUTC"), raw.get("matchDateTime"))))

    return Match(
        id=f"ol_{_first_text((raw.get('matchID'), raw.get('matchId')), default='unknown')}",
        sport=Sport.FOOTBALL,
        league=_first_text((context.league_name, raw.get("leagueName")), default="Unknown League"),
        league_icon=LEAGUE_ICONS["football"],
        home_team=_first_text((_dig(raw, "team1", "teamName"),), default=HOME_PLACEHOLDER),
        away_team=_first_text((_dig(raw, "team2", "teamName"),), default=AWAY_PLACEHOLDER),
        home_score=home_score,
        away_score=away_score,
        status=openligadb_status(raw),
        is_live=bool(raw.get("matchIsRunning")),
        minute=_first_text((_dig(raw, "matchResults", 1, "resultName"),)),
        match_date_time=kickoff,
        time=format_display_time(kickoff, context.display_tz),
        venue=_first_text((_dig(raw, "location", "locationCity"),)),
    )


# ---------------------------------------------------------------------------
# TheSportsDB
# ---------------------------------------------------------------------------

def normalize_thesportsdb(raw: dict[str, Any], context: ProviderContext) -> Match:
    if not isinstance(raw, dict):
        raw = {}

    kickoff_raw = _first_text((raw.get("strTimestamp"),))
    if not kickoff_raw:
        kickoff_raw = f"{raw.get('dateEvent') or ''}T{raw.get('strTime') or '00:00:00'}"
    kickoff = try_parse_utc(kickoff_raw)

    progress = str(raw.get("strProgress") or "").strip().upper()
    status_text = str(raw.get("strStatus") or "").strip().lower()
    home_score = _as_goals(raw.get("intHomeScore"))
    away_score = _as_goals(raw.get("intAwayScore"))

    is_live = "'" in progress or progress == "HT" or "live" in status_text
    is_finished = (
        progress == "FT"
        or "finished" in status_text
        or (home_score is not None and away_score is not None)
    )
    if is_live:
        status = MatchStatus.LIVE
    elif is_finished:
        status = MatchStatus.FINISHED
    else:
        status = MatchStatus.UPCOMING

    return Match(
        id=f"sdb_{_first_text((raw.get('idEvent'),), default='unknown')}",
        sport=Sport.FOOTBALL,
        league=_first_text((raw.get("strLeague"), context.league_name), default="Unknown League"),
        league_icon=LEAGUE_ICONS["football"],
        home_team=_first_text((raw.get("strHomeTeam"),), default=HOME_PLACEHOLDER),
        away_team=_first_text((raw.get("strAwayTeam"),), default=AWAY_PLACEHOLDER),
        home_score=home_score,
        away_score=away_score,
        status=status,
        is_live=is_live,
        minute=progress,
        match_date_time=kickoff,
        time=format_display_time(kickoff, context.display_tz),
        venue=_first_text((raw.get("strVenue"),)),
    )


# ---------------------------------------------------------------------------
# CricAPI
# ---------------------------------------------------------------------------

def _matches_any(text: str, terms: Iterable[str]) -> bool:
    return any(term in text for term in terms)


def cricket_status(status_text: str, *, live_terms: Iterable[str] = CRICKET_LIVE_TERMS) -> MatchStatus:
    text = (status_text or "").lower()
    if _matches_any(text, live_terms):
        return MatchStatus.LIVE
    if _matches_any(text, CRICKET_FINISHED_TERMS):
        return MatchStatus.FINISHED
    return MatchStatus.UPCOMING


def _cricket_fallback_id(home: str, away: str, kickoff_raw: str) -> str:
    digest = hashlib.sha1(f"{home}|{away}|{kickoff_raw}".encode()).hexdigest()[:12]
    return f"cricket_{digest}"


def normalize_cricapi(raw: dict[str, Any], context: ProviderContext) -> Match:
    if not isinstance(raw, dict):
        raw = {}

    home_team = _first_text((_dig(raw, "teams", 0),), default=HOME_PLACEHOLDER)
    away_team = _first_text((_dig(raw, "teams", 1),), default=AWAY_PLACEHOLDER)
    name = raw.get("name")
    league = _first_text(
        (name.split(",")[0] if isinstance(name, str) else None, raw.get("series_id")),
        default="International",
    )

    status_text = str(raw.get("status") or "").lower()
    if context.endpoint == "schedule":
        live_terms = CRICKET_SCHEDULE_LIVE_TERMS
        home_score: CricketScore = EMPTY_SCORE
        away_score: CricketScore = EMPTY_SCORE
    else:
        live_terms = CRICKET_LIVE_TERMS
        home_score = score_from_entry(_dig(raw, "score", 0))
        away_score = score_from_entry(_dig(raw, "score", 1))
    status = cricket_status(status_text, live_terms=live_terms)
    is_live = _matches_any(status_text, live_terms)

    kickoff_raw = raw.get("dateTimeGMT")
    if kickoff_raw:
        kickoff = try_parse_utc(kickoff_raw)
        display = format_display_time(kickoff, context.display_tz)
    else:
        kickoff = context.reference_time
        display = TBD

    return Match(
        id=_first_text((raw.get("id"),)) or _cricket_fallback_id(home_team, away_team, str(kickoff_raw or "")),
        sport=Sport.CRICKET,
        league=league,
        league_icon=LEAGUE_ICONS["cricket"],
        home_team=home_team,
        away_team=away_team,
        home_score=home_score,
        away_score=away_score,
        status=status,
        is_live=is_live,
        overs=home_score.overs or away_score.overs or "",
        match_date_time=kickoff,
        time=display,
        venue=_first_text((raw.get("venue"),)),
    )
