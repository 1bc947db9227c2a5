"""
backend/livescores/services/favorites.py

Purpose:
    Favorite-team helpers: loose name matching used to decide which fixtures
    are tracked, keyword-based sport inference for new favorites, and
    add/remove operations on a preferences object.

Notes:
    - Matching is a case-insensitive substring test in either direction so
      "India" matches "India A" and "Team India". Empty names never match.
    - Sport inference is a hint for display only, never authoritative.
"""

from __future__ import annotations

import re
from typing import Iterable

from livescores.models.match import FavoriteTeam, Match, Sport
from livescores.models.preferences import Preferences
from livescores.utils import epoch_ms

CRICKET_KEYWORDS = (
    "india", "australia", "england", "pakistan", "srilanka", "bangladesh",
    "newzealand", "southafrica", "westindies", "mumbai", "chennai", "delhi",
    "bangalore", "kolkata", "hyderabad", "punjab", "rajasthan", "gujarat",
    "lucknow", "ipl", "bbl", "psl",
)

_WS_RE = re.compile(r"\s")


class DuplicateFavoriteError(ValueError):
    pass


def is_favorite(team_name: str, favorites: Iterable[str]) -> bool:
    team = (team_name or "").strip().lower()
    if not team:
        return False
    for favorite in favorites:
        fav = (favorite or "").strip().lower()
        if fav and (fav in team or team in fav):
            return True
    return False


def involves_favorite(match: Match, favorites: Iterable[str]) -> bool:
    names = list(favorites)
    return is_favorite(match.home_team, names) or is_favorite(match.away_team, names)


def detect_sport(team_name: str) -> Sport:
    compact = _WS_RE.sub("", (team_name or "").lower())
    if any(keyword in compact for keyword in CRICKET_KEYWORDS):
        return Sport.CRICKET
    return Sport.FOOTBALL


def add_favorite(prefs: Preferences, name: str) -> FavoriteTeam:
    team_name = (name or "").strip()
    if not team_name:
        raise ValueError("Team name must not be empty")
    if any(t.name.lower() == team_name.lower() for t in prefs.favorite_teams):
        raise DuplicateFavoriteError(f"{team_name} is already a favorite")

    now = epoch_ms()
    team = FavoriteTeam(id=str(now), name=team_name, sport=detect_sport(team_name), added_at=now)
    prefs.favorite_teams.append(team)
    return team


def remove_favorite(prefs: Preferences, team_id: str) -> bool:
    before = len(prefs.favorite_teams)
    prefs.favorite_teams = [t for t in prefs.favorite_teams if t.id != team_id]
    return len(prefs.favorite_teams) != before
