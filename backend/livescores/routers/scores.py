"""
backend/livescores/routers/scores.py

Purpose:
    Read API for the match list and the league catalog.

Dependencies:
    - livescores.services.score_service
    - livescores.config_leagues
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from livescores.config_leagues import CRICKET_COMPETITIONS, OPENLIGADB_LEAGUES, THESPORTSDB_LEAGUES
from livescores.routers.deps import get_score_service
from livescores.services.score_service import ScoreService

router = APIRouter(prefix="/api", tags=["scores"])


@router.get("/scores/{sport}")
async def get_scores(
    sport: Literal["football", "cricket"],
    match_filter: Literal["live", "today", "upcoming", "finished"] | None = Query(None, alias="filter"),
    service: ScoreService = Depends(get_score_service),
):
    """Normalized, de-duplicated, filtered and ordered matches for one sport."""
    return await service.load_scores(sport, match_filter)


@router.get("/leagues")
async def list_leagues():
    football: dict[str, dict] = {}
    for league in OPENLIGADB_LEAGUES + THESPORTSDB_LEAGUES:
        entry = football.setdefault(
            league["name"],
            {"name": league["name"], "country": league["country"], "providers": []},
        )
        entry["providers"].append("openligadb" if league in OPENLIGADB_LEAGUES else "thesportsdb")
    return {
        "football": list(football.values()),
        "cricket": [{"name": name} for name in CRICKET_COMPETITIONS],
    }
