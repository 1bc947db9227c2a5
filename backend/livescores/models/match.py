"""
backend/livescores/models/match.py

Purpose:
    Canonical, provider-agnostic Match model shared by the load pipeline and
    the background poll cycle. Football scores are plain integers (None while
    a fixture has not started); cricket scores are CricketScore structures.

Dependencies:
    - pydantic
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

NOT_STARTED = "-"
TBD = "TBD"


class Sport(str, Enum):
    FOOTBALL = "football"
    CRICKET = "cricket"


class MatchStatus(str, Enum):
    UPCOMING = "upcoming"
    LIVE = "live"
    FINISHED = "finished"


class CricketScore(BaseModel):
    runs: int = Field(default=0, ge=0)
    wickets: int = Field(default=0, ge=0)
    overs: str = ""

    model_config = ConfigDict(frozen=True)

    def display(self) -> str:
        return f"{self.runs}/{self.wickets}"


class Match(BaseModel):
    id: str
    sport: Sport
    league: str
    league_icon: str = ""
    home_team: str
    away_team: str
    home_score: int | CricketScore | None = None
    away_score: int | CricketScore | None = None
    status: MatchStatus = MatchStatus.UPCOMING
    is_live: bool = False
    minute: str = ""
    overs: str = ""
    match_date_time: datetime | None = None
    time: str = TBD
    venue: str = ""
    last_updated: int | None = None

    model_config = ConfigDict(use_enum_values=False)

    @property
    def home_wickets(self) -> int:
        return self.home_score.wickets if isinstance(self.home_score, CricketScore) else 0

    @property
    def away_wickets(self) -> int:
        return self.away_score.wickets if isinstance(self.away_score, CricketScore) else 0

    def score_text(self, side: str) -> str:
        score = self.home_score if side == "home" else self.away_score
        if score is None:
            return NOT_STARTED
        if isinstance(score, CricketScore):
            return score.display()
        return str(score)


class FavoriteTeam(BaseModel):
    id: str
    name: str
    sport: Sport = Sport.FOOTBALL
    added_at: int
