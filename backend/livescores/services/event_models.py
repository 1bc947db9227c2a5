"""
backend/livescores/services/event_models.py

Purpose:
    Domain event contracts emitted by change detection and consumed by the
    notification layer.

Dependencies:
    - pydantic
    - livescores.models.match
    - livescores.utils
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal, Union

from pydantic import BaseModel, Field

from livescores.models.match import Match
from livescores.utils import utcnow

EventType = Literal[
    "match.goal",
    "match.wicket",
    "match.started",
    "match.ended",
]
Side = Literal["home", "away"]


def make_event_id() -> str:
    return str(uuid.uuid4())


class BaseEvent(BaseModel):
    event_id: str = Field(default_factory=make_event_id)
    event_type: EventType
    occurred_at: datetime = Field(default_factory=utcnow)
    match: Match


class GoalEvent(BaseEvent):
    event_type: Literal["match.goal"] = "match.goal"
    scoring_side: Side
    new_score: int

    @property
    def scoring_team(self) -> str:
        return self.match.home_team if self.scoring_side == "home" else self.match.away_team


class WicketEvent(BaseEvent):
    event_type: Literal["match.wicket"] = "match.wicket"
    side: Side
    wicket_count: int

    @property
    def batting_team(self) -> str:
        return self.match.home_team if self.side == "home" else self.match.away_team


class MatchStartedEvent(BaseEvent):
    event_type: Literal["match.started"] = "match.started"


class MatchEndedEvent(BaseEvent):
    event_type: Literal["match.ended"] = "match.ended"
    winner: str = ""


DomainEvent = Union[GoalEvent, WicketEvent, MatchStartedEvent, MatchEndedEvent]
