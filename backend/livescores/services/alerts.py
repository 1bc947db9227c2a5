"""
backend/livescores/services/alerts.py

Purpose:
    Alert producer contract (fire-and-forget) and rendering of domain events
    into notification id/title/body/priority.

Dependencies:
    - livescores.services.event_models
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from livescores.models.match import Match, Sport
from livescores.services.event_models import (
    DomainEvent,
    GoalEvent,
    MatchEndedEvent,
    MatchStartedEvent,
    WicketEvent,
)
from livescores.utils import epoch_ms

logger = logging.getLogger("livescores.alerts")

PRIORITY_HIGH = 2
PRIORITY_NORMAL = 1


class AlertProducer(Protocol):
    async def fire(self, alert_id: str, title: str, body: str, priority: int) -> None:
        ...


@dataclass(frozen=True)
class Alert:
    alert_id: str
    title: str
    body: str
    priority: int


def _icon(match: Match) -> str:
    return "⚽" if match.sport == Sport.FOOTBALL else "🏏"


def _scoreline(match: Match) -> str:
    return f"{match.home_team} {match.score_text('home')} - {match.score_text('away')} {match.away_team}"


def render_alert(event: DomainEvent) -> Alert:
    match = event.match
    stamp = epoch_ms(event.occurred_at)
    if isinstance(event, GoalEvent):
        return Alert(
            alert_id=f"goal-{match.id}-{stamp}",
            title=f"⚽ GOAL! {match.league}",
            body=f"{event.scoring_team} scores!\n{_scoreline(match)}",
            priority=PRIORITY_HIGH,
        )
    if isinstance(event, WicketEvent):
        return Alert(
            alert_id=f"wicket-{match.id}-{stamp}",
            title=f"🏏 WICKET! {match.league}",
            body=f"{event.batting_team} loses a wicket! ({event.wicket_count} down)\n{_scoreline(match)}",
            priority=PRIORITY_HIGH,
        )
    if isinstance(event, MatchStartedEvent):
        return Alert(
            alert_id=f"start-{match.id}",
            title=f"{_icon(match)} Match Started!",
            body=f"{match.home_team} vs {match.away_team}\n{match.league}",
            priority=PRIORITY_NORMAL,
        )
    if isinstance(event, MatchEndedEvent):
        body = _scoreline(match)
        if event.winner:
            body = f"{body}\nWinner: {event.winner}"
        return Alert(
            alert_id=f"end-{match.id}",
            title=f"{_icon(match)} Match Ended!",
            body=body,
            priority=PRIORITY_NORMAL,
        )
    raise ValueError(f"Unsupported event type: {event.event_type}")


class LoggingAlertProducer:
    """Default producer: writes alerts to the log and keeps the most recent ones."""

    def __init__(self, keep: int = 50) -> None:
        self._keep = max(1, keep)
        self.recent: list[Alert] = []

    async def fire(self, alert_id: str, title: str, body: str, priority: int) -> None:
        logger.info("ALERT %s [p%d] %s | %s", alert_id, priority, title, body.replace("\n", " | "))
        self.recent.append(Alert(alert_id=alert_id, title=title, body=body, priority=priority))
        del self.recent[:-self._keep]
