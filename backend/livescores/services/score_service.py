"""
backend/livescores/services/score_service.py

Purpose:
    The one service object behind the HTTP surface and the background timer.
    Owns preferences, the tracked match set and the poll cycle, and runs the
    load pipeline: fetch per provider -> normalize -> dedupe -> filter -> sort.

Dependencies:
    - livescores.providers (openligadb, thesportsdb, cricapi)
    - livescores.services (normalizer, dedup, filter, change detector, alerts)
    - livescores.services.kv_store
    - livescores.services.timer
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError

from livescores.config import settings
from livescores.config_leagues import OPENLIGADB_LEAGUES, THESPORTSDB_LEAGUES
from livescores.models.match import Match, Sport
from livescores.models.messages import ServiceRequest, ServiceResponse
from livescores.models.preferences import PREFERENCE_KEYS, Preferences
from livescores.providers.cricapi import CricAPIProvider
from livescores.providers.http_client import ProviderError
from livescores.providers.openligadb import OpenLigaDBProvider
from livescores.providers.thesportsdb import TheSportsDBProvider
from livescores.services.alerts import AlertProducer, render_alert
from livescores.services.change_detector import detect_changes, detect_transitions
from livescores.services.event_models import DomainEvent
from livescores.services.favorites import involves_favorite
from livescores.services.kv_store import KeyValueStore
from livescores.services.match_dedup import dedupe_matches
from livescores.services.match_filter import FILTER_CRITERIA, filter_matches, sort_matches
from livescores.services.match_normalizer import (
    ProviderContext,
    normalize_cricapi,
    normalize_openligadb,
    normalize_thesportsdb,
)
from livescores.services.match_store import TrackedMatchSet
from livescores.services.placeholder_data import placeholder_cricket_matches
from livescores.services.timer import SCORE_UPDATE_JOB, TimerService
from livescores.utils import epoch_ms, utcnow

logger = logging.getLogger("livescores.score_service")


class ScoresUnavailableError(RuntimeError):
    """Every source for the requested sport failed."""


@dataclass
class _Batch:
    matches: list[Match] = field(default_factory=list)
    ok: int = 0
    failed: int = 0

    def absorb(self, matches: list[Match] | None) -> None:
        if matches is None:
            self.failed += 1
        else:
            self.ok += 1
            self.matches.extend(matches)


def _resolve_tz(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown display timezone %r, falling back to UTC", name)
        return ZoneInfo("UTC")


class ScoreService:
    def __init__(
        self,
        *,
        openligadb: OpenLigaDBProvider,
        thesportsdb: TheSportsDBProvider,
        cricapi: CricAPIProvider,
        sync_store: KeyValueStore,
        local_store: KeyValueStore,
        alerts: AlertProducer,
        timer: TimerService,
        display_tz: tzinfo | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._openligadb = openligadb
        self._thesportsdb = thesportsdb
        self._cricapi = cricapi
        self._sync_store = sync_store
        self._local_store = local_store
        self._alerts = alerts
        self._timer = timer
        self._display_tz = display_tz or _resolve_tz(settings.DISPLAY_TIMEZONE)
        self._clock = clock

        self.preferences = Preferences()
        self.tracked = TrackedMatchSet()
        self._poll_in_progress = False
        self.last_poll_at: datetime | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self, *, schedule: bool = True) -> None:
        await self.install_defaults()
        await self.load_preferences()
        await self.tracked.load(self._local_store)
        if schedule:
            self._timer.schedule(SCORE_UPDATE_JOB, self.poll_cycle, self.preferences.update_interval)
            self._timer.start()
        logger.info("Score service started (%d favorites)", len(self.preferences.favorite_teams))

    async def stop(self) -> None:
        self._timer.shutdown()
        for provider in (self._openligadb, self._thesportsdb, self._cricapi):
            await provider.aclose()

    async def install_defaults(self) -> None:
        """Write default preferences for any key not stored yet."""
        stored = await self._sync_store.get(PREFERENCE_KEYS)
        defaults = Preferences().to_storage()
        missing = {key: value for key, value in defaults.items() if key not in stored}
        if missing:
            await self._sync_store.set(missing)
            logger.info("Installed default preferences: %s", sorted(missing))

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    async def load_preferences(self) -> Preferences:
        stored = await self._sync_store.get(PREFERENCE_KEYS)
        try:
            self.preferences = Preferences.model_validate(stored)
        except ValidationError as exc:
            logger.warning("Stored preferences unreadable, using defaults: %s", exc)
            self.preferences = Preferences()
        return self.preferences

    async def update_preferences(self, updates: dict[str, Any]) -> Preferences:
        """Apply a partial update (storage or field names) and persist it.

        Raises ValidationError for values the preferences model rejects.
        """
        merged = self.preferences.to_storage()
        field_to_alias = {name: f.alias for name, f in Preferences.model_fields.items()}
        for key, value in (updates or {}).items():
            alias = field_to_alias.get(key, key)
            if alias in merged:
                merged[alias] = value
        candidate = Preferences.model_validate(merged)

        interval_changed = candidate.update_interval != self.preferences.update_interval
        self.preferences = candidate
        await self._sync_store.set(candidate.to_storage())

        if interval_changed:
            self._timer.schedule(SCORE_UPDATE_JOB, self.poll_cycle, candidate.update_interval)
        return candidate

    async def reset_preferences(self) -> Preferences:
        self.preferences = Preferences()
        await self._sync_store.set(self.preferences.to_storage())
        self._timer.schedule(SCORE_UPDATE_JOB, self.poll_cycle, self.preferences.update_interval)
        return self.preferences

    def cricket_api_key(self) -> str:
        return (self.preferences.cricket_api_key or settings.CRICAPI_API_KEY or "").strip()

    # ------------------------------------------------------------------
    # Fetch helpers
    # ------------------------------------------------------------------

    async def _fetch(self, label: str, call: Awaitable[list[dict]]) -> list[dict] | None:
        """Run one endpoint fetch; a failure yields None instead of raising."""
        try:
            return await call
        except ProviderError as exc:
            logger.warning("Fetch failed for %s: %s", label, exc)
            return None

    def _context(self, reference_time: datetime, league_name: str = "", endpoint: str = "current") -> ProviderContext:
        return ProviderContext(
            league_name=league_name,
            reference_time=reference_time,
            display_tz=self._display_tz,
            endpoint=endpoint,
        )

    async def _openligadb_batch(
        self,
        reference_time: datetime,
        keep: Callable[[dict], bool] | None = None,
    ) -> _Batch:
        results = await asyncio.gather(*(
            self._fetch(f"openligadb:{league['id']}", self._openligadb.get_league_matches(league["id"]))
            for league in OPENLIGADB_LEAGUES
        ))
        batch = _Batch()
        for league, rows in zip(OPENLIGADB_LEAGUES, results):
            if rows is None:
                batch.absorb(None)
                continue
            ctx = self._context(reference_time, league["name"])
            batch.absorb([normalize_openligadb(row, ctx) for row in rows if keep is None or keep(row)])
        return batch

    async def _thesportsdb_batch(self, reference_time: datetime) -> _Batch:
        calls = []
        for league in THESPORTSDB_LEAGUES:
            calls.append((league, self._fetch(f"thesportsdb:next:{league['id']}", self._thesportsdb.get_next_events(league["id"]))))
            calls.append((league, self._fetch(f"thesportsdb:past:{league['id']}", self._thesportsdb.get_past_events(league["id"]))))
        results = await asyncio.gather(*(call for _, call in calls))
        batch = _Batch()
        for (league, _), rows in zip(calls, results):
            if rows is None:
                batch.absorb(None)
                continue
            ctx = self._context(reference_time, league["name"])
            batch.absorb([normalize_thesportsdb(row, ctx) for row in rows])
        return batch

    async def _cricket_batch(self, reference_time: datetime, api_key: str, *, include_schedule: bool) -> _Batch:
        current_call = self._fetch("cricapi:currentMatches", self._cricapi.get_current_matches(api_key))
        if include_schedule:
            schedule_call = self._fetch("cricapi:matches", self._cricapi.get_matches(api_key))
            current_rows, schedule_rows = await asyncio.gather(current_call, schedule_call)
        else:
            current_rows, schedule_rows = await current_call, None

        batch = _Batch()
        if current_rows is None:
            batch.absorb(None)
        else:
            ctx = self._context(reference_time, endpoint="current")
            batch.absorb([normalize_cricapi(row, ctx) for row in current_rows])
        if include_schedule:
            if schedule_rows is None:
                batch.absorb(None)
            else:
                ctx = self._context(reference_time, endpoint="schedule")
                batch.absorb([normalize_cricapi(row, ctx) for row in schedule_rows])
        return batch

    # ------------------------------------------------------------------
    # Load pipeline
    # ------------------------------------------------------------------

    async def load_scores(
        self,
        sport: str,
        criterion: str | None = None,
        reference_time: datetime | None = None,
    ) -> dict[str, Any]:
        sport_enum = Sport(sport)
        criterion = criterion or self.preferences.match_filter
        if criterion not in FILTER_CRITERIA:
            raise ValueError(f"Unknown match filter: {criterion}")
        now = reference_time or self._clock()
        placeholder = False

        if sport_enum == Sport.FOOTBALL:
            openliga, sportsdb = await asyncio.gather(
                self._openligadb_batch(now),
                self._thesportsdb_batch(now),
            )
            batch = _Batch(
                matches=openliga.matches + sportsdb.matches,
                ok=openliga.ok + sportsdb.ok,
                failed=openliga.failed + sportsdb.failed,
            )
        else:
            api_key = self.cricket_api_key()
            if api_key:
                batch = await self._cricket_batch(now, api_key, include_schedule=True)
            else:
                logger.warning("No cricket API key configured, serving placeholder data")
                batch = _Batch(matches=placeholder_cricket_matches(now, self._display_tz), ok=1)
                placeholder = True

        if batch.ok == 0 and batch.failed > 0:
            raise ScoresUnavailableError(f"All {sport_enum.value} sources failed")

        # "today" is the viewer's local day, not the UTC one.
        local_now = now.astimezone(self._display_tz)
        matches = sort_matches(filter_matches(dedupe_matches(batch.matches), criterion, local_now))
        logger.info(
            "Loaded %d %s matches (filter=%s, sources ok=%d failed=%d)",
            len(matches), sport_enum.value, criterion, batch.ok, batch.failed,
        )
        return {
            "sport": sport_enum.value,
            "filter": criterion,
            "matches": [m.model_dump(mode="json") for m in matches],
            "placeholder": placeholder,
            "sources": {"ok": batch.ok, "failed": batch.failed},
            "last_updated": now.isoformat(),
        }

    # ------------------------------------------------------------------
    # Poll cycle (background change detection)
    # ------------------------------------------------------------------

    async def poll_cycle(self) -> dict[str, Any]:
        if not self.preferences.notification_enabled:
            return {"skipped": "notifications_disabled"}
        if self._poll_in_progress:
            logger.warning("Previous poll cycle still running, skipping this tick")
            return {"skipped": "in_progress"}

        self._poll_in_progress = True
        try:
            return await self._run_poll()
        finally:
            self._poll_in_progress = False

    async def _run_poll(self) -> dict[str, Any]:
        now = self._clock()
        tracked_football = {m.id for m in self.tracked.matches(Sport.FOOTBALL)}

        def _keep(row: dict) -> bool:
            if row.get("matchIsRunning"):
                return True
            return f"ol_{row.get('matchID')}" in tracked_football

        api_key = self.cricket_api_key()
        if api_key:
            football, cricket = await asyncio.gather(
                self._openligadb_batch(now, keep=_keep),
                self._cricket_batch(now, api_key, include_schedule=False),
            )
        else:
            logger.warning("No cricket API key found, skipping cricket fetch")
            football, cricket = await self._openligadb_batch(now, keep=_keep), _Batch()

        events: list[DomainEvent] = []
        stamp = epoch_ms(now)
        for match in football.matches + cricket.matches:
            events.extend(self.process_match(match, stamp))

        for event in events:
            alert = render_alert(event)
            await self._alerts.fire(alert.alert_id, alert.title, alert.body, alert.priority)

        await self.tracked.persist(self._local_store)
        self.last_poll_at = now
        logger.info(
            "Poll cycle: %d football, %d cricket, %d events, %d tracked",
            len(football.matches), len(cricket.matches), len(events), len(self.tracked),
        )
        return {
            "football": len(football.matches),
            "cricket": len(cricket.matches),
            "events": len(events),
            "tracked": len(self.tracked),
        }

    def process_match(self, match: Match, stamp: int | None = None) -> list[DomainEvent]:
        """Diff one fresh match against its snapshot and update the tracked set."""
        previous = self.tracked.get(match.sport, match.id)
        retained = involves_favorite(match, self.preferences.favorite_names()) or self.tracked.is_pinned(match.id)

        events = detect_changes(previous, match)
        if retained:
            events.extend(detect_transitions(previous, match))
            update: dict[str, Any] = {"last_updated": stamp or epoch_ms()}
            if previous is not None and match.sport == Sport.FOOTBALL and (
                match.home_score is None or match.away_score is None
            ):
                update.update(home_score=previous.home_score, away_score=previous.away_score)
            self.tracked.put(match.model_copy(update=update))
        elif previous is not None:
            self.tracked.remove(match.sport, match.id)
        return events

    # ------------------------------------------------------------------
    # Tracking
    # ------------------------------------------------------------------

    async def track_match(self, match: Match) -> None:
        self.tracked.pin(match.model_copy(update={"last_updated": epoch_ms()}))
        await self.tracked.persist(self._local_store)

    async def untrack_match(self, match_id: str, sport: str) -> bool:
        removed = self.tracked.remove(Sport(sport), match_id)
        await self.tracked.persist(self._local_store)
        return removed

    # ------------------------------------------------------------------
    # UI message contract
    # ------------------------------------------------------------------

    async def handle_message(self, request: ServiceRequest) -> ServiceResponse:
        payload = request.payload or {}
        try:
            if request.action == "getScores":
                sport = payload.get("sport") or self.preferences.preferred_sport
                data = await self.load_scores(sport, payload.get("filter"))
                data["tracked"] = [m.model_dump(mode="json") for m in self.tracked.matches(Sport(sport))]
                return ServiceResponse(success=True, data=data)

            if request.action == "trackMatch":
                await self.track_match(Match.model_validate(payload.get("match") or {}))
                return ServiceResponse(success=True)

            if request.action == "untrackMatch":
                match_id = str(payload.get("matchId") or "")
                if not match_id:
                    return ServiceResponse(success=False, error="matchId is required")
                await self.untrack_match(match_id, payload.get("sport") or "football")
                return ServiceResponse(success=True)

            if request.action == "updatePreferences":
                await self.update_preferences(payload.get("preferences") or {})
                return ServiceResponse(success=True)
        except ScoresUnavailableError as exc:
            logger.error("Loading scores failed: %s", exc)
            return ServiceResponse(success=False, error=str(exc))
        except (ValidationError, ValueError) as exc:
            logger.warning("Rejected %s message: %s", request.action, exc)
            return ServiceResponse(success=False, error=f"Invalid {request.action} payload")
        except Exception:
            logger.exception("Unhandled error while handling %s", request.action)
            return ServiceResponse(success=False, error="Failed to load scores")

        return ServiceResponse(success=False, error="Unknown action")
