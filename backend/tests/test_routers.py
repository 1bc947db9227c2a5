"""
backend/tests/test_routers.py

Purpose:
    HTTP surface tests: the app is exercised with a ScoreService wired to
    fake providers and in-memory stores, without running the lifespan.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from livescores.main import app
from livescores.providers.http_client import ProviderError
from livescores.services.alerts import LoggingAlertProducer
from livescores.services.kv_store import InMemoryKeyValueStore
from livescores.services.score_service import ScoreService

REF = datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)


class _Provider:
    def __init__(self, fail: bool = False):
        self.fail = fail

    async def _rows(self, *args):
        if self.fail:
            raise ProviderError("fake", "down")
        return []

    get_league_matches = _rows
    get_next_events = _rows
    get_past_events = _rows
    get_current_matches = _rows
    get_matches = _rows

    async def aclose(self):
        return None


class _Timer:
    def __init__(self):
        self.scheduled = []

    def schedule(self, name, callback, interval_seconds):
        self.scheduled.append(interval_seconds)
        return interval_seconds

    def start(self):
        return None

    def shutdown(self):
        return None


def _service(fail: bool = False) -> ScoreService:
    return ScoreService(
        openligadb=_Provider(fail),
        thesportsdb=_Provider(fail),
        cricapi=_Provider(fail),
        sync_store=InMemoryKeyValueStore(),
        local_store=InMemoryKeyValueStore(),
        alerts=LoggingAlertProducer(),
        timer=_Timer(),
        display_tz=ZoneInfo("UTC"),
        clock=lambda: REF,
    )


@pytest.fixture
def client():
    app.state.score_service = _service()
    yield TestClient(app)
    del app.state.score_service


def test_health_reports_service_state(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["tracked_matches"] == 0
    assert body["last_poll_at"] is None
    assert response.headers["X-Request-ID"]


def test_scores_endpoint_uses_filter_alias(client):
    response = client.get("/api/scores/football", params={"filter": "today"})
    assert response.status_code == 200
    body = response.json()
    assert body["filter"] == "today"
    assert body["matches"] == []

    assert client.get("/api/scores/tennis").status_code == 422
    assert client.get("/api/scores/football", params={"filter": "weekly"}).status_code == 422


def test_scores_endpoint_maps_total_failure_to_503(client):
    app.state.score_service = _service(fail=True)
    response = client.get("/api/scores/football")
    assert response.status_code == 503
    assert response.json()["retry"] is True


def test_leagues_catalog(client):
    body = client.get("/api/leagues").json()
    names = [league["name"] for league in body["football"]]
    assert "Bundesliga" in names
    assert len(names) == len(set(names))
    assert body["cricket"]


def test_message_envelope(client):
    ok = client.post("/api/messages", json={"action": "getScores", "payload": {"sport": "cricket"}})
    assert ok.status_code == 200
    assert ok.json()["success"] is True
    assert ok.json()["data"]["placeholder"] is True

    unknown = client.post("/api/messages", json={"action": "explode"})
    assert unknown.json() == {"success": False, "error": "Unknown action"}


def test_preferences_roundtrip(client):
    prefs = client.get("/api/preferences").json()
    assert prefs["updateInterval"] == 60
    assert prefs["matchFilter"] == "live"

    patched = client.patch("/api/preferences", json={"updateInterval": 300, "matchFilter": "upcoming"})
    assert patched.status_code == 200
    assert patched.json()["updateInterval"] == 300
    assert app.state.score_service._timer.scheduled == [300]

    assert client.patch("/api/preferences", json={"matchFilter": "weekly"}).status_code == 400

    reset = client.post("/api/preferences/reset").json()
    assert reset["updateInterval"] == 60
    assert reset["matchFilter"] == "live"


def test_favorites_add_duplicate_and_remove(client):
    created = client.post("/api/favorites", json={"name": "Mumbai Indians"})
    assert created.status_code == 201
    team = created.json()
    assert team["sport"] == "cricket"

    assert client.post("/api/favorites", json={"name": "mumbai indians"}).status_code == 409
    assert client.post("/api/favorites", json={"name": ""}).status_code == 422

    prefs = client.get("/api/preferences").json()
    assert [t["name"] for t in prefs["favoriteTeams"]] == ["Mumbai Indians"]

    assert client.delete(f"/api/favorites/{team['id']}").status_code == 200
    assert client.delete(f"/api/favorites/{team['id']}").status_code == 404
