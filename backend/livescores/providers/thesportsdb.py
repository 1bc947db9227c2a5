"""
backend/livescores/providers/thesportsdb.py

Purpose:
    TheSportsDB adapter. Pulls both the next and the past event windows per
    league so leagues without fixtures today still show up under the
    upcoming/finished filters.

Dependencies:
    - livescores.providers.http_client
"""

import logging
from typing import Any

from livescores.config import settings
from livescores.providers.base import JsonClient, build_client

logger = logging.getLogger("livescores.thesportsdb")

PROVIDER_NAME = "thesportsdb"


class TheSportsDBProvider:
    def __init__(
        self,
        client: JsonClient | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
    ):
        self._client = client or build_client(PROVIDER_NAME)
        self._base_url = (base_url or settings.THESPORTSDB_BASE_URL).rstrip("/")
        self._api_key = api_key or settings.THESPORTSDB_API_KEY

    async def _events(self, endpoint: str, league_id: str) -> list[dict[str, Any]]:
        payload = await self._client.get_json(
            f"{self._base_url}/{self._api_key}/{endpoint}",
            params={"id": league_id},
        )
        events = payload.get("events") if isinstance(payload, dict) else None
        # TheSportsDB answers {"events": null} for empty windows.
        if not isinstance(events, list):
            return []
        return [e for e in events if isinstance(e, dict)]

    async def get_next_events(self, league_id: str) -> list[dict[str, Any]]:
        return await self._events("eventsnextleague.php", league_id)

    async def get_past_events(self, league_id: str) -> list[dict[str, Any]]:
        return await self._events("eventspastleague.php", league_id)

    async def aclose(self) -> None:
        await self._client.aclose()
