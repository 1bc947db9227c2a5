"""
backend/livescores/providers/cricapi.py

Purpose:
    CricAPI (cricketdata.org) adapter for current and scheduled matches.
    Requires a per-user API key; callers skip cricket when none is set.

Dependencies:
    - livescores.providers.http_client
"""

import logging
from typing import Any

from livescores.config import settings
from livescores.providers.base import JsonClient, build_client
from livescores.providers.http_client import ProviderError

logger = logging.getLogger("livescores.cricapi")

PROVIDER_NAME = "cricapi"


class CricAPIProvider:
    def __init__(self, client: JsonClient | None = None, base_url: str | None = None):
        self._client = client or build_client(PROVIDER_NAME)
        self._base_url = (base_url or settings.CRICAPI_BASE_URL).rstrip("/")

    async def _list(self, endpoint: str, api_key: str) -> list[dict[str, Any]]:
        if not api_key:
            raise ProviderError(PROVIDER_NAME, "missing API key")
        payload = await self._client.get_json(
            f"{self._base_url}/{endpoint}",
            params={"apikey": api_key, "offset": 0},
        )
        if not isinstance(payload, dict) or payload.get("status") != "success":
            reason = payload.get("reason") if isinstance(payload, dict) else None
            raise ProviderError(PROVIDER_NAME, f"{endpoint} not successful: {reason or 'unknown'}")
        data = payload.get("data")
        if not isinstance(data, list):
            return []
        return [m for m in data if isinstance(m, dict)]

    async def get_current_matches(self, api_key: str) -> list[dict[str, Any]]:
        return await self._list("currentMatches", api_key)

    async def get_matches(self, api_key: str) -> list[dict[str, Any]]:
        return await self._list("matches", api_key)

    async def aclose(self) -> None:
        await self._client.aclose()
