"""
backend/livescores/providers/openligadb.py

Purpose:
    OpenLigaDB adapter (free, no API key): current matchday fixtures per
    league shortcut, returned as raw records for the normalizer.

Dependencies:
    - livescores.providers.http_client
"""

import logging
from typing import Any

from livescores.config import settings
from livescores.providers.base import JsonClient, build_client
from livescores.providers.http_client import ProviderError

logger = logging.getLogger("livescores.openligadb")

PROVIDER_NAME = "openligadb"


class OpenLigaDBProvider:
    def __init__(self, client: JsonClient | None = None, base_url: str | None = None):
        self._client = client or build_client(PROVIDER_NAME)
        self._base_url = (base_url or settings.OPENLIGADB_BASE_URL).rstrip("/")

    async def get_league_matches(self, league_shortcut: str) -> list[dict[str, Any]]:
        """Fetch the current matchday for a league shortcut (bl1, ucl, ...)."""
        payload = await self._client.get_json(f"{self._base_url}/getmatchdata/{league_shortcut}")
        if not isinstance(payload, list):
            raise ProviderError(PROVIDER_NAME, f"unexpected payload for {league_shortcut}")
        matches = [m for m in payload if isinstance(m, dict)]
        logger.debug("OpenLigaDB: %d matches for %s", len(matches), league_shortcut)
        return matches

    async def aclose(self) -> None:
        await self._client.aclose()
