"""
backend/livescores/services/match_store.py

Purpose:
    TrackedMatchSet: last-known snapshot per tracked match id, kept per sport
    and persisted to the local KV scope under `trackedMatches`. Explicitly
    tracked ("pinned") ids stay tracked even when no favorite is involved.

Dependencies:
    - pydantic (Match validation on load)
    - livescores.services.kv_store
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from livescores.models.match import Match, Sport
from livescores.services.kv_store import KeyValueStore
from livescores.utils import epoch_ms

logger = logging.getLogger("livescores.match_store")

STORAGE_KEY = "trackedMatches"


class TrackedMatchSet:
    def __init__(self) -> None:
        self._matches: dict[Sport, dict[str, Match]] = {sport: {} for sport in Sport}
        self._pinned: set[str] = set()

    def get(self, sport: Sport, match_id: str) -> Match | None:
        return self._matches[Sport(sport)].get(match_id)

    def put(self, match: Match) -> None:
        self._matches[match.sport][match.id] = match

    def remove(self, sport: Sport, match_id: str) -> bool:
        self._pinned.discard(match_id)
        return self._matches[Sport(sport)].pop(match_id, None) is not None

    def pin(self, match: Match) -> None:
        self._pinned.add(match.id)
        self.put(match)

    def is_pinned(self, match_id: str) -> bool:
        return match_id in self._pinned

    def matches(self, sport: Sport) -> list[Match]:
        return list(self._matches[Sport(sport)].values())

    def __len__(self) -> int:
        return sum(len(by_id) for by_id in self._matches.values())

    # -- persistence -------------------------------------------------------

    def to_storage(self) -> dict[str, Any]:
        return {
            "football": [m.model_dump(mode="json") for m in self.matches(Sport.FOOTBALL)],
            "cricket": [m.model_dump(mode="json") for m in self.matches(Sport.CRICKET)],
            "pinned": sorted(self._pinned),
            "lastUpdated": epoch_ms(),
        }

    def load_storage(self, payload: dict[str, Any] | None) -> int:
        """Replace contents from a stored payload; returns snapshots restored."""
        for by_id in self._matches.values():
            by_id.clear()
        self._pinned.clear()
        if not isinstance(payload, dict):
            return 0

        restored = 0
        for sport in Sport:
            for raw in payload.get(sport.value) or []:
                try:
                    match = Match.model_validate(raw)
                except ValidationError as exc:
                    logger.warning("Dropping unreadable %s snapshot: %s", sport.value, exc)
                    continue
                self._matches[sport][match.id] = match
                restored += 1
        self._pinned.update(str(mid) for mid in payload.get("pinned") or [])
        return restored

    async def load(self, store: KeyValueStore) -> int:
        result = await store.get([STORAGE_KEY])
        restored = self.load_storage(result.get(STORAGE_KEY))
        logger.info("Restored %d tracked match snapshots", restored)
        return restored

    async def persist(self, store: KeyValueStore) -> None:
        await store.set({STORAGE_KEY: self.to_storage()})
