"""
backend/livescores/services/kv_store.py

Purpose:
    Asynchronous key-value store used for settings (synced scope) and tracked
    match snapshots (local scope). Reads fetch all requested keys before the
    caller continues; there is no transaction across keys.

Dependencies:
    - copy
    - pymongo (UpdateOne for bulk writes)
"""

from __future__ import annotations

import copy
from typing import Any, Iterable, Protocol

from pymongo import UpdateOne

SYNC_SCOPE = "sync"
LOCAL_SCOPE = "local"


class KeyValueStore(Protocol):
    async def get(self, keys: Iterable[str]) -> dict[str, Any]:
        """Return a mapping for the keys that exist; absent keys are omitted."""
        ...

    async def set(self, mapping: dict[str, Any]) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store; values are deep-copied in and out."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial or {})

    async def get(self, keys: Iterable[str]) -> dict[str, Any]:
        return {k: copy.deepcopy(self._data[k]) for k in keys if k in self._data}

    async def set(self, mapping: dict[str, Any]) -> None:
        for key, value in mapping.items():
            self._data[key] = copy.deepcopy(value)


class MongoKeyValueStore:
    """One document per (scope, key) in the `kv_store` collection."""

    def __init__(self, database, scope: str) -> None:
        self._collection = database.kv_store
        self._scope = scope

    def _doc_id(self, key: str) -> str:
        return f"{self._scope}:{key}"

    async def get(self, keys: Iterable[str]) -> dict[str, Any]:
        wanted = list(keys)
        if not wanted:
            return {}
        cursor = self._collection.find({"_id": {"$in": [self._doc_id(k) for k in wanted]}})
        docs = await cursor.to_list(length=len(wanted))
        return {doc["key"]: doc.get("value") for doc in docs}

    async def set(self, mapping: dict[str, Any]) -> None:
        if not mapping:
            return
        ops = [
            UpdateOne(
                {"_id": self._doc_id(key)},
                {"$set": {"scope": self._scope, "key": key, "value": value}},
                upsert=True,
            )
            for key, value in mapping.items()
        ]
        await self._collection.bulk_write(ops, ordered=False)
