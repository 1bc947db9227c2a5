"""
backend/livescores/models/preferences.py

Purpose:
    User preferences stored in the synced KV scope. Keys keep the storage
    names used by the options page so existing snapshots stay readable.

Dependencies:
    - pydantic
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from livescores.models.match import FavoriteTeam

MatchFilterName = Literal["live", "today", "upcoming", "finished"]

PREFERENCE_KEYS = (
    "favoriteTeams",
    "notificationEnabled",
    "updateInterval",
    "cricketApiKey",
    "preferredSport",
    "matchFilter",
)


class Preferences(BaseModel):
    favorite_teams: list[FavoriteTeam] = Field(default_factory=list, alias="favoriteTeams")
    notification_enabled: bool = Field(default=True, alias="notificationEnabled")
    update_interval: int = Field(default=60, alias="updateInterval")
    cricket_api_key: str = Field(default="", alias="cricketApiKey")
    preferred_sport: Literal["football", "cricket"] = Field(default="football", alias="preferredSport")
    match_filter: MatchFilterName = Field(default="live", alias="matchFilter")

    model_config = {"populate_by_name": True}

    @field_validator("favorite_teams", mode="before")
    @classmethod
    def _coerce_plain_names(cls, value: Any) -> Any:
        # Older snapshots stored bare team names.
        if not isinstance(value, list):
            return []
        out = []
        for idx, item in enumerate(value):
            if isinstance(item, str):
                out.append({"id": f"legacy-{idx}", "name": item, "added_at": 0})
            else:
                out.append(item)
        return out

    def favorite_names(self) -> list[str]:
        return [team.name for team in self.favorite_teams if team.name.strip()]

    def to_storage(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
