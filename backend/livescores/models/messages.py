"""
backend/livescores/models/messages.py

Purpose:
    UI message contract: discrete intents in, uniform envelopes out.

Dependencies:
    - pydantic
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceRequest(BaseModel):
    action: str
    payload: dict[str, Any] = Field(default_factory=dict)


class ServiceResponse(BaseModel):
    success: bool
    data: Any | None = None
    error: str | None = None


class FavoriteTeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=80)
