"""
backend/livescores/routers/preferences.py

Purpose:
    Options API: read/update/reset preferences and manage favorite teams.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from livescores.models.messages import FavoriteTeamCreate
from livescores.routers.deps import get_score_service
from livescores.services.favorites import DuplicateFavoriteError, add_favorite, remove_favorite
from livescores.services.score_service import ScoreService

router = APIRouter(prefix="/api", tags=["preferences"])


@router.get("/preferences")
async def get_preferences(service: ScoreService = Depends(get_score_service)):
    return service.preferences.to_storage()


@router.patch("/preferences")
async def patch_preferences(
    updates: dict[str, Any] = Body(...),
    service: ScoreService = Depends(get_score_service),
):
    prefs = await service.update_preferences(updates)
    return prefs.to_storage()


@router.post("/preferences/reset")
async def reset_preferences(service: ScoreService = Depends(get_score_service)):
    prefs = await service.reset_preferences()
    return prefs.to_storage()


@router.post("/favorites", status_code=status.HTTP_201_CREATED)
async def create_favorite(
    body: FavoriteTeamCreate,
    service: ScoreService = Depends(get_score_service),
):
    prefs = service.preferences.model_copy(deep=True)
    try:
        team = add_favorite(prefs, body.name)
    except DuplicateFavoriteError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Team already in favorites.")
    await service.update_preferences({"favoriteTeams": prefs.to_storage()["favoriteTeams"]})
    return team.model_dump(mode="json")


@router.delete("/favorites/{team_id}")
async def delete_favorite(
    team_id: str,
    service: ScoreService = Depends(get_score_service),
):
    prefs = service.preferences.model_copy(deep=True)
    if not remove_favorite(prefs, team_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorite not found.")
    await service.update_preferences({"favoriteTeams": prefs.to_storage()["favoriteTeams"]})
    return {"removed": team_id}
