"""
backend/livescores/routers/messages.py

Purpose:
    UI message endpoint: one POST carrying {action, payload}, always answered
    with the {success, data?, error?} envelope.
"""

from fastapi import APIRouter, Depends

from livescores.models.messages import ServiceRequest, ServiceResponse
from livescores.routers.deps import get_score_service
from livescores.services.score_service import ScoreService

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("", response_model=ServiceResponse, response_model_exclude_none=True)
async def post_message(
    body: ServiceRequest,
    service: ScoreService = Depends(get_score_service),
):
    return await service.handle_message(body)
