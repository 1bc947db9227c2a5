from fastapi import HTTPException, Request, status

from livescores.services.score_service import ScoreService


def get_score_service(request: Request) -> ScoreService:
    service = getattr(request.app.state, "score_service", None)
    if service is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Service not ready.")
    return service
