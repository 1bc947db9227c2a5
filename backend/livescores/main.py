"""
backend/livescores/main.py

Purpose:
    FastAPI application bootstrap: logging, storage selection, construction of
    the single ScoreService with its collaborators, timer lifecycle and
    router wiring.

Dependencies:
    - livescores.database
    - livescores.services.score_service
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from livescores.config import settings
from livescores.database import close_db, connect_db
from livescores.middleware.logging import StructuredLoggingMiddleware, setup_logging
from livescores.providers.cricapi import CricAPIProvider
from livescores.providers.openligadb import OpenLigaDBProvider
from livescores.providers.thesportsdb import TheSportsDBProvider
from livescores.services.alerts import LoggingAlertProducer
from livescores.services.kv_store import (
    LOCAL_SCOPE,
    SYNC_SCOPE,
    InMemoryKeyValueStore,
    MongoKeyValueStore,
)
from livescores.services.score_service import ScoresUnavailableError, ScoreService
from livescores.services.timer import TimerService

logger = logging.getLogger("livescores")


async def _build_stores():
    if settings.STORAGE_BACKEND == "mongo":
        database = await connect_db()
        return MongoKeyValueStore(database, SYNC_SCOPE), MongoKeyValueStore(database, LOCAL_SCOPE)
    return InMemoryKeyValueStore(), InMemoryKeyValueStore()


def build_score_service(sync_store, local_store) -> ScoreService:
    return ScoreService(
        openligadb=OpenLigaDBProvider(),
        thesportsdb=TheSportsDBProvider(),
        cricapi=CricAPIProvider(),
        sync_store=sync_store,
        local_store=local_store,
        alerts=LoggingAlertProducer(),
        timer=TimerService(min_interval_seconds=settings.POLL_MIN_INTERVAL_SECONDS),
    )


async def _initial_poll(service: ScoreService) -> None:
    try:
        await service.poll_cycle()
    except Exception:
        logger.exception("Initial poll cycle failed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    sync_store, local_store = await _build_stores()
    service = build_score_service(sync_store, local_store)
    await service.start(schedule=settings.POLL_ENABLED)
    app.state.score_service = service
    initial = None
    if settings.POLL_ENABLED and settings.POLL_ON_STARTUP:
        initial = asyncio.create_task(_initial_poll(service))
    logger.info("Live scores service initialized")

    yield

    if initial is not None and not initial.done():
        initial.cancel()
    await service.stop()
    if settings.STORAGE_BACKEND == "mongo":
        await close_db()


app = FastAPI(
    title="Live Sports Scores",
    description="Football and cricket live scores with goal and wicket alerts",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS.split(","),
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Structured logging
app.add_middleware(StructuredLoggingMiddleware)

# Routers
from livescores.routers.messages import router as messages_router
from livescores.routers.preferences import router as preferences_router
from livescores.routers.scores import router as scores_router

app.include_router(messages_router)
app.include_router(scores_router)
app.include_router(preferences_router)


@app.exception_handler(ScoresUnavailableError)
async def scores_unavailable_handler(request: Request, exc: ScoresUnavailableError):
    logger.error("Scores unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Failed to load scores.", "retry": True})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Return clean validation errors without leaking internal field paths."""
    errors = []
    for err in exc.errors():
        loc = err.get("loc", ())
        field = ".".join(str(l) for l in loc[1:]) if len(loc) > 1 else str(loc[-1]) if loc else "unknown"
        errors.append({"field": field, "message": err.get("msg", "Invalid value.")})
    return JSONResponse(status_code=422, content={"detail": "Validation error.", "errors": errors})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    logger.warning("ValueError on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": "Invalid input."})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all: log the real error, return a safe generic message."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "An internal error occurred."})


@app.get("/health")
async def health(request: Request):
    service: ScoreService | None = getattr(request.app.state, "score_service", None)
    if service is None:
        return {"status": "starting"}
    return {
        "status": "healthy",
        "tracked_matches": len(service.tracked),
        "last_poll_at": service.last_poll_at.isoformat() if service.last_poll_at else None,
        "cricket_enabled": bool(service.cricket_api_key()),
    }
