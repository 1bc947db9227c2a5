"""
backend/livescores/config.py

Purpose:
    Central settings loading for the live scores service.

Dependencies:
    - pydantic-settings
    - pathlib
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# Prefer backend/.env, fallback to project-root .env.
_BACKEND_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
_ROOT_ENV_FILE = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    BACKEND_CORS_ORIGINS: str = "*"

    # Provider endpoints
    OPENLIGADB_BASE_URL: str = "https://api.openligadb.de"
    THESPORTSDB_BASE_URL: str = "https://www.thesportsdb.com/api/v1/json"
    THESPORTSDB_API_KEY: str = "3"  # public demo key
    CRICAPI_BASE_URL: str = "https://api.cricapi.com/v1"
    # Used only when the user has not stored a key in preferences
    CRICAPI_API_KEY: str = ""

    # HTTP client (retries default to 0: each call-site skips on failure)
    HTTP_TIMEOUT_SECONDS: float = 10.0
    HTTP_MAX_RETRIES: int = 0
    HTTP_BASE_DELAY_SECONDS: float = 2.0
    HTTP_CIRCUIT_FAILURE_THRESHOLD: int = 5
    HTTP_CIRCUIT_RECOVERY_SECONDS: int = 120

    # Poll cycle
    POLL_ENABLED: bool = True
    POLL_MIN_INTERVAL_SECONDS: int = 60
    POLL_ON_STARTUP: bool = True

    # Display
    DISPLAY_TIMEZONE: str = "UTC"

    # Storage backend for the KV scopes: "memory" or "mongo"
    STORAGE_BACKEND: str = "memory"
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "livescores"

    model_config = {
        "env_file": (str(_BACKEND_ENV_FILE), str(_ROOT_ENV_FILE)),
        "extra": "ignore",
    }


settings = Settings()
