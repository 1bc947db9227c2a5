from typing import Any, Protocol

from livescores.config import settings
from livescores.providers.http_client import CircuitBreaker, ResilientClient


class JsonClient(Protocol):
    """Network client contract: fetch a URL, return parsed JSON or raise ProviderError."""

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        ...

    async def aclose(self) -> None:
        ...


def build_client(name: str) -> ResilientClient:
    return ResilientClient(
        name,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        max_retries=settings.HTTP_MAX_RETRIES,
        base_delay=settings.HTTP_BASE_DELAY_SECONDS,
        circuit=CircuitBreaker(
            failure_threshold=settings.HTTP_CIRCUIT_FAILURE_THRESHOLD,
            recovery_timeout=settings.HTTP_CIRCUIT_RECOVERY_SECONDS,
        ),
    )
