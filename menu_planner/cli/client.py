"""
HTTP client the CLI uses to reach a running menu planner API.

Every request carries ``X-Frontend-ID: cli`` so server logs can tell
CLI traffic from the web app.

Usage:
    async with APIClient() as client:
        response = await client.get("/health/ready")
"""

from types import TracebackType
from typing import Any

import httpx

from menu_planner.backend.core.config import get_server_address
from menu_planner.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
FRONTEND_HEADERS = {"X-Frontend-ID": "cli"}


class APIClient:
    def __init__(self, base_url: str | None = None, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        """
        Args:
            base_url: API root; defaults to the server host and port in application.yaml
            timeout: Per-request timeout in seconds
        """
        if base_url is None:
            host, port = get_server_address()
            base_url = f"http://{host}:{port}"
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        # Recreated lazily so a closed APIClient can be reused
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=FRONTEND_HEADERS,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Send a request and return the response whatever its status.

        Raises:
            httpx.HTTPError: If the server cannot be reached or times out
        """
        client = await self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(logger, "cli", "error", "API request failed", method=method, path=path, error=str(e))
            raise
        log_with_source(
            logger, "cli", "debug", "API response", method=method, path=path, status_code=response.status_code
        )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)
