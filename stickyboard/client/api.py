"""
HTTP Client for the Sticky Store.

Provides an async HTTP client for communicating with the backend API.
Every request carries an X-Frontend-ID header for log routing.
"""

from typing import Any

import httpx

from stickyboard.backend.core.config import get_server_base_url
from stickyboard.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


class APIClient:
    """
    HTTP client for backend API communication.

    Features:
    - Base URL and timeout from application.yaml unless given explicitly
    - X-Frontend-ID header for log routing
    - Structured logging of requests/responses

    Usage:
        client = APIClient()
        response = await client.get("/health")
        response = await client.post("/api/v1/stickies", json={"color": "pink"})
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        frontend: str = "board",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: Backend API base URL. If None, reads from application.yaml.
            timeout: Request timeout in seconds. If None, reads from application.yaml.
            frontend: Value sent as X-Frontend-ID and used as the log source.
            transport: Optional httpx transport (e.g. ASGITransport in tests).
        """
        if base_url is None:
            try:
                base_url, config_timeout = get_server_base_url()
            except Exception as e:
                raise RuntimeError(
                    "Could not determine server URL from config/settings/application.yaml"
                ) from e
            timeout = timeout if timeout is not None else config_timeout

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
        self.frontend = frontend
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": self.frontend},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the backend.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., /health, /api/v1/stickies)
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response

        Raises:
            httpx.HTTPError: On transport failure
        """
        client = await self._get_client()

        log_with_source(logger, self.frontend, "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                self.frontend,
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

        log_with_source(
            logger,
            self.frontend,
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, **kwargs)
