"""HTTP client wrapper for the Gemini Pool admin API.

Handles connection pooling, bearer authentication, error mapping, and
request/response serialization.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from types import TracebackType
from typing import Any

import httpx
import structlog

from gemini_pool_console.errors import NetworkError, raise_for_error_response

logger = structlog.get_logger()

TokenProvider = Callable[[], "str | None"]


class HTTPClient:
    """Async HTTP client for the admin API.

    Wraps httpx.AsyncClient with:
    - Connection pooling
    - Bearer header taken from a token provider on every request
    - Automatic error response mapping to ConsoleError
    - Transport failures mapped to NetworkError
    - Request/response logging
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider | None = None,
        timeout: float = 30.0,
        max_retries: int = 0,
    ) -> None:
        """Initialize HTTP client.

        Args:
            base_url: API base URL including prefix (e.g. "http://localhost:8080/admin/api")
            token_provider: Callable returning the current bearer token, or None
            timeout: Default request timeout in seconds
            max_retries: Maximum retry attempts for transient errors
        """
        self._base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._timeout = timeout
        self._max_retries = max_retries
        self._client: httpx.AsyncClient | None = None
        self._log = logger.bind(service="http")

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_token_provider(self, token_provider: TokenProvider | None) -> None:
        self._token_provider = token_provider

    @staticmethod
    def _is_retryable_method(method: str) -> bool:
        # POST is never retried: creating a key twice is not idempotent.
        return method.upper() in {"GET", "PUT", "DELETE"}

    @staticmethod
    def _is_retryable_status(status_code: int) -> bool:
        return status_code == 429 or 500 <= status_code <= 599

    @staticmethod
    def _retry_delay_seconds(attempt: int) -> float:
        # attempt is zero-based retry attempt index
        return min(0.2 * (2**attempt), 1.5)

    @staticmethod
    def _parse_json_or_error_payload(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
            if isinstance(payload, dict):
                return payload
            return {"data": payload}
        except Exception:
            if response.status_code >= 400:
                raw_text = response.text or ""
                snippet_limit = 500
                snippet = raw_text[:snippet_limit]
                # No message: callers fall back to their localized text.
                return {
                    "error": {
                        "details": {
                            "reason": f"HTTP {response.status_code} returned non-JSON error response",
                            "raw_response_snippet": snippet,
                            "raw_response_truncated": len(raw_text) > snippet_limit,
                        },
                    }
                }
            return {}

    async def __aenter__(self) -> HTTPClient:
        """Enter async context, creating HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context, closing HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the underlying httpx client."""
        if self._client is None:
            raise RuntimeError("HTTPClient not initialized. Use 'async with' context.")
        return self._client

    def _auth_headers(self, token: str | None) -> dict[str, str]:
        if token is None and self._token_provider is not None:
            token = self._token_provider()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        auth: bool = True,
        token: str | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Make an HTTP request to the admin API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path relative to the prefix (e.g., "/api-keys")
            json: Request body as dict (will be serialized)
            auth: Attach the bearer header
            token: Explicit token, overriding the token provider
            timeout: Override default timeout for this request

        Returns:
            Parsed JSON response body

        Raises:
            ConsoleError: On API error responses
            NetworkError: When the request could not complete
        """
        headers: dict[str, str] = {}
        if auth:
            headers.update(self._auth_headers(token))
        if json is not None:
            headers["Content-Type"] = "application/json"

        self._log.debug("http.request", method=method, path=path)

        retryable_method = self._is_retryable_method(method)
        max_attempts = self._max_retries + 1 if retryable_method else 1

        for attempt in range(max_attempts):
            try:
                response = await self.client.request(
                    method,
                    path,
                    json=json,
                    headers=headers if headers else None,
                    timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
                )
            except (httpx.TimeoutException, httpx.TransportError) as exc:
                if attempt < max_attempts - 1:
                    await asyncio.sleep(self._retry_delay_seconds(attempt))
                    continue
                self._log.warning(
                    "http.transport_error",
                    method=method,
                    path=path,
                    error=str(exc),
                )
                raise NetworkError(details={"reason": str(exc)}) from exc

            self._log.debug("http.response", status=response.status_code, path=path)

            if response.status_code == 204:
                return {}

            if attempt < max_attempts - 1 and self._is_retryable_status(
                response.status_code
            ):
                await asyncio.sleep(self._retry_delay_seconds(attempt))
                continue

            body = self._parse_json_or_error_payload(response)
            if response.status_code >= 400:
                raise_for_error_response(response.status_code, body)
            return body

        raise RuntimeError("HTTP request attempt loop exhausted unexpectedly")

    async def get(
        self,
        path: str,
        *,
        token: str | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Make a GET request."""
        return await self.request("GET", path, token=token, timeout=timeout)

    async def post(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        auth: bool = True,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Make a POST request."""
        return await self.request("POST", path, json=json, auth=auth, timeout=timeout)

    async def put(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json, timeout=timeout)

    async def delete(
        self,
        path: str,
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Make a DELETE request."""
        return await self.request("DELETE", path, timeout=timeout)
