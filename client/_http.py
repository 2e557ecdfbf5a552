"""Internal HTTP handling utilities for the Virtual Shell client.

This module provides the low-level HTTP communication layer used by the
sub-clients. It handles:
- Making HTTP requests (sync and async)
- Mapping error responses to the client exception hierarchy
- Retry logic with exponential backoff

This is an internal module and should not be imported directly by users.
"""

import asyncio
import logging
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)


logger = logging.getLogger(__name__)

# HTTP methods supported by the client
HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

# Status codes that trigger automatic retry (when retry is enabled)
RETRYABLE_STATUS_CODES = {502, 503, 504}

# Default backoff settings for retry logic
DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds

# Exception class for each status code with a dedicated type
_STATUS_EXCEPTIONS: dict[int, type[APIError]] = {
    400: BadRequestError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def _parse_error_body(response: httpx.Response) -> dict[str, Any]:
    """Extract message, error kind, path and details from an error response.

    Understands the server's filesystem error format
    (``{"error", "detail", "path"}``) and FastAPI's request validation
    format (``{"detail": [...]}``). Falls back to the raw response text.

    Returns:
        Keyword arguments for an APIError subclass.
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return {
            "message": text or f"HTTP {response.status_code} error",
            "response_body": response.text,
        }

    if not isinstance(body, dict):
        return {"message": str(body), "response_body": body}

    detail = body.get("detail")
    if isinstance(detail, list):
        messages = [
            f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
            for err in detail
        ]
        return {
            "message": "; ".join(messages),
            "details": {"errors": detail},
            "response_body": body,
        }

    fields: dict[str, Any] = {
        "message": str(detail or body.get("error") or body),
        "response_body": body,
    }
    # Filesystem errors identify themselves by the path they refer to
    if "path" in body:
        fields["error_kind"] = body.get("error")
        fields["path"] = body["path"]
    if "validation_errors" in body:
        fields["details"] = {"errors": body["validation_errors"]}
    return fields


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error status code.

    Raises:
        BadRequestError: For HTTP 400 responses.
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ValidationError: For HTTP 422 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For any other error status.
    """
    if response.is_success:
        return

    fields = _parse_error_body(response)
    status_code = response.status_code

    if status_code >= 500:
        raise ServerError(status_code=status_code, **fields)

    exception_class = _STATUS_EXCEPTIONS.get(status_code)
    if exception_class is not None:
        raise exception_class(**fields)
    raise APIError(status_code=status_code, **fields)


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Exponential backoff delay (``base * 2^attempt``), capped at the maximum."""
    delay = base * (2 ** attempt)
    return min(delay, DEFAULT_RETRY_BACKOFF_MAX)


def _decode(response: httpx.Response) -> Any:
    _raise_for_status(response)
    if response.content:
        return response.json()
    return None


class _HTTPClientBase:
    """Settings and retry decisions shared by the sync and async clients.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

    @property
    def attempts(self) -> int:
        return self.max_retries + 1 if self.retry_enabled else 1

    @staticmethod
    def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
        # None means "use the server default", so it is not sent at all
        if not params:
            return params
        return {key: value for key, value in params.items() if value is not None}

    def _should_retry_status(self, response: httpx.Response, attempt: int) -> bool:
        return (
            self.retry_enabled
            and response.status_code in RETRYABLE_STATUS_CODES
            and attempt < self.attempts - 1
        )

    def _transport_error(self, error: httpx.HTTPError, url: str) -> Exception:
        if isinstance(error, httpx.TimeoutException):
            return TimeoutError(
                message=f"Request to {url} timed out",
                timeout=self.timeout,
                url=url,
            )
        return ConnectionError(
            message=f"Failed to connect to {url}",
            url=url,
            cause=error,
        )

    def _can_retry_transport(self, attempt: int) -> bool:
        return self.retry_enabled and attempt < self.attempts - 1


class HTTPClient(_HTTPClientBase):
    """Synchronous HTTP client wrapping ``httpx.Client``.

    Example:
        with HTTPClient("http://localhost:8000") as http:
            http.get("/fs/list", params={"path": "~"})
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request and return the parsed JSON response.

        Args:
            method: The HTTP method.
            path: The URL path (appended to base_url).
            params: Query parameters; None values are dropped.
            json: JSON body to send with the request.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        url = f"{self.base_url}{path}"
        params = self._clean_params(params)

        for attempt in range(self.attempts):
            try:
                response = self._client.request(method, path, params=params, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                error = self._transport_error(e, url)
                if not self._can_retry_transport(attempt):
                    raise error from e
                logger.debug(f"Retrying {method} {path} after {type(e).__name__}")
                time.sleep(_calculate_backoff(attempt))
                continue

            if self._should_retry_status(response, attempt):
                logger.debug(f"Retrying {method} {path} after HTTP {response.status_code}")
                time.sleep(_calculate_backoff(attempt))
                continue
            return _decode(response)

        raise RuntimeError("Unexpected exit from request retry loop")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self.request("POST", path, params=params, json=json)

    def put(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self.request("PUT", path, params=params, json=json)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, params=params)


class AsyncHTTPClient(_HTTPClientBase):
    """Asynchronous HTTP client wrapping ``httpx.AsyncClient``.

    Example:
        async with AsyncHTTPClient("http://localhost:8000") as http:
            await http.post("/shell/execute", json={"command": "ls"})
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an async HTTP request and return the parsed JSON response.

        Same semantics as ``HTTPClient.request``.
        """
        url = f"{self.base_url}{path}"
        params = self._clean_params(params)

        for attempt in range(self.attempts):
            try:
                response = await self._client.request(method, path, params=params, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                error = self._transport_error(e, url)
                if not self._can_retry_transport(attempt):
                    raise error from e
                logger.debug(f"Retrying {method} {path} after {type(e).__name__}")
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            if self._should_retry_status(response, attempt):
                logger.debug(f"Retrying {method} {path} after HTTP {response.status_code}")
                await asyncio.sleep(_calculate_backoff(attempt))
                continue
            return _decode(response)

        raise RuntimeError("Unexpected exit from request retry loop")

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return await self.request("POST", path, params=params, json=json)

    async def put(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return await self.request("PUT", path, params=params, json=json)

    async def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("DELETE", path, params=params)
