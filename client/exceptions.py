"""Exception hierarchy for the Virtual Shell API client.

Exception Hierarchy:
    VirtualShellClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── BadRequestError (HTTP 400: not a directory, is a directory, ...)
        ├── NotFoundError (HTTP 404: missing entry or parent)
        ├── ConflictError (HTTP 409: entry already exists)
        ├── ValidationError (HTTP 422)
        └── ServerError (HTTP 5xx)

Example:
    Catching specific errors::

        try:
            client.filesystem.mkdir("projects")
        except ConflictError:
            pass  # already there
        except NotFoundError as e:
            print(f"Missing parent: {e.path}")
"""

from typing import Any


class VirtualShellClientError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(VirtualShellClientError):
    """Failed to connect to the server.

    Attributes:
        url: The URL that failed to connect.
        cause: The underlying transport exception.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(VirtualShellClientError):
    """Request took longer than the configured timeout.

    Attributes:
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.timeout is not None:
            return f"{self.message} (timeout: {self.timeout}s)"
        return self.message


class APIError(VirtualShellClientError):
    """Server returned an error response.

    Filesystem failures carry the server's error kind (e.g. "no_such_entry")
    and the canonical path the failure refers to.

    Attributes:
        status_code: HTTP status code from the server.
        error_kind: Error kind from the response body, if any.
        path: Canonical path the failure refers to, if any.
        details: Additional error details from the response body.
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_kind: str | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_kind = error_kind
        self.path = path
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        prefix = f"[HTTP {self.status_code}]"
        if self.error_kind:
            prefix = f"{prefix} [{self.error_kind}]"
        if self.path:
            return f"{prefix} {self.path}: {self.message}"
        return f"{prefix} {self.message}"


class BadRequestError(APIError):
    """The operation does not apply to the target (HTTP 400).

    Raised for NotADirectory, IsADirectory and InvalidArgument failures,
    e.g. reading a directory or removing a non-empty one without
    ``recursive``.
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message=message, status_code=400, **kwargs)


class NotFoundError(APIError):
    """The entry or its parent directory does not exist (HTTP 404)."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message=message, status_code=404, **kwargs)


class ConflictError(APIError):
    """The target path already exists (HTTP 409)."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message=message, status_code=409, **kwargs)


class ValidationError(APIError):
    """Request validation failed (HTTP 422).

    The ``details`` attribute holds the field-level errors under "errors".
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_kind", "validation_error")
        super().__init__(message=message, status_code=422, **kwargs)


class ServerError(APIError):
    """Server-side error (HTTP 5xx).

    If retry is enabled, 502/503/504 responses are retried before this is
    raised.
    """

    def __init__(self, message: str, status_code: int = 500, **kwargs: Any) -> None:
        kwargs.setdefault("error_kind", "server_error")
        super().__init__(message=message, status_code=status_code, **kwargs)
