"""Unit tests for the client HTTP layer in client/_http.py.

The tests verify:

1. Helper functions:
   - _parse_error_body: filesystem errors, FastAPI validation lists, plain text
   - _raise_for_status: status code to exception mapping
   - _calculate_backoff: exponential backoff with a cap

2. HTTPClient and AsyncHTTPClient:
   - Request methods, query parameter filtering, empty bodies
   - Transport errors mapped to ConnectionError / TimeoutError
   - Retry on 502/503/504 only when enabled

Note: These tests use httpx.MockTransport to avoid real network calls.
"""

import httpx
import pytest

from client._http import (
    DEFAULT_RETRY_BACKOFF_BASE,
    DEFAULT_RETRY_BACKOFF_MAX,
    RETRYABLE_STATUS_CODES,
    AsyncHTTPClient,
    HTTPClient,
    _calculate_backoff,
    _parse_error_body,
    _raise_for_status,
)
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

BASE_URL = "http://localhost:8000"


def sync_client(handler, **kwargs) -> HTTPClient:
    return HTTPClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


def async_client(handler, **kwargs) -> AsyncHTTPClient:
    return AsyncHTTPClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


@pytest.fixture
def no_sleep(monkeypatch):
    """Record backoff delays instead of sleeping."""
    delays = []

    async def fake_async_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr("client._http.time.sleep", delays.append)
    monkeypatch.setattr("client._http.asyncio.sleep", fake_async_sleep)
    return delays


# =============================================================================
# Helper Function Tests
# =============================================================================


class TestParseErrorBody:
    def test_filesystem_error(self):
        response = httpx.Response(
            404,
            json={
                "error": "no_such_entry",
                "detail": "No such file or directory",
                "path": "/x",
                "operation": "read",
            },
        )

        fields = _parse_error_body(response)

        assert fields["message"] == "No such file or directory"
        assert fields["error_kind"] == "no_such_entry"
        assert fields["path"] == "/x"

    def test_fastapi_validation_list(self):
        response = httpx.Response(
            422,
            json={
                "detail": [
                    {"loc": ["body", "path"], "msg": "field required", "type": "missing"},
                    {"loc": ["query", "cwd"], "msg": "bad", "type": "value_error"},
                ]
            },
        )

        fields = _parse_error_body(response)

        assert fields["message"] == "path: field required; cwd: bad"
        assert len(fields["details"]["errors"]) == 2
        assert "error_kind" not in fields

    def test_generic_error_has_no_kind(self):
        response = httpx.Response(400, json={"error": "Invalid Value", "detail": "bad value"})

        fields = _parse_error_body(response)

        assert fields["message"] == "bad value"
        assert "error_kind" not in fields

    def test_pydantic_validation_body(self):
        response = httpx.Response(
            422,
            json={"error": "Validation Error", "detail": "failed", "validation_errors": [{"msg": "x"}]},
        )
        assert _parse_error_body(response)["details"] == {"errors": [{"msg": "x"}]}

    def test_plain_text(self):
        response = httpx.Response(502, text="Bad Gateway")
        assert _parse_error_body(response)["message"] == "Bad Gateway"

    def test_empty_body(self):
        response = httpx.Response(503, content=b"")
        assert _parse_error_body(response)["message"] == "HTTP 503 error"


class TestRaiseForStatus:
    def test_success_does_not_raise(self):
        _raise_for_status(httpx.Response(200, json={}))

    @pytest.mark.parametrize(
        "status_code,exception_class",
        [
            (400, BadRequestError),
            (404, NotFoundError),
            (409, ConflictError),
            (422, ValidationError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_status_mapping(self, status_code, exception_class):
        with pytest.raises(exception_class) as exc_info:
            _raise_for_status(httpx.Response(status_code, json={"detail": "boom"}))
        assert exc_info.value.status_code == status_code

    def test_other_status_raises_api_error(self):
        with pytest.raises(APIError) as exc_info:
            _raise_for_status(httpx.Response(418, json={"detail": "teapot"}))

        assert type(exc_info.value) is APIError
        assert exc_info.value.status_code == 418

    def test_conflict_carries_path(self):
        response = httpx.Response(
            409, json={"error": "already_exists", "detail": "File exists", "path": "/tmp"}
        )

        with pytest.raises(ConflictError) as exc_info:
            _raise_for_status(response)

        assert str(exc_info.value) == "[HTTP 409] [already_exists] /tmp: File exists"


class TestCalculateBackoff:
    def test_exponential_growth(self):
        assert _calculate_backoff(0) == DEFAULT_RETRY_BACKOFF_BASE
        assert _calculate_backoff(1) == DEFAULT_RETRY_BACKOFF_BASE * 2
        assert _calculate_backoff(3) == DEFAULT_RETRY_BACKOFF_BASE * 8

    def test_capped_at_max(self):
        assert _calculate_backoff(20) == DEFAULT_RETRY_BACKOFF_MAX

    def test_retryable_codes(self):
        assert RETRYABLE_STATUS_CODES == {502, 503, 504}


# =============================================================================
# HTTPClient Tests
# =============================================================================


class TestHTTPClient:
    def test_initialization(self):
        client = HTTPClient("http://example.com/", timeout=5.0)

        assert client.base_url == "http://example.com"
        assert client.timeout == 5.0
        assert client.attempts == 1
        client.close()

    def test_get_with_params_drops_none(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"ok": True})

        with sync_client(handler) as client:
            assert client.get("/fs/list", params={"path": "/tmp", "cwd": None}) == {"ok": True}

        assert seen["params"] == {"path": "/tmp"}

    @pytest.mark.parametrize("method", ["post", "put"])
    def test_json_body(self, method):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = request.content
            return httpx.Response(200, json={"path": "/tmp/a"})

        with sync_client(handler) as client:
            getattr(client, method)("/fs/write", json={"path": "/tmp/a"})

        assert seen["method"] == method.upper()
        assert b'"path"' in seen["body"]

    def test_delete(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "DELETE"
            assert request.url.params["recursive"] == "true"
            return httpx.Response(200, json={"operation": "remove"})

        with sync_client(handler) as client:
            assert client.delete("/fs/remove", params={"path": "/x", "recursive": True}) == {
                "operation": "remove"
            }

    def test_empty_response_returns_none(self):
        with sync_client(lambda request: httpx.Response(204)) as client:
            assert client.post("/anything") is None

    def test_error_response_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "no_such_entry", "detail": "missing", "path": "/x"})

        with sync_client(handler) as client:
            with pytest.raises(NotFoundError) as exc_info:
                client.get("/fs/stat")

        assert exc_info.value.path == "/x"

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with sync_client(handler) as client:
            with pytest.raises(ConnectionError) as exc_info:
                client.get("/health")

        assert exc_info.value.url == "http://localhost:8000/health"
        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    def test_timeout_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with sync_client(handler, timeout=2.0) as client:
            with pytest.raises(TimeoutError) as exc_info:
                client.get("/health")

        assert exc_info.value.timeout == 2.0


class TestHTTPClientRetry:
    def test_no_retry_by_default(self, no_sleep):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(503, json={"detail": "Unavailable"})

        with sync_client(handler) as client:
            with pytest.raises(ServerError):
                client.get("/health")

        assert len(attempts) == 1
        assert no_sleep == []

    def test_retries_transient_status(self, no_sleep):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) < 3:
                return httpx.Response(503, json={"detail": "Unavailable"})
            return httpx.Response(200, json={"status": "healthy"})

        with sync_client(handler, retry_enabled=True, max_retries=3) as client:
            assert client.get("/health") == {"status": "healthy"}

        assert len(attempts) == 3
        assert no_sleep == [0.5, 1.0]

    def test_gives_up_after_max_retries(self, no_sleep):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(504, json={"detail": "timeout"})

        with sync_client(handler, retry_enabled=True, max_retries=2) as client:
            with pytest.raises(ServerError) as exc_info:
                client.get("/health")

        assert exc_info.value.status_code == 504
        assert len(attempts) == 3

    def test_client_errors_are_not_retried(self, no_sleep):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(409, json={"detail": "exists"})

        with sync_client(handler, retry_enabled=True) as client:
            with pytest.raises(ConflictError):
                client.post("/fs/mkdir", json={"path": "/tmp"})

        assert len(attempts) == 1

    def test_retries_connection_errors(self, no_sleep):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json={"status": "healthy"})

        with sync_client(handler, retry_enabled=True, max_retries=1) as client:
            assert client.get("/health") == {"status": "healthy"}

        assert len(attempts) == 2


# =============================================================================
# AsyncHTTPClient Tests
# =============================================================================


class TestAsyncHTTPClient:
    async def test_get(self):
        async with async_client(lambda request: httpx.Response(200, json={"a": 1})) as client:
            assert await client.get("/x") == {"a": 1}

    async def test_post_put_delete(self):
        methods = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            return httpx.Response(200, json={})

        async with async_client(handler) as client:
            await client.post("/a", json={})
            await client.put("/a", json={})
            await client.delete("/a")

        assert methods == ["POST", "PUT", "DELETE"]

    async def test_error_mapping(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "is_a_directory", "detail": "Is a directory", "path": "/tmp"})

        async with async_client(handler) as client:
            with pytest.raises(BadRequestError) as exc_info:
                await client.get("/fs/read")

        assert exc_info.value.error_kind == "is_a_directory"

    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with async_client(handler) as client:
            with pytest.raises(ConnectionError):
                await client.get("/health")

    async def test_retry(self, no_sleep):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) == 1:
                return httpx.Response(502, text="Bad Gateway")
            return httpx.Response(200, json={"ok": True})

        async with async_client(handler, retry_enabled=True) as client:
            assert await client.get("/x") == {"ok": True}

        assert no_sleep == [0.5]
