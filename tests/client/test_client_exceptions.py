"""Unit tests for the client exception hierarchy."""

import pytest

from client.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
    VirtualShellClientError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exception_class",
        [BadRequestError, NotFoundError, ConflictError, ValidationError, ServerError],
    )
    def test_api_errors(self, exception_class):
        exc = exception_class("boom")
        assert isinstance(exc, APIError)
        assert isinstance(exc, VirtualShellClientError)

    def test_transport_errors_are_not_api_errors(self):
        assert not isinstance(ConnectionError("down"), APIError)
        assert not isinstance(TimeoutError("slow"), APIError)

    def test_connection_error_is_not_an_os_error(self):
        assert not issubclass(ConnectionError, OSError)


class TestStatusCodes:
    @pytest.mark.parametrize(
        "exception_class,status_code",
        [(BadRequestError, 400), (NotFoundError, 404), (ConflictError, 409), (ValidationError, 422)],
    )
    def test_fixed_status(self, exception_class, status_code):
        assert exception_class("x").status_code == status_code

    def test_server_error_status_is_configurable(self):
        assert ServerError("x").status_code == 500
        assert ServerError("x", status_code=503).status_code == 503

    def test_default_error_kinds(self):
        assert ValidationError("x").error_kind == "validation_error"
        assert ServerError("x").error_kind == "server_error"
        assert NotFoundError("x").error_kind is None


class TestStringFormat:
    def test_with_kind_and_path(self):
        exc = NotFoundError("No such file or directory", error_kind="no_such_entry", path="/x")
        assert str(exc) == "[HTTP 404] [no_such_entry] /x: No such file or directory"

    def test_plain(self):
        assert str(APIError("teapot", status_code=418)) == "[HTTP 418] teapot"

    def test_connection_error_includes_url(self):
        exc = ConnectionError("Failed to connect", url="http://x")
        assert str(exc) == "Failed to connect (url: http://x)"

    def test_timeout_includes_seconds(self):
        assert str(TimeoutError("Timed out", timeout=2.5)) == "Timed out (timeout: 2.5s)"
        assert str(TimeoutError("Timed out")) == "Timed out"
