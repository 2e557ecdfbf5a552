"""Virtual Shell API Client Library.

This module provides a type-safe Python client for the Virtual Shell REST
API. It supports both synchronous and asynchronous usage patterns.

Example:
    Synchronous usage::

        from client import VirtualShellClient

        with VirtualShellClient(base_url="http://localhost:8000") as client:
            client.shell.execute("echo hello > greeting.txt")
            print(client.filesystem.read("greeting.txt").content)

    Asynchronous usage::

        from client import AsyncVirtualShellClient

        async with AsyncVirtualShellClient() as client:
            await client.filesystem.mkdir("projects")

Exports:
    VirtualShellClient: Synchronous client.
    AsyncVirtualShellClient: Asynchronous client.

    Exceptions:
        VirtualShellClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        BadRequestError: Operation does not apply to the target (HTTP 400).
        NotFoundError: Entry or parent missing (HTTP 404).
        ConflictError: Entry already exists (HTTP 409).
        ValidationError: Request validation failed (HTTP 422).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._filesystem import AsyncFileSystemClient, FileSystemClient
from client._shell import AsyncShellClient, ShellClient
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
from client.models import (
    CommandResponse,
    EntryInfo,
    EntryKind,
    HealthResponse,
    ListResponse,
    OperationResponse,
    ReadFileResponse,
    ServerInfoResponse,
    SessionResponse,
    SnapshotResponse,
)
from client.client import AsyncVirtualShellClient, VirtualShellClient

__all__ = [
    # Main clients
    "VirtualShellClient",
    "AsyncVirtualShellClient",
    # Sub-clients
    "ShellClient",
    "AsyncShellClient",
    "FileSystemClient",
    "AsyncFileSystemClient",
    # Exceptions
    "VirtualShellClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "BadRequestError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "ServerError",
    # Response models
    "CommandResponse",
    "SessionResponse",
    "EntryInfo",
    "EntryKind",
    "ListResponse",
    "ReadFileResponse",
    "OperationResponse",
    "SnapshotResponse",
    "HealthResponse",
    "ServerInfoResponse",
]
