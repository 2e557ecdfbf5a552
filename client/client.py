"""Main Virtual Shell client classes.

This module provides the main entry points for interacting with the API:
- VirtualShellClient: Synchronous client
- AsyncVirtualShellClient: Asynchronous client

Both clients provide namespaced access through sub-client properties
(``client.shell`` and ``client.filesystem``).

Example:
    Synchronous usage::

        from client import VirtualShellClient

        with VirtualShellClient(base_url="http://localhost:8000") as client:
            client.shell.execute("mkdir projects")
            listing = client.filesystem.list("~")

    Asynchronous usage::

        from client import AsyncVirtualShellClient

        async with AsyncVirtualShellClient() as client:
            await client.shell.execute("touch notes.txt")
"""

from typing import Any

from client._filesystem import AsyncFileSystemClient, FileSystemClient
from client._http import AsyncHTTPClient, HTTPClient
from client._shell import AsyncShellClient, ShellClient
from client.models import HealthResponse, ServerInfoResponse


class VirtualShellClient:
    """Synchronous client for the Virtual Shell REST API.

    Attributes:
        base_url: The base URL of the server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.

    Example:
        Manual lifecycle management::

            client = VirtualShellClient()
            try:
                print(client.shell.execute("ls").output)
            finally:
                client.close()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the server (default: http://localhost:8000).
            timeout: Request timeout in seconds (default: 30.0).
            retry_enabled: Whether to automatically retry on transient failures.
                Retries on connection errors, timeouts, and HTTP 502/503/504
                with exponential backoff (default: False).
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom HTTP transport (e.g., for testing).
        """
        self.base_url = base_url
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        # Sub-clients are created on first access
        self._shell: ShellClient | None = None
        self._filesystem: FileSystemClient | None = None

    def __enter__(self) -> "VirtualShellClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def shell(self) -> ShellClient:
        """Access the command endpoints (/shell/*)."""
        if self._shell is None:
            self._shell = ShellClient(self._http)
        return self._shell

    @property
    def filesystem(self) -> FileSystemClient:
        """Access the explorer endpoints (/fs/*)."""
        if self._filesystem is None:
            self._filesystem = FileSystemClient(self._http)
        return self._filesystem

    def health(self) -> HealthResponse:
        """Check whether the server is up."""
        return HealthResponse(**self._http.get("/health"))

    def info(self) -> ServerInfoResponse:
        """Get the server's welcome message and version."""
        return ServerInfoResponse(**self._http.get("/"))


class AsyncVirtualShellClient:
    """Asynchronous client for the Virtual Shell REST API.

    Mirrors VirtualShellClient with awaitable methods.

    Example:
        async with AsyncVirtualShellClient() as client:
            result = await client.shell.execute("pwd")
            print(result.output)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        self._shell: AsyncShellClient | None = None
        self._filesystem: AsyncFileSystemClient | None = None

    async def __aenter__(self) -> "AsyncVirtualShellClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    @property
    def shell(self) -> AsyncShellClient:
        """Access the command endpoints (/shell/*)."""
        if self._shell is None:
            self._shell = AsyncShellClient(self._http)
        return self._shell

    @property
    def filesystem(self) -> AsyncFileSystemClient:
        """Access the explorer endpoints (/fs/*)."""
        if self._filesystem is None:
            self._filesystem = AsyncFileSystemClient(self._http)
        return self._filesystem

    async def health(self) -> HealthResponse:
        """Check whether the server is up."""
        return HealthResponse(**await self._http.get("/health"))

    async def info(self) -> ServerInfoResponse:
        """Get the server's welcome message and version."""
        return ServerInfoResponse(**await self._http.get("/"))
