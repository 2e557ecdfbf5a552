"""Filesystem sub-client for the Virtual Shell API.

This module provides FileSystemClient and AsyncFileSystemClient for the
explorer endpoints (/fs/*). Every method takes an optional ``cwd`` that
relative paths resolve against on the server (home when omitted).

This is an internal module. Import from `client` instead.
"""

from client._base import AsyncBaseClient, BaseClient
from client.models import (
    EntryInfo,
    ListResponse,
    OperationResponse,
    ReadFileResponse,
    SnapshotResponse,
)


# Synchronous FileSystemClient


class FileSystemClient(BaseClient):
    """Synchronous client for the filesystem endpoints (/fs/*).

    Example:
        with VirtualShellClient() as client:
            client.filesystem.mkdir("projects")
            client.filesystem.write("projects/notes.txt", "hello\\n")
            print(client.filesystem.read("projects/notes.txt").content)
    """

    _BASE_PATH = "/fs"

    def list(
        self, path: str = ".", show_hidden: bool = False, cwd: str | None = None
    ) -> ListResponse:
        """List a directory.

        Args:
            path: Directory (or file) to list.
            show_hidden: Include names starting with ".".
            cwd: Base directory for relative paths.

        Returns:
            The canonical path and one EntryInfo per listed name.

        Raises:
            NotFoundError: If the path does not exist.
        """
        data = self._get(
            "/list", params={"path": path, "show_hidden": show_hidden, "cwd": cwd}
        )
        return ListResponse(**data)

    def stat(self, path: str, cwd: str | None = None) -> EntryInfo:
        """Describe one entry.

        Raises:
            NotFoundError: If the path does not exist.
        """
        data = self._get("/stat", params={"path": path, "cwd": cwd})
        return EntryInfo(**data)

    def read(self, path: str, cwd: str | None = None) -> ReadFileResponse:
        """Read a file's content.

        Raises:
            NotFoundError: If the file does not exist.
            BadRequestError: If the path is a directory.
        """
        data = self._get("/read", params={"path": path, "cwd": cwd})
        return ReadFileResponse(**data)

    def write(
        self, path: str, content: str, append: bool = False, cwd: str | None = None
    ) -> OperationResponse:
        """Write or append text, creating the file when missing.

        Raises:
            NotFoundError: If the parent directory does not exist.
            BadRequestError: If the path is a directory.
        """
        data = self._put(
            "/write",
            json={"path": path, "content": content, "append": append, "cwd": cwd},
        )
        return OperationResponse(**data)

    def mkdir(self, path: str, cwd: str | None = None) -> OperationResponse:
        """Create a directory.

        Raises:
            ConflictError: If the path already exists.
            NotFoundError: If the parent directory does not exist.
        """
        data = self._post("/mkdir", json={"path": path, "cwd": cwd})
        return OperationResponse(**data)

    def touch(self, path: str, cwd: str | None = None) -> OperationResponse:
        """Create an empty file (no-op for existing paths)."""
        data = self._post("/touch", json={"path": path, "cwd": cwd})
        return OperationResponse(**data)

    def remove(
        self, path: str, recursive: bool = False, cwd: str | None = None
    ) -> OperationResponse:
        """Remove a file or directory.

        Raises:
            NotFoundError: If the path does not exist.
            BadRequestError: For a directory without ``recursive``, or the root.
        """
        data = self._delete(
            "/remove", params={"path": path, "recursive": recursive, "cwd": cwd}
        )
        return OperationResponse(**data)

    def copy(self, source: str, destination: str, cwd: str | None = None) -> OperationResponse:
        """Copy a file."""
        data = self._post(
            "/copy", json={"source": source, "destination": destination, "cwd": cwd}
        )
        return OperationResponse(**data)

    def move(self, source: str, destination: str, cwd: str | None = None) -> OperationResponse:
        """Move a file."""
        data = self._post(
            "/move", json={"source": source, "destination": destination, "cwd": cwd}
        )
        return OperationResponse(**data)

    def snapshot(self) -> SnapshotResponse:
        """Get the whole tree as persisted."""
        data = self._get("/snapshot")
        return SnapshotResponse(**data)

    def reset(self) -> OperationResponse:
        """Restore the default layout, discarding every change."""
        data = self._post("/reset")
        return OperationResponse(**data)


# Asynchronous FileSystemClient


class AsyncFileSystemClient(AsyncBaseClient):
    """Asynchronous client for the filesystem endpoints (/fs/*).

    Methods mirror FileSystemClient.
    """

    _BASE_PATH = "/fs"

    async def list(
        self, path: str = ".", show_hidden: bool = False, cwd: str | None = None
    ) -> ListResponse:
        data = await self._get(
            "/list", params={"path": path, "show_hidden": show_hidden, "cwd": cwd}
        )
        return ListResponse(**data)

    async def stat(self, path: str, cwd: str | None = None) -> EntryInfo:
        data = await self._get("/stat", params={"path": path, "cwd": cwd})
        return EntryInfo(**data)

    async def read(self, path: str, cwd: str | None = None) -> ReadFileResponse:
        data = await self._get("/read", params={"path": path, "cwd": cwd})
        return ReadFileResponse(**data)

    async def write(
        self, path: str, content: str, append: bool = False, cwd: str | None = None
    ) -> OperationResponse:
        data = await self._put(
            "/write",
            json={"path": path, "content": content, "append": append, "cwd": cwd},
        )
        return OperationResponse(**data)

    async def mkdir(self, path: str, cwd: str | None = None) -> OperationResponse:
        data = await self._post("/mkdir", json={"path": path, "cwd": cwd})
        return OperationResponse(**data)

    async def touch(self, path: str, cwd: str | None = None) -> OperationResponse:
        data = await self._post("/touch", json={"path": path, "cwd": cwd})
        return OperationResponse(**data)

    async def remove(
        self, path: str, recursive: bool = False, cwd: str | None = None
    ) -> OperationResponse:
        data = await self._delete(
            "/remove", params={"path": path, "recursive": recursive, "cwd": cwd}
        )
        return OperationResponse(**data)

    async def copy(
        self, source: str, destination: str, cwd: str | None = None
    ) -> OperationResponse:
        data = await self._post(
            "/copy", json={"source": source, "destination": destination, "cwd": cwd}
        )
        return OperationResponse(**data)

    async def move(
        self, source: str, destination: str, cwd: str | None = None
    ) -> OperationResponse:
        data = await self._post(
            "/move", json={"source": source, "destination": destination, "cwd": cwd}
        )
        return OperationResponse(**data)

    async def snapshot(self) -> SnapshotResponse:
        data = await self._get("/snapshot")
        return SnapshotResponse(**data)

    async def reset(self) -> OperationResponse:
        data = await self._post("/reset")
        return OperationResponse(**data)
