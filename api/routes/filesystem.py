"""Filesystem endpoints for file-explorer style clients.

These endpoints expose the store operations directly. Relative paths are
resolved against the ``cwd`` given with each request (home by default), so
explorer views never depend on the shell session's working directory.
"""

from typing import Optional

from fastapi import APIRouter, Query

from api.dependencies import FileSystemDep, filesystem_lock
from api.models import (
    ListResponse,
    OperationResponse,
    PathRequest,
    ReadFileResponse,
    SnapshotResponse,
    TransferRequest,
    WriteFileRequest,
)
from api.utils import unwrap_or_raise
from models.entry import EntryInfo
from models.paths import join_path


router = APIRouter(
    prefix="/fs",
    tags=["filesystem"],
)


# ============================================================================
# Queries
# ============================================================================


@router.get("/list", response_model=ListResponse)
async def list_directory(
    filesystem: FileSystemDep,
    path: str = Query(".", description="Directory (or file) to list"),
    show_hidden: bool = Query(False, description="Include dot-files"),
    cwd: Optional[str] = Query(None, description="Base directory for relative paths"),
):
    """List a directory with a description of every entry.

    Args:
        filesystem: The FileSystem instance (injected by FastAPI).
        path: Path expression to list.
        show_hidden: Whether names starting with "." are included.
        cwd: Base directory for relative paths.

    Returns:
        The canonical path and the entries in listing order.
    """
    async with filesystem_lock:
        names = unwrap_or_raise(
            filesystem.list_directory(path, show_hidden=show_hidden, cwd=cwd), "list"
        )
        target = filesystem.resolve(path, cwd)
        if filesystem.is_file(target):
            entries = [unwrap_or_raise(filesystem.stat(target), "list")]
        else:
            entries = [
                unwrap_or_raise(filesystem.stat(join_path(target, name)), "list")
                for name in names
            ]

    return ListResponse(path=target, entries=entries, total_count=len(entries))


@router.get("/stat", response_model=EntryInfo)
async def stat_entry(
    filesystem: FileSystemDep,
    path: str = Query(..., description="Path to describe"),
    cwd: Optional[str] = Query(None),
):
    """Describe a single entry (kind, size, children)."""
    async with filesystem_lock:
        return unwrap_or_raise(filesystem.stat(path, cwd=cwd), "stat")


@router.get("/read", response_model=ReadFileResponse)
async def read_file(
    filesystem: FileSystemDep,
    path: str = Query(..., description="File to read"),
    cwd: Optional[str] = Query(None),
):
    """Read a file's full content.

    Returns:
        404 when the file does not exist, 400 when it is a directory.
    """
    async with filesystem_lock:
        content = unwrap_or_raise(filesystem.read_file(path, cwd=cwd), "read")
        target = filesystem.resolve(path, cwd)

    return ReadFileResponse(path=target, content=content, size=len(content))


@router.get("/snapshot", response_model=SnapshotResponse)
async def get_snapshot(filesystem: FileSystemDep):
    """Return the whole tree as plain data, exactly as it is persisted."""
    async with filesystem_lock:
        entries = filesystem.get_snapshot()
        total_bytes = filesystem.disk_usage()

    return SnapshotResponse(
        entries=entries,
        entry_count=len(entries),
        total_bytes=total_bytes,
    )


# ============================================================================
# Mutations
# ============================================================================


@router.put("/write", response_model=OperationResponse)
async def write_file(request: WriteFileRequest, filesystem: FileSystemDep):
    """Write (or append) text to a file, creating it when missing.

    Args:
        request: Path, content, append flag and optional cwd.
        filesystem: The FileSystem instance (injected by FastAPI).

    Returns:
        The canonical path written.
    """
    async with filesystem_lock:
        path = unwrap_or_raise(
            filesystem.write_file(
                request.path, request.content, append=request.append, cwd=request.cwd
            ),
            "write",
        )

    verb = "Appended to" if request.append else "Wrote"
    return OperationResponse(
        operation="write",
        path=path,
        message=f"{verb} {path} ({len(request.content)} characters)",
    )


@router.post("/mkdir", response_model=OperationResponse)
async def make_directory(request: PathRequest, filesystem: FileSystemDep):
    """Create a directory (the parent must already exist)."""
    async with filesystem_lock:
        path = unwrap_or_raise(filesystem.make_directory(request.path, cwd=request.cwd), "mkdir")

    return OperationResponse(operation="mkdir", path=path, message=f"Created directory {path}")


@router.post("/touch", response_model=OperationResponse)
async def touch(request: PathRequest, filesystem: FileSystemDep):
    """Create an empty file; existing entries are left unchanged."""
    async with filesystem_lock:
        path = unwrap_or_raise(filesystem.touch(request.path, cwd=request.cwd), "touch")

    return OperationResponse(operation="touch", path=path, message=f"Touched {path}")


@router.delete("/remove", response_model=OperationResponse)
async def remove(
    filesystem: FileSystemDep,
    path: str = Query(..., description="Entry to remove"),
    recursive: bool = Query(False, description="Remove non-empty directories"),
    cwd: Optional[str] = Query(None),
):
    """Remove a file or directory.

    Non-empty directories require ``recursive=true``; the root can never be
    removed.
    """
    async with filesystem_lock:
        removed = unwrap_or_raise(
            filesystem.remove(path, recursive=recursive, cwd=cwd), "remove"
        )

    return OperationResponse(operation="remove", path=removed, message=f"Removed {removed}")


@router.post("/copy", response_model=OperationResponse)
async def copy(request: TransferRequest, filesystem: FileSystemDep):
    """Copy a file's content to a new or existing file."""
    async with filesystem_lock:
        path = unwrap_or_raise(
            filesystem.copy(request.source, request.destination, cwd=request.cwd), "copy"
        )

    return OperationResponse(operation="copy", path=path, message=f"Copied to {path}")


@router.post("/move", response_model=OperationResponse)
async def move(request: TransferRequest, filesystem: FileSystemDep):
    """Move a file (copy followed by removal of the source)."""
    async with filesystem_lock:
        path = unwrap_or_raise(
            filesystem.move(request.source, request.destination, cwd=request.cwd), "move"
        )

    return OperationResponse(operation="move", path=path, message=f"Moved to {path}")


@router.post("/reset", response_model=OperationResponse)
async def reset(filesystem: FileSystemDep):
    """Discard every change and restore the default layout."""
    async with filesystem_lock:
        path = unwrap_or_raise(filesystem.reset(), "reset")

    return OperationResponse(operation="reset", path=path, message="Filesystem reset to default layout")
