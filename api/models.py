"""Shared request and response models for API endpoints.

This module contains the models used by both the shell and the filesystem
route handlers, so the client library can mirror them one-to-one.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from models.entry import EntryInfo
from models.errors import ErrorKind


# Shell models


class CommandRequest(BaseModel):
    """Request model for running one shell command line.

    Attributes:
        command: The line exactly as typed (may be blank).
    """

    command: str = Field(..., description="Command line to execute")


class CommandResponse(BaseModel):
    """Response model for an executed command line.

    Attributes:
        output: Rendered output text (may be empty).
        error_kind: Set when the output is an error message.
        cwd: Current directory after the command ran.
        prompt: Prompt to show before the next command.
        clear_screen: Whether the terminal should clear its scrollback.
        open_editor: Canonical path to open in an editor, if requested.
    """

    output: str
    error_kind: Optional[ErrorKind] = None
    cwd: str
    prompt: str
    clear_screen: bool = False
    open_editor: Optional[str] = None


class SessionResponse(BaseModel):
    """Response model for the shell session state.

    Attributes:
        cwd: Current directory of the shell session.
        prompt: Prompt string for the current directory.
        home: Home directory.
        username: Configured user name.
        hostname: Configured host name.
    """

    cwd: str
    prompt: str
    home: str
    username: str
    hostname: str


# Filesystem request models
# Every explorer request carries its own optional cwd so views browse
# independently of the shell session


class PathRequest(BaseModel):
    """Request model for operations on a single path (mkdir, touch).

    Attributes:
        path: Absolute or relative path expression.
        cwd: Directory relative paths resolve against (defaults to home).
    """

    path: str = Field(..., min_length=1, description="Path expression")
    cwd: Optional[str] = Field(None, description="Base directory for relative paths")


class WriteFileRequest(PathRequest):
    """Request model for writing file content.

    Attributes:
        content: Text to write.
        append: Append instead of overwriting.
    """

    content: str = Field("", description="Text to write")
    append: bool = Field(False, description="Append instead of overwrite")


class TransferRequest(BaseModel):
    """Request model for copy and move.

    Attributes:
        source: Path of the file to copy or move.
        destination: Path of the new file.
        cwd: Directory relative paths resolve against (defaults to home).
    """

    source: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    cwd: Optional[str] = None


# Filesystem response models


class OperationResponse(BaseModel):
    """Response model for mutating filesystem operations.

    Attributes:
        operation: Name of the operation performed.
        path: Canonical path the operation produced or affected.
        message: Human-readable summary.
    """

    operation: str
    path: str
    message: str


class ListResponse(BaseModel):
    """Response model for a directory listing.

    Attributes:
        path: Canonical path of the listed directory (or file).
        entries: One description per listed name, in listing order.
        total_count: Number of entries returned.
    """

    path: str
    entries: list[EntryInfo]
    total_count: int


class ReadFileResponse(BaseModel):
    """Response model for file content.

    Attributes:
        path: Canonical path of the file.
        content: Full text buffer.
        size: Content length in characters.
    """

    path: str
    content: str
    size: int


class SnapshotResponse(BaseModel):
    """Response model for the full tree snapshot.

    Attributes:
        entries: Mapping of canonical path to entry data.
        entry_count: Number of entries in the tree.
        total_bytes: Sum of all file content lengths.
    """

    entries: dict[str, Any]
    entry_count: int
    total_bytes: int


# Error response models


class ErrorResponse(BaseModel):
    """Standard error response model for filesystem failures.

    Attributes:
        error: Error kind value (e.g. "no_such_entry").
        detail: Human-readable reason.
        path: Canonical path the failure refers to.
        operation: Operation that failed.
    """

    error: str
    detail: str
    path: Optional[str] = None
    operation: Optional[str] = None
