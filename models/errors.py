"""Error taxonomy and result values for filesystem operations.

Filesystem primitives never raise for expected failures. They return an
FsResult carrying either a success payload or exactly one FsError, and the
caller decides how to render it (shell text, HTTP error body, etc.).
"""

from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Kinds of failure surfaced by the filesystem and the shell."""

    ALREADY_EXISTS = "already_exists"
    NO_SUCH_ENTRY = "no_such_entry"
    NO_SUCH_PARENT = "no_such_parent"
    NOT_A_DIRECTORY = "not_a_directory"
    IS_A_DIRECTORY = "is_a_directory"
    INVALID_ARGUMENT = "invalid_argument"
    MISSING_OPERAND = "missing_operand"
    UNKNOWN_COMMAND = "unknown_command"


# Traditional shell wording for each kind
ERROR_REASONS: dict[ErrorKind, str] = {
    ErrorKind.ALREADY_EXISTS: "File exists",
    ErrorKind.NO_SUCH_ENTRY: "No such file or directory",
    ErrorKind.NO_SUCH_PARENT: "No such file or directory",
    ErrorKind.NOT_A_DIRECTORY: "Not a directory",
    ErrorKind.IS_A_DIRECTORY: "Is a directory",
    ErrorKind.INVALID_ARGUMENT: "Invalid argument",
    ErrorKind.MISSING_OPERAND: "missing operand",
    ErrorKind.UNKNOWN_COMMAND: "command not found",
}


class FsError(BaseModel):
    """A single tagged failure.

    Args:
        kind: Which kind of failure occurred.
        path: Canonical path the failure refers to, if any.
        message: Human-readable reason (defaults to the kind's shell wording).
    """

    kind: ErrorKind = Field(description="Which kind of failure occurred")
    path: Optional[str] = Field(default=None, description="Path the failure refers to")
    message: str = Field(default="", description="Human-readable reason")

    def model_post_init(self, __context: Any) -> None:
        if not self.message:
            self.message = ERROR_REASONS[self.kind]

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class FsResult(BaseModel, Generic[T]):
    """Outcome of a filesystem operation.

    Exactly one of ``value`` (on success) or ``error`` (on failure) is
    meaningful. Use the ``success``/``failure`` constructors rather than
    building instances directly.

    Args:
        value: Success payload (may legitimately be None for unit results).
        error: The failure, or None on success.
    """

    value: Optional[T] = None
    error: Optional[FsError] = None

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "FsResult[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls, kind: ErrorKind, path: Optional[str] = None, message: str = ""
    ) -> "FsResult[T]":
        return cls(error=FsError(kind=kind, path=path, message=message))

    @classmethod
    def from_error(cls, error: FsError) -> "FsResult[T]":
        """Propagate an existing error into a result of another payload type."""
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the success value.

        Raises:
            ValueError: If the result carries an error.
        """
        if self.error is not None:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore[return-value]
