"""Utility functions for API route handlers.

This module contains helpers shared by the filesystem and shell route
handlers, reducing code duplication.
"""

from typing import TypeVar

from api.exceptions import FileSystemOperationError
from models.errors import FsResult


T = TypeVar("T")


def unwrap_or_raise(result: FsResult[T], operation: str) -> T:
    """Return a successful result's value or raise for the exception handlers.

    Args:
        result: The FsResult returned by a FileSystem operation.
        operation: Operation name reported in the error response.

    Returns:
        The result value.

    Raises:
        FileSystemOperationError: If the result carries an error.
    """
    if not result.ok:
        raise FileSystemOperationError(result.error, operation)
    return result.value
