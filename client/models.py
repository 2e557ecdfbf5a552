"""Client response models for the Virtual Shell API client.

This module re-exports the request/response models from the API layer and
defines client-specific response models that don't exist in the API layer.
"""

from pydantic import BaseModel, Field

# Re-export common models from API layer for client convenience
from api.models import (
    CommandResponse,
    ErrorResponse,
    ListResponse,
    OperationResponse,
    ReadFileResponse,
    SessionResponse,
    SnapshotResponse,
)
from models.entry import EntryInfo, EntryKind

__all__ = [
    # Re-exported from api.models
    "CommandResponse",
    "ErrorResponse",
    "ListResponse",
    "OperationResponse",
    "ReadFileResponse",
    "SessionResponse",
    "SnapshotResponse",
    # Re-exported from models.entry
    "EntryInfo",
    "EntryKind",
    # Client-specific models
    "HealthResponse",
    "ServerInfoResponse",
]


# Client-specific response models


class HealthResponse(BaseModel):
    """Response from the ``/health`` endpoint."""

    status: str = Field(..., description="Health status")


class ServerInfoResponse(BaseModel):
    """Response from the ``/`` endpoint.

    Attributes:
        message: Welcome message.
        version: API version.
        docs_url: Path of the interactive API docs.
    """

    message: str = Field(..., description="Welcome message")
    version: str | None = Field(None, description="API version")
    docs_url: str | None = Field(None, description="Interactive docs path")
