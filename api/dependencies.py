"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared FileSystem and the interactive Shell session.
"""

import asyncio
import logging
from typing import Annotated

from fastapi import Depends

from models.filesystem import FileSystem
from models.persistence import SnapshotStore
from models.settings import ShellSettings
from shell import Shell


logger = logging.getLogger(__name__)

# Global state
# One filesystem per process, created when the app starts
_settings: ShellSettings | None = None
_filesystem: FileSystem | None = None
_shell: Shell | None = None

# Serializes every mutation together with its persist
filesystem_lock = asyncio.Lock()


def get_settings() -> ShellSettings:
    """Get the settings the filesystem was initialized with.

    Falls back to settings read from the environment when the app has not
    been started (e.g. routes exercised with dependency overrides only).
    """
    if _settings is None:
        return ShellSettings()
    return _settings


def get_filesystem() -> FileSystem:
    """Get the shared FileSystem instance.

    This function is a FastAPI dependency. When you add it to a route handler's
    parameters, FastAPI will automatically call this function and inject the result.

    Returns:
        The shared FileSystem instance.

    Raises:
        RuntimeError: If the filesystem hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(filesystem: FileSystemDep):
            return {"entries": len(filesystem.tree)}
    """
    if _filesystem is None:
        raise RuntimeError(
            "FileSystem not initialized. Call initialize_filesystem() first."
        )

    return _filesystem


def get_shell() -> Shell:
    """Get the shared Shell session bound to the shared FileSystem.

    Raises:
        RuntimeError: If the filesystem hasn't been initialized yet.
    """
    if _shell is None:
        raise RuntimeError(
            "Shell not initialized. Call initialize_filesystem() first."
        )

    return _shell


def initialize_filesystem(settings: ShellSettings | None = None) -> FileSystem:
    """Initialize the shared FileSystem and Shell instances.

    This should be called once when the FastAPI app starts up. The tree is
    loaded from the configured snapshot store, or created from the default
    layout when no usable snapshot exists.

    Args:
        settings: Configuration to use (defaults to the environment).

    Returns:
        The newly created FileSystem instance.
    """
    global _settings, _filesystem, _shell

    _settings = settings or ShellSettings()
    snapshots = SnapshotStore(_settings.create_store(), key=_settings.snapshot_key)
    _filesystem = FileSystem.open(snapshots=snapshots, home=_settings.home)
    _shell = Shell(_filesystem, settings=_settings)

    logger.info(
        f"Filesystem ready ({_settings.storage} storage, {len(_filesystem.tree)} entries)"
    )
    return _filesystem


def shutdown_filesystem() -> None:
    """Drop the shared instances.

    This should be called when the FastAPI app shuts down. Every mutation has
    already been persisted, so there is nothing left to flush.
    """
    global _settings, _filesystem, _shell

    _settings = None
    _filesystem = None
    _shell = None


# Type aliases for dependency injection
# This makes the type annotation cleaner in route handlers
FileSystemDep = Annotated[FileSystem, Depends(get_filesystem)]
ShellDep = Annotated[Shell, Depends(get_shell)]
SettingsDep = Annotated[ShellSettings, Depends(get_settings)]
