"""Persistence adapter for the filesystem tree.

The whole tree is stored as one serialized snapshot under a single key of a
durable key-value store. There is no delta format: every save rewrites the
full snapshot, and the last full write wins.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from models.tree import FileSystemTree

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "vfs"


class KeyValueStore(ABC):
    """Minimal durable string key-value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            OSError: If the value cannot be written.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        pass


class MemoryStore(KeyValueStore):
    """Process-local store, used by tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Store each key as ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a reader never observes a half-written snapshot.

    Args:
        directory: Directory holding the key files (created on first write).
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, self._path_for(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


class SnapshotStore:
    """Loads and saves full tree snapshots through a key-value store.

    Load failures never surface to the caller: a missing key, a malformed
    payload, or a snapshot that breaks tree invariants all yield None so the
    caller falls back to the default layout. Save failures are logged and
    swallowed; the in-memory tree remains the source of truth.

    Args:
        store: Backing key-value store.
        key: Fixed key the snapshot lives under.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_SNAPSHOT_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> FileSystemTree | None:
        """Load the persisted tree.

        Returns:
            The loaded tree, or None when nothing usable is stored.
        """
        try:
            payload = self.store.get(self.key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read snapshot '{self.key}': {e}")
            return None

        if payload is None:
            logger.info(f"No snapshot stored under '{self.key}'")
            return None

        try:
            tree = FileSystemTree.from_json(payload)
        except ValidationError as e:
            logger.warning(
                f"Discarding malformed snapshot '{self.key}' "
                f"({e.error_count()} validation errors)"
            )
            return None

        issues = tree.validate_state()
        if issues:
            logger.warning(
                f"Discarding inconsistent snapshot '{self.key}': {issues[:3]}"
            )
            return None

        logger.debug(f"Loaded snapshot '{self.key}' with {len(tree)} entries")
        return tree

    def save(self, tree: FileSystemTree) -> bool:
        """Persist the full tree.

        Returns:
            True if the snapshot was written, False if the write failed.
        """
        try:
            self.store.set(self.key, tree.to_json())
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to persist snapshot '{self.key}': {e}")
            return False
        return True

    def clear(self) -> None:
        try:
            self.store.delete(self.key)
        except OSError as e:
            logger.error(f"Failed to delete snapshot '{self.key}': {e}")
