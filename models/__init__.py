"""Virtual filesystem data models package.

This package contains the path resolver, the entry and tree models, the
snapshot persistence adapters, and the FileSystem store that ties them
together.
"""

from models.errors import ErrorKind, FsError, FsResult
from models.paths import ROOT, DEFAULT_HOME, resolve_path
from models.entry import DirectoryEntry, Entry, EntryInfo, EntryKind, FileEntry
from models.tree import FileSystemTree
from models.persistence import JsonFileStore, KeyValueStore, MemoryStore, SnapshotStore
from models.session import SessionContext
from models.settings import ShellSettings
from models.filesystem import FileSystem

__all__ = [
    "ErrorKind",
    "FsError",
    "FsResult",
    "ROOT",
    "DEFAULT_HOME",
    "resolve_path",
    "DirectoryEntry",
    "FileEntry",
    "Entry",
    "EntryInfo",
    "EntryKind",
    "FileSystemTree",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "SnapshotStore",
    "SessionContext",
    "ShellSettings",
    "FileSystem",
]
