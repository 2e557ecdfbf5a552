"""Filesystem store - primitive operations over the virtual tree.

This module contains the FileSystem class that owns the tree, validates and
applies every mutation, and persists the full snapshot after each successful
change. All operations return FsResult values; none of them raise for
expected failures such as missing paths.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel

from models.entry import DirectoryEntry, EntryInfo, EntryKind, FileEntry
from models.errors import ErrorKind, FsResult
from models.paths import (
    DEFAULT_HOME,
    ROOT,
    base_name,
    parent_path,
    resolve_path,
)
from models.persistence import SnapshotStore
from models.session import SessionContext
from models.tree import FileSystemTree

logger = logging.getLogger(__name__)


class FileSystem(BaseModel):
    """Owner of the virtual tree and its primitive operations.

    Every path argument is resolved against ``cwd`` (a canonical directory
    supplied by the caller, defaulting to the home directory), so a shell
    session and several explorer views can browse independently while
    sharing one tree. Only ``change_directory`` mutates a SessionContext.

    Responsibilities:
    - Path resolution and lookups
    - Validate-then-mutate primitives (mkdir, touch, write, remove, copy, move)
    - One snapshot persist per successful mutation
    - Loading the persisted tree or materializing the default layout

    Attributes:
        tree: The path -> entry mapping.
        home: Canonical home directory.
        snapshots: Persistence adapter, or None for a purely in-memory tree.
        persist_failures: Number of snapshot writes that failed.
    """

    tree: FileSystemTree
    home: str = DEFAULT_HOME
    snapshots: Optional[SnapshotStore] = None
    persist_failures: int = 0

    class Config:
        arbitrary_types_allowed = True

    # ===== Construction =====

    @classmethod
    def open(
        cls, snapshots: Optional[SnapshotStore] = None, home: str = DEFAULT_HOME
    ) -> "FileSystem":
        """Load the persisted tree or fall back to the default layout.

        Load failures are not surfaced: an absent or unusable snapshot simply
        yields the default layout, which is then persisted.

        Args:
            snapshots: Persistence adapter to load from and save to.
            home: Canonical home directory.

        Returns:
            A ready FileSystem.
        """
        tree = snapshots.load() if snapshots is not None else None
        if tree is not None and home not in tree:
            logger.warning(f"Snapshot has no home directory '{home}', using default layout")
            tree = None

        if tree is None:
            filesystem = cls(tree=FileSystemTree.default_layout(home), home=home, snapshots=snapshots)
            filesystem._persist()
            logger.info("Initialized filesystem with default layout")
        else:
            filesystem = cls(tree=tree, home=home, snapshots=snapshots)
            logger.info(f"Loaded filesystem snapshot with {len(tree)} entries")
        return filesystem

    def reset(self) -> FsResult[str]:
        """Replace the whole tree with the default layout and persist it."""
        self.tree = FileSystemTree.default_layout(self.home)
        self._persist()
        logger.info("Filesystem reset to default layout")
        return FsResult.success(ROOT)

    def _persist(self) -> None:
        if self.snapshots is None:
            return
        if not self.snapshots.save(self.tree):
            self.persist_failures += 1

    def resolve(self, path: str, cwd: Optional[str] = None) -> str:
        base = resolve_path(cwd, self.home, self.home) if cwd else self.home
        return resolve_path(path, base, self.home)

    # ===== Lookups =====

    def exists(self, path: str, cwd: Optional[str] = None) -> bool:
        return self.resolve(path, cwd) in self.tree

    def is_directory(self, path: str, cwd: Optional[str] = None) -> bool:
        return isinstance(self.tree.get(self.resolve(path, cwd)), DirectoryEntry)

    def is_file(self, path: str, cwd: Optional[str] = None) -> bool:
        return isinstance(self.tree.get(self.resolve(path, cwd)), FileEntry)

    def stat(self, path: str, cwd: Optional[str] = None) -> FsResult[EntryInfo]:
        """Describe an entry.

        Args:
            path: Path expression to describe.
            cwd: Directory relative paths resolve against.

        Returns:
            EntryInfo on success, NoSuchEntry if the path is missing.
        """
        target = self.resolve(path, cwd)
        entry = self.tree.get(target)
        if entry is None:
            return FsResult.failure(ErrorKind.NO_SUCH_ENTRY, target)
        return FsResult.success(self._describe(target))

    def _describe(self, path: str) -> EntryInfo:
        entry = self.tree.entries[path]
        name = base_name(path) or ROOT
        if isinstance(entry, DirectoryEntry):
            return EntryInfo(
                name=name,
                path=path,
                kind=EntryKind.DIRECTORY,
                child_count=len(entry.children),
            )
        return EntryInfo(
            name=name,
            path=path,
            kind=EntryKind.FILE,
            size=entry.size,
            created_at=entry.created_at,
        )

    # ===== Creation =====

    def _check_parent(self, target: str) -> Optional[FsResult[Any]]:
        parent = self.tree.get(parent_path(target))
        if not isinstance(parent, DirectoryEntry):
            return FsResult.failure(ErrorKind.NO_SUCH_PARENT, target)
        return None

    def _link(self, target: str, entry: DirectoryEntry | FileEntry) -> None:
        self.tree.entries[target] = entry
        parent = self.tree.entries[parent_path(target)]
        assert isinstance(parent, DirectoryEntry)
        parent.add_child(base_name(target))

    def make_directory(self, path: str, cwd: Optional[str] = None) -> FsResult[str]:
        """Create a directory.

        Args:
            path: Path expression of the new directory.
            cwd: Directory relative paths resolve against.

        Returns:
            The canonical path on success; AlreadyExists if the path exists,
            NoSuchParent if its parent is missing or not a directory.
        """
        target = self.resolve(path, cwd)
        if target in self.tree:
            return FsResult.failure(ErrorKind.ALREADY_EXISTS, target)

        parent_error = self._check_parent(target)
        if parent_error is not None:
            return parent_error

        self._link(target, DirectoryEntry())
        self._persist()
        logger.debug(f"Created directory {target}")
        return FsResult.success(target)

    def touch(self, path: str, cwd: Optional[str] = None) -> FsResult[str]:
        """Create an empty file unless the path already exists.

        Touching an existing path is a successful no-op that leaves its
        content untouched.

        Args:
            path: Path expression of the file.
            cwd: Directory relative paths resolve against.

        Returns:
            The canonical path on success, NoSuchParent if the parent is
            missing or not a directory.
        """
        target = self.resolve(path, cwd)
        if target in self.tree:
            return FsResult.success(target)

        parent_error = self._check_parent(target)
        if parent_error is not None:
            return parent_error

        self._link(target, FileEntry(created_at=datetime.now(timezone.utc)))
        self._persist()
        logger.debug(f"Created file {target}")
        return FsResult.success(target)

    # ===== Content =====

    def write_file(
        self,
        path: str,
        content: str,
        append: bool = False,
        cwd: Optional[str] = None,
    ) -> FsResult[str]:
        """Set or append file content, creating the file when missing.

        Args:
            path: Path expression of the file.
            content: Text to write.
            append: Append instead of replacing the current content.
            cwd: Directory relative paths resolve against.

        Returns:
            The canonical path on success; the implicit touch's error if the
            file had to be created and could not be; IsADirectory if the
            target is a directory.
        """
        target = self.resolve(path, cwd)
        entry = self.tree.get(target)

        if entry is None:
            parent_error = self._check_parent(target)
            if parent_error is not None:
                return parent_error
            entry = FileEntry(created_at=datetime.now(timezone.utc))
            self._link(target, entry)

        if isinstance(entry, DirectoryEntry):
            return FsResult.failure(ErrorKind.IS_A_DIRECTORY, target)

        if append:
            entry.content += content
        else:
            entry.content = content

        self._persist()
        return FsResult.success(target)

    def read_file(self, path: str, cwd: Optional[str] = None) -> FsResult[str]:
        """Return a file's content.

        Returns:
            The content (empty string if never written); NoSuchEntry if
            missing, IsADirectory if the target is a directory.
        """
        target = self.resolve(path, cwd)
        entry = self.tree.get(target)
        if entry is None:
            return FsResult.failure(ErrorKind.NO_SUCH_ENTRY, target)
        if isinstance(entry, DirectoryEntry):
            return FsResult.failure(ErrorKind.IS_A_DIRECTORY, target)
        return FsResult.success(entry.content)

    def list_directory(
        self,
        path: str = ".",
        show_hidden: bool = False,
        cwd: Optional[str] = None,
    ) -> FsResult[list[str]]:
        """List a directory's children in insertion order.

        Listing a file returns just its own name, mirroring what ``ls file``
        displays.

        Args:
            path: Path expression to list.
            show_hidden: Include names beginning with ".".
            cwd: Directory relative paths resolve against.

        Returns:
            Names on success, NoSuchEntry if the path is missing.
        """
        target = self.resolve(path, cwd)
        entry = self.tree.get(target)
        if entry is None:
            return FsResult.failure(ErrorKind.NO_SUCH_ENTRY, target)
        if isinstance(entry, FileEntry):
            return FsResult.success([base_name(target)])

        names = list(entry.children)
        if not show_hidden:
            names = [name for name in names if not name.startswith(".")]
        return FsResult.success(names)

    # ===== Removal, copy, move =====

    def remove(
        self, path: str, recursive: bool = False, cwd: Optional[str] = None
    ) -> FsResult[str]:
        """Remove a file, or a directory and all its descendants.

        Args:
            path: Path expression to remove.
            recursive: Required to remove a directory.
            cwd: Directory relative paths resolve against.

        Returns:
            The removed canonical path on success; NoSuchEntry if missing;
            IsADirectory if the target is a directory and ``recursive`` is
            false; InvalidArgument for the root.
        """
        target = self.resolve(path, cwd)
        entry = self.tree.get(target)
        if entry is None:
            return FsResult.failure(ErrorKind.NO_SUCH_ENTRY, target)
        if target == ROOT:
            return FsResult.failure(
                ErrorKind.INVALID_ARGUMENT, target, "Refusing to remove the root directory"
            )
        if isinstance(entry, DirectoryEntry) and not recursive:
            return FsResult.failure(ErrorKind.IS_A_DIRECTORY, target)

        removed = self._remove_tree(target)
        self._persist()
        logger.debug(f"Removed {target} ({removed} entries)")
        return FsResult.success(target)

    def _remove_tree(self, target: str) -> int:
        descendants = self.tree.iter_descendants(target)
        for descendant in descendants:
            del self.tree.entries[descendant]
        del self.tree.entries[target]

        parent = self.tree.entries[parent_path(target)]
        assert isinstance(parent, DirectoryEntry)
        parent.remove_child(base_name(target))
        return len(descendants) + 1

    def copy(self, src: str, dest: str, cwd: Optional[str] = None) -> FsResult[str]:
        """Copy a file's content to another path.

        Directory copies are not supported.

        Returns:
            The destination path on success; NoSuchEntry if ``src`` is
            missing; IsADirectory if ``src`` is a directory; InvalidArgument
            if both resolve to the same path; otherwise whatever
            ``write_file(dest)`` reports.
        """
        source = self.resolve(src, cwd)
        destination = self.resolve(dest, cwd)

        entry = self.tree.get(source)
        if entry is None:
            return FsResult.failure(ErrorKind.NO_SUCH_ENTRY, source)
        if isinstance(entry, DirectoryEntry):
            return FsResult.failure(
                ErrorKind.IS_A_DIRECTORY, source, "omitting directory"
            )
        if source == destination:
            return FsResult.failure(
                ErrorKind.INVALID_ARGUMENT, source, "source and destination are the same file"
            )

        return self.write_file(destination, entry.content, append=False)

    def move(self, src: str, dest: str, cwd: Optional[str] = None) -> FsResult[str]:
        """Move a file: copy it, then remove the source.

        If the copy fails, the move fails with the same error and the
        source is left untouched.
        """
        copied = self.copy(src, dest, cwd)
        if not copied.ok:
            return copied

        removed = self.remove(src, recursive=False, cwd=cwd)
        if not removed.ok:
            return removed
        return copied

    # ===== Navigation =====

    def change_directory(self, session: SessionContext, path: str) -> FsResult[str]:
        """Change the session's working directory.

        Returns:
            The new canonical directory; NoSuchEntry or NotADirectory.
        """
        target = self.resolve(path, session.current_directory)
        entry = self.tree.get(target)
        if entry is None:
            return FsResult.failure(ErrorKind.NO_SUCH_ENTRY, target)
        if not isinstance(entry, DirectoryEntry):
            return FsResult.failure(ErrorKind.NOT_A_DIRECTORY, target)

        session.current_directory = target
        return FsResult.success(target)

    def print_working_directory(self, session: SessionContext) -> str:
        return session.current_directory

    # ===== Introspection =====

    def disk_usage(self) -> int:
        """Total bytes of file content stored in the tree."""
        return self.tree.total_file_bytes()

    def get_snapshot(self) -> dict[str, Any]:
        return self.tree.get_snapshot()

    def validate_state(self) -> list[str]:
        return self.tree.validate_state()

    list = list_directory
