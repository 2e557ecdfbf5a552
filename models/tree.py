"""Tree model - the flat path -> entry mapping behind the virtual filesystem."""

from typing import Any

from pydantic import BaseModel, Field, TypeAdapter

from models.entry import DirectoryEntry, Entry, FileEntry
from models.paths import DEFAULT_HOME, ROOT, base_name, join_path, parent_path

EntryMap = dict[str, Entry]

_entry_map_adapter: TypeAdapter[EntryMap] = TypeAdapter(EntryMap)

DEFAULT_ROOT_DIRECTORIES = ["home", "etc", "var", "tmp"]
DEFAULT_HOME_DIRECTORIES = ["Desktop", "Documents", "Downloads"]


class FileSystemTree(BaseModel):
    """Container for every entry of the virtual filesystem.

    Entries are keyed by canonical absolute path. Directory entries list their
    children by name, so the parent/child relationship is stored twice (in the
    key and in the parent's ``children``) and must be kept consistent by the
    filesystem store. ``validate_state`` reports any drift.

    Args:
        entries: Mapping of canonical path to entry.

    Example:
        >>> tree = FileSystemTree.default_layout()
        >>> tree.get("/home/user").children
        ['Desktop', 'Documents', 'Downloads']
    """

    entries: EntryMap = Field(
        default_factory=dict, description="Mapping of canonical path to entry"
    )

    @classmethod
    def default_layout(cls, home: str = DEFAULT_HOME) -> "FileSystemTree":
        """Materialize the layout used when no snapshot can be loaded.

        Creates ``/`` with ``home``, ``etc``, ``var`` and ``tmp``, then the home
        directory (``/home/user`` unless configured otherwise) with
        ``Desktop``, ``Documents`` and ``Downloads``.

        Args:
            home: Canonical home directory.

        Returns:
            A fresh tree satisfying every invariant.
        """
        tree = cls(entries={ROOT: DirectoryEntry()})
        for name in DEFAULT_ROOT_DIRECTORIES:
            tree._add_directory(join_path(ROOT, name))

        # Intermediate directories for a configured home outside /home
        segments = [s for s in home.split("/") if s]
        current = ROOT
        for segment in segments:
            current = join_path(current, segment)
            if current not in tree.entries:
                tree._add_directory(current)

        for name in DEFAULT_HOME_DIRECTORIES:
            tree._add_directory(join_path(home, name))
        return tree

    def _add_directory(self, path: str) -> None:
        self.entries[path] = DirectoryEntry()
        parent = self.entries[parent_path(path)]
        assert isinstance(parent, DirectoryEntry)
        parent.add_child(base_name(path))

    def get(self, path: str) -> Entry | None:
        return self.entries.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def iter_descendants(self, path: str) -> list[str]:
        """Return the paths below ``path`` in depth-first, children-first order.

        Walks ``children`` lists rather than key prefixes so that the result
        follows the same links removal must unlink.
        """
        result: list[str] = []
        entry = self.entries.get(path)
        if not isinstance(entry, DirectoryEntry):
            return result
        for name in entry.children:
            child = join_path(path, name)
            result.extend(self.iter_descendants(child))
            if child in self.entries:
                result.append(child)
        return result

    def total_file_bytes(self) -> int:
        return sum(
            entry.size for entry in self.entries.values() if isinstance(entry, FileEntry)
        )

    def validate_state(self) -> list[str]:
        """Validate tree consistency and return any issues.

        Checks for:
        - Root presence and kind
        - Every non-root entry has a directory parent listing its name
        - No duplicate names within a directory
        - Every listed child name maps to an existing entry

        Returns:
            List of validation error messages (empty list if valid).
        """
        issues = []

        root = self.entries.get(ROOT)
        if root is None:
            issues.append("Root directory '/' is missing")
        elif not isinstance(root, DirectoryEntry):
            issues.append("Root '/' is not a directory")

        for path, entry in self.entries.items():
            if path != ROOT:
                if not path.startswith("/") or path.endswith("/"):
                    issues.append(f"Path '{path}' is not canonical")
                parent = self.entries.get(parent_path(path))
                if parent is None:
                    issues.append(f"Parent of '{path}' does not exist")
                elif not isinstance(parent, DirectoryEntry):
                    issues.append(f"Parent of '{path}' is not a directory")
                elif parent.children.count(base_name(path)) != 1:
                    issues.append(
                        f"'{base_name(path)}' appears "
                        f"{parent.children.count(base_name(path))} times in "
                        f"'{parent_path(path)}' children"
                    )

            if isinstance(entry, DirectoryEntry):
                if len(set(entry.children)) != len(entry.children):
                    issues.append(f"Directory '{path}' has duplicate children")
                for name in entry.children:
                    if join_path(path, name) not in self.entries:
                        issues.append(
                            f"Child '{name}' of '{path}' has no entry"
                        )

        return issues

    def get_snapshot(self) -> dict[str, Any]:
        """Return the full mapping as JSON-compatible data."""
        return _entry_map_adapter.dump_python(self.entries, mode="json")

    def to_json(self) -> str:
        return _entry_map_adapter.dump_json(self.entries).decode("utf-8")

    @classmethod
    def from_json(cls, payload: str | bytes) -> "FileSystemTree":
        """Rebuild a tree from a serialized snapshot.

        Raises:
            pydantic.ValidationError: If the payload is not a valid snapshot.
        """
        return cls(entries=_entry_map_adapter.validate_json(payload))

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> "FileSystemTree":
        return cls(entries=_entry_map_adapter.validate_python(data))
