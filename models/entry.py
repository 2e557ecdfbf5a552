"""Entry models stored in the virtual filesystem tree."""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class EntryKind(str, Enum):
    """Kind of a tree entry."""

    DIRECTORY = "directory"
    FILE = "file"


class DirectoryEntry(BaseModel):
    """A directory node.

    Args:
        kind: Always "directory".
        children: Child names (not paths) in insertion order, without duplicates.
    """

    kind: Literal["directory"] = "directory"
    children: list[str] = Field(
        default_factory=list, description="Child names in insertion order"
    )

    def add_child(self, name: str) -> None:
        if name not in self.children:
            self.children.append(name)

    def remove_child(self, name: str) -> None:
        if name in self.children:
            self.children.remove(name)


class FileEntry(BaseModel):
    """A text file node.

    Args:
        kind: Always "file".
        content: Text buffer, empty until first written.
        created_at: When the file was first created.
    """

    kind: Literal["file"] = "file"
    content: str = Field(default="", description="Text buffer")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the file was first created",
    )

    @property
    def size(self) -> int:
        return len(self.content)


Entry = Annotated[Union[DirectoryEntry, FileEntry], Field(discriminator="kind")]


class EntryInfo(BaseModel):
    """Read-only description of an entry, as returned by stat().

    Args:
        name: Last path segment ("/" for the root).
        path: Canonical absolute path.
        kind: Directory or file.
        size: Content length for files, 0 for directories.
        created_at: Creation time for files, None for directories.
        child_count: Number of children for directories, 0 for files.
    """

    name: str
    path: str
    kind: EntryKind
    size: int = 0
    created_at: datetime | None = None
    child_count: int = 0

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY
