"""Filesystem entry model - rebuilt from disk on every call, never persisted."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class EntryKind(str, Enum):
    """Kind of scanned filesystem entry."""

    FOLDER = "folder"
    FILE = "file"


@dataclass
class FilesystemEntry:
    """A folder or .sql file found under the snippets root.

    For files, ``name`` has the ``.sql`` extension stripped and ``folder_id``
    references the containing top-level folder (None at root). Folders always
    have ``folder_id`` None and empty ``content``. ``raw`` keeps the file
    bytes so content that is not valid UTF-8 survives a rename or move.
    """

    id: str
    name: str
    kind: EntryKind
    modified_at: datetime
    folder_id: str | None = None
    content: str = ""
    raw: bytes = field(default=b"", repr=False)

    @property
    def is_folder(self) -> bool:
        return self.kind == EntryKind.FOLDER

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE
