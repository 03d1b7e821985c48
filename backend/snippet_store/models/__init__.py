"""In-memory models rebuilt from the snippets tree on every call."""

from snippet_store.models.entry import EntryKind, FilesystemEntry

__all__ = [
    "EntryKind",
    "FilesystemEntry",
]
