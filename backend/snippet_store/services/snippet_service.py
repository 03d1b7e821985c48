"""Snippet and folder repository backed by plain .sql files.

The directory tree under the configured root is the only store: every call
re-scans it, and identifiers are recomputed from names each time. Nothing is
cached between calls.

Known limitations:
- ``update_snippet`` replaces a snippet by deleting the old file and then
  writing the new one. The two steps are not atomic; a crash in between loses
  the snippet.
- There is no cross-call locking. Concurrent updates of the same snippet can
  interleave and lose data (last write wins at the file level).
- ``delete_folder`` removes the directory recursively, so every snippet inside
  it is deleted as well.
"""

import logging
import os
import shutil
from datetime import datetime, timezone
from typing import Any

from snippet_store.exceptions import (
    ConflictInTargetFolderError,
    FolderAlreadyExistsError,
    FolderNotFoundError,
    NameRequiredError,
    NotConfiguredError,
    SnippetAlreadyExistsError,
    SnippetNotFoundError,
    StorageIOError,
)
from snippet_store.models.entry import EntryKind, FilesystemEntry
from snippet_store.schemas.snippet import (
    Folder,
    Snippet,
    SnippetContent,
    SnippetContentIn,
    SnippetCreate,
    SnippetPage,
)
from snippet_store.services.identity_service import (
    SQL_EXTENSION,
    folder_identity,
    snippet_identity,
)
from snippet_store.services.pagination import paginate, resolve_limit, sort_entries
from snippet_store.services.sanitizer import sanitize_name
from snippet_store.services.tree_scanner import scan_tree

logger = logging.getLogger(__name__)


def build_snippet(entry: FilesystemEntry) -> Snippet:
    """Snippet response for a scanned file entry.

    No creation time is tracked, so both timestamps are the file mtime.
    """
    # Second precision, as RFC 3339 timestamps on the wire
    timestamp = entry.modified_at.replace(microsecond=0)
    return Snippet(
        id=entry.id,
        inserted_at=timestamp,
        updated_at=timestamp,
        name=entry.name,
        content=SnippetContent(sql=entry.content),
        folder_id=entry.folder_id,
    )


def build_folder(entry: FilesystemEntry) -> Folder:
    """Folder response for a scanned folder entry."""
    return Folder(id=entry.id, name=entry.name)


def matches_folder(entry_folder_id: str | None, target_folder_id: str | None) -> bool:
    """Exact folder membership; None only matches root-level snippets."""
    return entry_folder_id == target_folder_id


class SnippetService:
    """Service for listing and mutating snippets and folders on disk."""

    def __init__(self, root: str | None):
        self.root = (root or "").strip()

    # ------------------------------------------------------------------
    # Scanning helpers
    # ------------------------------------------------------------------

    def _snippets_dir(self) -> str:
        """Return the root, creating it if needed."""
        if not self.root:
            raise NotConfiguredError()
        try:
            os.makedirs(self.root, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Failed to create snippets folder {self.root}: {e}") from e
        return self.root

    def _entries(self) -> list[FilesystemEntry]:
        return scan_tree(self._snippets_dir())

    @staticmethod
    def _files(entries: list[FilesystemEntry]) -> list[FilesystemEntry]:
        return [e for e in entries if e.is_file]

    @staticmethod
    def _find_file(entries: list[FilesystemEntry], snippet_id: str) -> FilesystemEntry | None:
        for entry in entries:
            if entry.is_file and entry.id == snippet_id:
                return entry
        return None

    @staticmethod
    def _find_folder(entries: list[FilesystemEntry], folder_id: str) -> FilesystemEntry | None:
        for entry in entries:
            if entry.is_folder and entry.id == folder_id:
                return entry
        return None

    def _folder_path(self, root: str, entries: list[FilesystemEntry], folder_id: str | None) -> str:
        if folder_id is None:
            return root
        folder = self._find_folder(entries, folder_id)
        if folder is None:
            raise FolderNotFoundError(folder_id)
        return os.path.join(root, folder.name)

    @staticmethod
    def _filter_files(
        files: list[FilesystemEntry],
        search_term: str | None,
        folder_id: str | None,
    ) -> list[FilesystemEntry]:
        # A search spans every folder and ignores the folder filter
        if search_term:
            needle = search_term.lower()
            return [f for f in files if needle in f.name.lower()]
        return [f for f in files if matches_folder(f.folder_id, folder_id)]

    # ------------------------------------------------------------------
    # Snippets
    # ------------------------------------------------------------------

    def list_snippets(
        self,
        search_term: str | None = None,
        limit: int = 0,
        cursor: str | None = None,
        sort_field: str | None = None,
        sort_order: str | None = None,
        folder_id: str | None = None,
    ) -> SnippetPage:
        """List one page of snippets.

        Args:
            search_term: Case-insensitive substring of the name; when set,
                ``folder_id`` is ignored and all folders are searched
            limit: Page size, 100 when <= 0, at most 1000
            cursor: Id of the last item of the previous page; unknown
                cursors restart from the first page
            sort_field: "name" or anything else for modification time
            sort_order: "desc" to reverse, anything else ascending
            folder_id: Folder to list, None for root-level snippets

        Returns:
            SnippetPage with the next cursor when more items remain

        Raises:
            LimitExceededError: If limit is above 1000
        """
        files = self._files(self._entries())
        filtered = self._filter_files(files, search_term, folder_id)
        ordered = sort_entries(filtered, sort_field, sort_order)
        page_size = resolve_limit(limit)
        next_cursor, page = paginate(ordered, page_size, cursor)
        return SnippetPage(data=[build_snippet(e) for e in page], cursor=next_cursor)

    def count_snippets(self, search_term: str | None = None) -> dict[str, int]:
        """Count snippets matching a search term, or by category without one."""
        files = self._files(self._entries())
        if search_term:
            return {"count": len(self._filter_files(files, search_term, None))}
        # File-backed snippets are always private and never favorites
        return {"shared": 0, "favorites": 0, "private": len(files)}

    def get_snippet(self, snippet_id: str) -> Snippet:
        """Get a snippet by id."""
        entry = self._find_file(self._entries(), snippet_id)
        if entry is None:
            raise SnippetNotFoundError(snippet_id)
        return build_snippet(entry)

    def create_snippet(self, data: SnippetCreate) -> Snippet:
        """Write a new snippet file.

        The returned timestamps come from the written file, not the request.

        Raises:
            NameRequiredError: If the name is empty or unsafe
            SnippetAlreadyExistsError: If the name is taken in that folder
            FolderNotFoundError: If folder_id names no existing folder
        """
        return self._write_snippet(data.name, data.folder_id, data.content.sql.encode("utf-8"))

    def _write_snippet(self, raw_name: str, folder_id: str | None, raw: bytes) -> Snippet:
        """Write ``raw`` as a new snippet file, byte for byte."""
        name = sanitize_name(raw_name)
        if not name:
            raise NameRequiredError("snippet")

        root = self._snippets_dir()
        entries = scan_tree(root)

        new_id = snippet_identity(name, folder_id)
        if self._find_file(entries, new_id) is not None:
            raise SnippetAlreadyExistsError(new_id)

        folder_path = self._folder_path(root, entries, folder_id)
        file_path = os.path.join(folder_path, name + SQL_EXTENSION)
        try:
            with open(file_path, "wb") as f:
                f.write(raw)
            st = os.stat(file_path)
        except OSError as e:
            raise StorageIOError(f"Failed to write snippet {file_path}: {e}") from e

        logger.info(f"Created snippet {new_id} at {file_path}")
        return build_snippet(
            FilesystemEntry(
                id=new_id,
                name=name,
                kind=EntryKind.FILE,
                modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                folder_id=folder_id,
                content=raw.decode("utf-8", errors="replace"),
                raw=raw,
            )
        )

    def update_snippet(self, snippet_id: str, fields: dict[str, Any]) -> Snippet:
        """Rename, move or rewrite a snippet.

        ``fields`` may hold ``name`` (ignored when empty), ``folder_id``
        (None or "" moves to root) and ``content`` as ``{"sql": ...}``.
        The target name and folder are validated before anything is removed;
        the replace itself is delete-then-create and not atomic.

        Raises:
            SnippetNotFoundError: If no snippet has this id
            NameRequiredError: If the merged name is unsafe
            FolderNotFoundError: If the target folder does not exist
            ConflictInTargetFolderError: If another snippet owns the new identity
        """
        entries = self._entries()
        found = self._find_file(entries, snippet_id)
        if found is None:
            raise SnippetNotFoundError(snippet_id)

        name = found.name
        new_name = fields.get("name")
        if isinstance(new_name, str) and new_name:
            name = new_name

        folder_id = found.folder_id
        if "folder_id" in fields:
            new_folder = fields["folder_id"]
            if new_folder is None or new_folder == "":
                folder_id = None
            elif isinstance(new_folder, str):
                folder_id = new_folder

        # Unchanged content is carried over as the exact file bytes
        raw = found.raw
        new_content = fields.get("content")
        if isinstance(new_content, SnippetContentIn):
            raw = new_content.sql.encode("utf-8")
        elif isinstance(new_content, dict) and isinstance(new_content.get("sql"), str):
            raw = new_content["sql"].encode("utf-8")

        safe_name = sanitize_name(name)
        if not safe_name:
            raise NameRequiredError("snippet")
        if folder_id is not None and self._find_folder(entries, folder_id) is None:
            raise FolderNotFoundError(folder_id)

        new_id = snippet_identity(safe_name, folder_id)
        for entry in entries:
            if entry.is_file and entry.id == new_id and entry.id != found.id:
                raise ConflictInTargetFolderError(new_id)

        self.delete_snippet(found.id, missing_ok=False)
        if new_id != found.id:
            logger.info(f"Moving snippet {found.id} to {new_id}")
        return self._write_snippet(safe_name, folder_id, raw)

    def save_snippet(self, data: SnippetCreate) -> Snippet:
        """Update the snippet with ``data.id`` if it exists, otherwise create it."""
        if data.id:
            fields = data.model_dump(exclude_unset=True, exclude={"id"})
            try:
                return self.update_snippet(data.id, fields)
            except SnippetNotFoundError:
                logger.debug(f"Snippet {data.id} not found, creating it")
        return self.create_snippet(data)

    def delete_snippet(self, snippet_id: str, missing_ok: bool = True) -> None:
        """Delete a snippet file.

        Deleting is idempotent: an unknown id or a file that is already gone
        counts as success unless ``missing_ok`` is False, in which case an
        unknown id raises SnippetNotFoundError.
        """
        root = self._snippets_dir()
        entries = scan_tree(root)
        target = self._find_file(entries, snippet_id)
        if target is None:
            if missing_ok:
                return
            raise SnippetNotFoundError(snippet_id)

        folder_path = root
        if target.folder_id is not None:
            folder = self._find_folder(entries, target.folder_id)
            if folder is not None:
                folder_path = os.path.join(root, folder.name)

        file_path = os.path.join(folder_path, target.name + SQL_EXTENSION)
        try:
            os.remove(file_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageIOError(f"Failed to delete snippet {file_path}: {e}") from e
        logger.info(f"Deleted snippet {snippet_id}")

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    def list_folders(self, parent_id: str | None = None) -> list[Folder]:
        """List top-level folders.

        Folders never nest, so any non-null ``parent_id`` has no children.
        """
        entries = self._entries()
        if parent_id is not None:
            return []
        return [build_folder(e) for e in entries if e.is_folder]

    def create_folder(self, name: str) -> Folder:
        """Create a top-level folder.

        Raises:
            NameRequiredError: If the name is empty or unsafe
            FolderAlreadyExistsError: If a folder with that name exists
        """
        root = self._snippets_dir()
        safe_name = sanitize_name(name)
        if not safe_name:
            raise NameRequiredError("folder")

        for entry in scan_tree(root):
            if entry.is_folder and entry.name == safe_name:
                raise FolderAlreadyExistsError(safe_name)

        folder_path = os.path.join(root, safe_name)
        try:
            os.makedirs(folder_path, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Failed to create folder {folder_path}: {e}") from e

        logger.info(f"Created folder {safe_name}")
        return Folder(id=folder_identity(safe_name), name=safe_name)

    def delete_folder(self, folder_id: str) -> None:
        """Delete a folder and, recursively, every snippet inside it."""
        root = self._snippets_dir()
        target = self._find_folder(scan_tree(root), folder_id)
        if target is None:
            raise FolderNotFoundError(folder_id)

        folder_path = os.path.join(root, target.name)
        try:
            shutil.rmtree(folder_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageIOError(f"Failed to delete folder {folder_path}: {e}") from e
        logger.info(f"Deleted folder {target.name} ({folder_id})")
