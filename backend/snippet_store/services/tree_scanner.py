"""Depth-limited scan of the snippets root into filesystem entries."""

import logging
import os
import stat
from datetime import datetime, timezone

from snippet_store.exceptions import StorageIOError
from snippet_store.models.entry import EntryKind, FilesystemEntry
from snippet_store.services.identity_service import (
    SQL_EXTENSION,
    folder_identity,
    snippet_identity,
)

logger = logging.getLogger(__name__)

# Finder metadata and AppleDouble resource forks
IGNORED_FILES = {".DS_Store"}
IGNORED_PREFIXES = ("._",)


def _modified_at(st: os.stat_result) -> datetime:
    return datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)


def _is_snippet_file(filename: str) -> bool:
    if filename in IGNORED_FILES or filename.startswith(IGNORED_PREFIXES):
        return False
    return filename.endswith(SQL_EXTENSION)


def _is_valid_name(name: str) -> bool:
    # Names that are not valid UTF-8 come back with surrogate escapes
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _list_sorted(path: str) -> list[str]:
    try:
        names = os.listdir(path)
    except FileNotFoundError:
        return []
    except OSError as e:
        raise StorageIOError(f"Failed to list {path}: {e}") from e

    valid = []
    for name in names:
        if not _is_valid_name(name):
            logger.warning(f"Skipping entry with non UTF-8 name in {path}: {name!r}")
            continue
        valid.append(name)
    return sorted(valid)


def _lstat(path: str) -> os.stat_result | None:
    try:
        return os.lstat(path)
    except FileNotFoundError:
        return None
    except OSError as e:
        raise StorageIOError(f"Failed to stat {path}: {e}") from e


def _read_snippet(path: str, filename: str, folder_id: str | None) -> FilesystemEntry | None:
    """Load one .sql file, or None if it disappeared mid-scan."""
    try:
        with open(path, "rb") as f:
            raw = f.read()
        st = os.stat(path)
    except (FileNotFoundError, IsADirectoryError):
        return None
    except OSError as e:
        raise StorageIOError(f"Failed to read {path}: {e}") from e

    name = filename[: -len(SQL_EXTENSION)]
    return FilesystemEntry(
        id=snippet_identity(name, folder_id),
        name=name,
        kind=EntryKind.FILE,
        modified_at=_modified_at(st),
        folder_id=folder_id,
        content=raw.decode("utf-8", errors="replace"),
        raw=raw,
    )


def _scan_folder(folder_path: str, folder_id: str) -> list[FilesystemEntry]:
    entries = []
    for filename in _list_sorted(folder_path):
        path = os.path.join(folder_path, filename)
        st = _lstat(path)
        # Anything nested deeper than one folder level is skipped entirely
        if st is None or stat.S_ISDIR(st.st_mode):
            continue
        if not _is_snippet_file(filename):
            continue
        entry = _read_snippet(path, filename, folder_id)
        if entry is not None:
            entries.append(entry)
    return entries


def scan_tree(root: str) -> list[FilesystemEntry]:
    """Walk ``root`` once and return its folders and snippets.

    Entries come back in lexical walk order: each folder is immediately
    followed by the snippets it contains. The root must already exist.

    Raises:
        StorageIOError: On any filesystem error other than an entry vanishing
            while the scan is in progress.
    """
    entries: list[FilesystemEntry] = []
    for name in _list_sorted(root):
        path = os.path.join(root, name)
        st = _lstat(path)
        if st is None:
            continue

        if stat.S_ISDIR(st.st_mode):
            folder_id = folder_identity(name)
            entries.append(
                FilesystemEntry(
                    id=folder_id,
                    name=name,
                    kind=EntryKind.FOLDER,
                    modified_at=_modified_at(st),
                )
            )
            entries.extend(_scan_folder(path, folder_id))
            continue

        if not _is_snippet_file(name):
            continue
        entry = _read_snippet(path, name, None)
        if entry is not None:
            entries.append(entry)

    logger.debug(f"Scanned {root}: {len(entries)} entries")
    return entries
