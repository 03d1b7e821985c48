"""Startup creation of the directories the service manages."""

import logging
import os

from snippet_store.config import Settings
from snippet_store.exceptions import StorageIOError

logger = logging.getLogger(__name__)


def ensure_managed_folders(settings: Settings) -> list[str]:
    """Create each configured managed folder. Unset folders are skipped.

    Returns:
        The folders that exist after the call
    """
    created = []
    for folder in (settings.snippets_management_folder,):
        folder = folder.strip()
        if not folder:
            continue
        try:
            os.makedirs(folder, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"create managed folder {folder!r}: {e}") from e
        created.append(folder)
    return created
