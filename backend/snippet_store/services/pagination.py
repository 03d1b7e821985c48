"""Stable ordering and cursor pagination over scanned entries."""

from snippet_store.exceptions import LimitExceededError
from snippet_store.models.entry import FilesystemEntry

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000


def resolve_limit(limit: int | None) -> int:
    """Apply the default page size and enforce the maximum."""
    if limit is None or limit <= 0:
        return DEFAULT_LIMIT
    if limit > MAX_LIMIT:
        raise LimitExceededError(MAX_LIMIT)
    return limit


def sort_entries(
    entries: list[FilesystemEntry],
    sort_field: str | None = None,
    sort_order: str | None = None,
) -> list[FilesystemEntry]:
    """Return a stably sorted copy of ``entries``.

    ``sort_field == "name"`` orders by lower-cased name, anything else by
    modification time ascending. ``sort_order == "desc"`` reverses the result
    as a whole, so ties come back in reverse scan order.
    """
    if sort_field == "name":
        ordered = sorted(entries, key=lambda e: e.name.lower())
    else:
        ordered = sorted(entries, key=lambda e: e.modified_at)
    if sort_order == "desc":
        ordered.reverse()
    return ordered


def paginate(
    entries: list[FilesystemEntry],
    limit: int,
    cursor: str | None = None,
) -> tuple[str | None, list[FilesystemEntry]]:
    """Slice one page out of already sorted entries.

    The page starts right after the entry whose id equals ``cursor``; an
    unknown cursor starts from the first entry. When entries remain past the
    page, the id of the last returned entry is the next cursor.
    """
    start = 0
    if cursor:
        for idx, entry in enumerate(entries):
            if entry.id == cursor:
                start = idx + 1
                break

    remaining = entries[start:]
    if len(remaining) > limit:
        page = remaining[:limit]
        return page[-1].id, page
    return None, remaining
