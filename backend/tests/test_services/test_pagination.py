"""Tests for sorting and cursor pagination."""

from datetime import datetime, timedelta, timezone

import pytest

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_entry(name: str, minutes: int = 0):
    from snippet_store.models.entry import EntryKind, FilesystemEntry

    return FilesystemEntry(
        id=f"id-{name}",
        name=name,
        kind=EntryKind.FILE,
        modified_at=BASE_TIME + timedelta(minutes=minutes),
    )


class TestResolveLimit:
    """Test resolve_limit."""

    @pytest.mark.parametrize("limit", [None, 0, -5])
    def test_default(self, limit):
        """Non-positive limits fall back to 100."""
        from snippet_store.services.pagination import DEFAULT_LIMIT, resolve_limit

        assert resolve_limit(limit) == DEFAULT_LIMIT == 100

    def test_max_allowed(self):
        """1000 is accepted."""
        from snippet_store.services.pagination import resolve_limit

        assert resolve_limit(1000) == 1000

    def test_above_max(self):
        """1001 is rejected."""
        from snippet_store.exceptions import LimitExceededError
        from snippet_store.services.pagination import resolve_limit

        with pytest.raises(LimitExceededError):
            resolve_limit(1001)


class TestSortEntries:
    """Test sort_entries."""

    def test_by_name_case_insensitive(self):
        """Name sort ignores case."""
        from snippet_store.services.pagination import sort_entries

        entries = [make_entry("beta"), make_entry("Alpha"), make_entry("gamma")]

        result = sort_entries(entries, "name", "asc")

        assert [e.name for e in result] == ["Alpha", "beta", "gamma"]

    def test_by_name_desc(self):
        """desc reverses the name order."""
        from snippet_store.services.pagination import sort_entries

        entries = [make_entry("beta"), make_entry("Alpha"), make_entry("gamma")]

        result = sort_entries(entries, "name", "desc")

        assert [e.name for e in result] == ["gamma", "beta", "Alpha"]

    def test_default_is_modification_time(self):
        """Any other field sorts by modification time ascending."""
        from snippet_store.services.pagination import sort_entries

        entries = [make_entry("c", 3), make_entry("a", 1), make_entry("b", 2)]

        assert [e.name for e in sort_entries(entries, None, None)] == ["a", "b", "c"]
        assert [e.name for e in sort_entries(entries, "inserted_at", "asc")] == ["a", "b", "c"]

    def test_modification_time_desc(self):
        """desc returns newest first."""
        from snippet_store.services.pagination import sort_entries

        entries = [make_entry("c", 3), make_entry("a", 1), make_entry("b", 2)]

        assert [e.name for e in sort_entries(entries, None, "desc")] == ["c", "b", "a"]

    def test_stable_for_ties(self):
        """Equal keys keep scan order; desc reverses the whole list."""
        from snippet_store.services.pagination import sort_entries

        entries = [make_entry("x"), make_entry("y"), make_entry("z")]

        assert [e.name for e in sort_entries(entries, None, "asc")] == ["x", "y", "z"]
        assert [e.name for e in sort_entries(entries, None, "desc")] == ["z", "y", "x"]

    def test_does_not_mutate_input(self):
        """Input list is left untouched."""
        from snippet_store.services.pagination import sort_entries

        entries = [make_entry("b"), make_entry("a")]
        sort_entries(entries, "name", "desc")

        assert [e.name for e in entries] == ["b", "a"]


class TestPaginate:
    """Test paginate."""

    @pytest.fixture
    def entries(self):
        return [make_entry(n) for n in "abcde"]

    def test_first_page(self, entries):
        """First page returns a cursor to its last item."""
        from snippet_store.services.pagination import paginate

        cursor, page = paginate(entries, 2)

        assert [e.name for e in page] == ["a", "b"]
        assert cursor == "id-b"

    def test_next_page_after_cursor(self, entries):
        """Page starts right after the cursor entry."""
        from snippet_store.services.pagination import paginate

        cursor, page = paginate(entries, 2, "id-b")

        assert [e.name for e in page] == ["c", "d"]
        assert cursor == "id-d"

    def test_last_page_has_no_cursor(self, entries):
        """No cursor when nothing remains."""
        from snippet_store.services.pagination import paginate

        cursor, page = paginate(entries, 2, "id-d")

        assert [e.name for e in page] == ["e"]
        assert cursor is None

    def test_exact_fit_has_no_cursor(self, entries):
        """A page that takes the remainder exactly has no cursor."""
        from snippet_store.services.pagination import paginate

        cursor, page = paginate(entries, 5)

        assert len(page) == 5
        assert cursor is None

    def test_unknown_cursor_starts_over(self, entries):
        """Unknown cursors are treated as the first page."""
        from snippet_store.services.pagination import paginate

        cursor, page = paginate(entries, 2, "does-not-exist")

        assert [e.name for e in page] == ["a", "b"]
        assert cursor == "id-b"

    def test_cursor_on_last_item(self, entries):
        """Cursor on the last entry yields an empty page."""
        from snippet_store.services.pagination import paginate

        cursor, page = paginate(entries, 2, "id-e")

        assert page == []
        assert cursor is None

    def test_walking_all_pages(self, entries):
        """Following cursors visits every entry once."""
        from snippet_store.services.pagination import paginate

        seen = []
        cursor = None
        while True:
            cursor, page = paginate(entries, 2, cursor)
            seen.extend(e.name for e in page)
            if cursor is None:
                break

        assert seen == list("abcde")
