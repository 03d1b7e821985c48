"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

SAMPLE_SQL_SIMPLE = "select 1;"

SAMPLE_SQL_QUERY = """
select id, email
from auth.users
where created_at > now() - interval '7 days'
order by created_at desc;
"""

SAMPLE_SQL_CRLF = "select 1;\r\nselect 2;\r\n"


def write_sql(path, content: str = SAMPLE_SQL_SIMPLE, mtime: float | None = None):
    """Write a .sql file, optionally pinning its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def snippets_root(tmp_path):
    """Empty snippets root directory."""
    root = tmp_path / "snippets"
    root.mkdir()
    return root


@pytest.fixture
def service(snippets_root):
    """SnippetService bound to the temporary root."""
    from snippet_store.services.snippet_service import SnippetService

    return SnippetService(str(snippets_root))


@pytest.fixture
def client(service):
    """Test client whose snippet endpoints use the temporary root."""
    from snippet_store.api.deps import get_snippet_service
    from snippet_store.main import app

    app.dependency_overrides[get_snippet_service] = lambda: service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_sql_query():
    """Multi-line query sample."""
    return SAMPLE_SQL_QUERY


@pytest.fixture
def sample_sql_crlf():
    """Query with Windows line endings."""
    return SAMPLE_SQL_CRLF


@pytest.fixture
def sql_file():
    """Helper that writes .sql files with an optional pinned mtime."""
    return write_sql


def write_raw_named(directory, raw_name: bytes, content: bytes = b"select 1;"):
    """Create a file whose name is raw bytes, skipping where the filesystem refuses."""
    path = os.path.join(os.fsencode(str(directory)), raw_name)
    try:
        with open(path, "wb") as f:
            f.write(content)
    except OSError:
        pytest.skip("filesystem rejects non UTF-8 file names")
    return path


@pytest.fixture
def raw_named_file():
    """Helper that writes files with byte-string names."""
    return write_raw_named
