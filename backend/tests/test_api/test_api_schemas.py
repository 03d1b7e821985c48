"""Tests for snippet and folder schemas."""

import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from snippet_store.schemas.snippet import (
    Folder,
    FolderContentsResponse,
    Snippet,
    SnippetContent,
    SnippetCreate,
    SnippetUpdate,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestSnippetSchema:
    """Test Snippet response schema."""

    def test_wire_shape(self):
        """Serializes with the platform field names."""
        snippet = Snippet(
            id="abc",
            inserted_at=NOW,
            updated_at=NOW,
            name="daily",
            content=SnippetContent(sql="select 1"),
        )
        data = snippet.model_dump(mode="json")

        assert data["type"] == "sql"
        assert data["visibility"] == "user"
        assert data["folder_id"] is None
        assert data["project_id"] == 1
        assert data["owner"] == {"id": 1, "username": "johndoe"}
        assert data["content"]["sql"] == "select 1"
        assert data["content"]["schema_version"] == "1.0"
        assert data["inserted_at"].startswith("2024-05-01T12:00:00")

    def test_content_id_is_fresh(self):
        """Each content body gets its own content id."""
        first = SnippetContent(sql="x")
        second = SnippetContent(sql="x")

        uuid.UUID(first.content_id)
        assert first.content_id != second.content_id

    def test_requires_timestamps(self):
        """Timestamps are required."""
        with pytest.raises(ValidationError):
            Snippet(id="abc", name="x", content=SnippetContent())


class TestRequestSchemas:
    """Test request schemas."""

    def test_create_defaults(self):
        """Create accepts a bare payload."""
        payload = SnippetCreate.model_validate({"name": "q"})

        assert payload.id is None
        assert payload.content.sql == ""
        assert payload.folder_id is None

    def test_update_tracks_sent_fields(self):
        """Only sent fields are dumped."""
        payload = SnippetUpdate.model_validate({"folder_id": None})

        assert payload.model_dump(exclude_unset=True) == {"folder_id": None}

    def test_update_content_dump(self):
        """Content dumps as a mapping with sql."""
        payload = SnippetUpdate.model_validate({"content": {"sql": "select 2"}})

        assert payload.model_dump(exclude_unset=True) == {"content": {"sql": "select 2"}}


class TestFolderSchemas:
    """Test folder schemas."""

    def test_folder_defaults(self):
        """Folders are always top level."""
        folder = Folder(id="f", name="reports")

        assert folder.parent_id is None
        assert folder.owner_id == 1

    def test_contents_response(self):
        """Contents response nests folders and snippets under data."""
        response = FolderContentsResponse.model_validate(
            {"data": {"folders": [{"id": "f", "name": "n"}], "contents": []}}
        )

        assert response.data.folders[0].name == "n"
        assert response.cursor is None
