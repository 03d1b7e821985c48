"""Snippet and folder schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

# Snippets are local files with a single implicit owner
DEFAULT_OWNER_ID = 1
DEFAULT_OWNER_USERNAME = "johndoe"
DEFAULT_PROJECT_ID = 1
SCHEMA_VERSION = "1.0"


class SnippetUser(BaseModel):
    """Owner / last editor of a snippet."""

    id: int = DEFAULT_OWNER_ID
    username: str = DEFAULT_OWNER_USERNAME


class SnippetContent(BaseModel):
    """SQL body of a snippet."""

    sql: str = ""
    content_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    schema_version: str = SCHEMA_VERSION


class Snippet(BaseModel):
    """Snippet response schema, one per .sql file."""

    id: str
    inserted_at: datetime
    updated_at: datetime
    type: str = "sql"
    name: str
    description: str = ""
    favorite: bool = False
    content: SnippetContent
    visibility: str = "user"
    project_id: int = DEFAULT_PROJECT_ID
    folder_id: str | None = None
    owner_id: int = DEFAULT_OWNER_ID
    owner: SnippetUser = Field(default_factory=SnippetUser)
    updated_by: SnippetUser = Field(default_factory=SnippetUser)


class Folder(BaseModel):
    """Folder response schema, one per top-level directory."""

    id: str
    name: str
    owner_id: int = DEFAULT_OWNER_ID
    parent_id: str | None = None
    project_id: int = DEFAULT_PROJECT_ID


class SnippetContentIn(BaseModel):
    """SQL body accepted on create/update."""

    sql: str = ""


class SnippetCreate(BaseModel):
    """Schema for creating or replacing a snippet."""

    id: str | None = None
    name: str = ""
    content: SnippetContentIn = Field(default_factory=SnippetContentIn)
    folder_id: str | None = None


class SnippetUpdate(BaseModel):
    """Partial update; only fields that are sent are applied."""

    name: str | None = None
    content: SnippetContentIn | None = None
    folder_id: str | None = None


class FolderCreate(BaseModel):
    """Schema for creating a folder."""

    name: str = ""


class SnippetPage(BaseModel):
    """One page of snippets with the cursor for the next page."""

    data: list[Snippet]
    cursor: str | None = None


class FolderContents(BaseModel):
    """Folders and snippets at one level of the tree."""

    folders: list[Folder]
    contents: list[Snippet]


class FolderContentsResponse(BaseModel):
    """Folder listing response."""

    data: FolderContents
    cursor: str | None = None


class SnippetCountResponse(BaseModel):
    """Snippet counters."""

    count: int | None = None
    shared: int | None = None
    favorites: int | None = None
    private: int | None = None
