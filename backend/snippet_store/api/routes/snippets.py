"""Snippet and folder routes."""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from snippet_store.api.deps import Snippets
from snippet_store.exceptions import (
    AlreadyExistsError,
    ConflictInTargetFolderError,
    LimitExceededError,
    NameRequiredError,
    NotConfiguredError,
    NotFoundError,
    SnippetStoreError,
)
from snippet_store.schemas.snippet import (
    Folder,
    FolderContents,
    FolderContentsResponse,
    FolderCreate,
    Snippet,
    SnippetCountResponse,
    SnippetCreate,
    SnippetPage,
    SnippetUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http(e: SnippetStoreError) -> HTTPException:
    """Map a service error to an HTTP error."""
    if isinstance(e, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(e, (AlreadyExistsError, ConflictInTargetFolderError)):
        code = status.HTTP_409_CONFLICT
    elif isinstance(e, (NameRequiredError, LimitExceededError)):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(e, NotConfiguredError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        logger.error(f"Snippet storage failure: {e}")
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(e))


def _split_ids(ids: str) -> list[str]:
    return [i.strip() for i in ids.split(",") if i.strip()]


@router.get("", response_model=SnippetPage)
def list_snippets(
    service: Snippets,
    name: str | None = None,
    limit: int = 0,
    cursor: str | None = None,
    sort_by: str | None = None,
    sort_order: str = "desc",
    visibility: str | None = None,
):
    """List root-level snippets, or search every folder by name."""
    if visibility == "project":
        # Shared project snippets are not supported by the file store
        return SnippetPage(data=[])
    try:
        return service.list_snippets(name, limit, cursor, sort_by, sort_order)
    except SnippetStoreError as e:
        raise _to_http(e)


@router.put("", response_model=Snippet)
def save_snippet(payload: SnippetCreate, service: Snippets):
    """Update the snippet if its id exists, otherwise create it."""
    try:
        return service.save_snippet(payload)
    except SnippetStoreError as e:
        raise _to_http(e)


@router.delete("")
def delete_snippets(service: Snippets, ids: str = ""):
    """Delete a comma-separated list of snippets."""
    id_list = _split_ids(ids)
    if not id_list:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Snippet IDs are required",
        )
    try:
        for snippet_id in id_list:
            service.delete_snippet(snippet_id)
    except SnippetStoreError as e:
        raise _to_http(e)
    return [{"id": snippet_id} for snippet_id in id_list]


@router.get("/count", response_model=SnippetCountResponse, response_model_exclude_none=True)
def count_snippets(service: Snippets, name: str | None = None):
    """Count snippets."""
    try:
        return SnippetCountResponse(**service.count_snippets(name))
    except SnippetStoreError as e:
        raise _to_http(e)


@router.get("/folders", response_model=FolderContentsResponse)
def list_root(
    service: Snippets,
    name: str | None = None,
    limit: int = 0,
    cursor: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
):
    """List top-level folders together with root-level snippets."""
    try:
        folders = service.list_folders()
        page = service.list_snippets(name, limit, cursor, sort_by, sort_order)
    except SnippetStoreError as e:
        raise _to_http(e)
    return FolderContentsResponse(
        data=FolderContents(folders=folders, contents=page.data),
        cursor=page.cursor,
    )


@router.post("/folders", response_model=Folder, status_code=status.HTTP_201_CREATED)
def create_folder(payload: FolderCreate, service: Snippets):
    """Create a folder."""
    try:
        return service.create_folder(payload.name)
    except SnippetStoreError as e:
        raise _to_http(e)


@router.delete("/folders")
def delete_folders(service: Snippets, ids: str = ""):
    """Delete a comma-separated list of folders and everything in them."""
    id_list = _split_ids(ids)
    if not id_list:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Folder IDs are required",
        )
    try:
        for folder_id in id_list:
            service.delete_folder(folder_id)
    except SnippetStoreError as e:
        raise _to_http(e)
    return {}


@router.get("/folders/{folder_id}", response_model=FolderContentsResponse)
def list_folder(
    folder_id: str,
    service: Snippets,
    name: str | None = None,
    limit: int = 0,
    cursor: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
):
    """List the snippets inside one folder."""
    try:
        folders = service.list_folders(folder_id)
        page = service.list_snippets(name, limit, cursor, sort_by, sort_order, folder_id)
    except SnippetStoreError as e:
        raise _to_http(e)
    return FolderContentsResponse(
        data=FolderContents(folders=folders, contents=page.data),
        cursor=page.cursor,
    )


@router.delete("/folders/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_folder(folder_id: str, service: Snippets):
    """Delete one folder and everything in it."""
    try:
        service.delete_folder(folder_id)
    except SnippetStoreError as e:
        raise _to_http(e)


@router.get("/item/{snippet_id}", response_model=Snippet)
def get_snippet(snippet_id: str, service: Snippets):
    """Get a snippet by id."""
    try:
        return service.get_snippet(snippet_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Content not found.",
        )
    except SnippetStoreError as e:
        raise _to_http(e)


@router.patch("/item/{snippet_id}", response_model=Snippet)
def update_snippet(snippet_id: str, payload: SnippetUpdate, service: Snippets):
    """Apply the fields that were sent to a snippet."""
    try:
        return service.update_snippet(snippet_id, payload.model_dump(exclude_unset=True))
    except SnippetStoreError as e:
        raise _to_http(e)


@router.delete("/item/{snippet_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_snippet(snippet_id: str, service: Snippets):
    """Delete a snippet. Unknown ids are treated as already deleted."""
    try:
        service.delete_snippet(snippet_id)
    except SnippetStoreError as e:
        raise _to_http(e)
