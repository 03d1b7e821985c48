"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from snippet_store.config import Settings, get_settings
from snippet_store.services.snippet_service import SnippetService


def get_snippet_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> SnippetService:
    """Repository bound to the configured snippets root."""
    return SnippetService(settings.snippets_management_folder)


# Type aliases for cleaner signatures
Snippets = Annotated[SnippetService, Depends(get_snippet_service)]
