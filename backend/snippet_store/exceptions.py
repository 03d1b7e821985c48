"""Errors raised by the snippet store services."""


class SnippetStoreError(Exception):
    """Base error for snippet and folder operations."""
    pass


class NotConfiguredError(SnippetStoreError):
    """No snippets root folder has been configured."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "snippets management folder env var (SNIPPETS_MANAGEMENT_FOLDER) is not set; "
            "set it to use snippets properly"
        )


class StorageIOError(SnippetStoreError):
    """Unexpected filesystem failure while reading or writing the snippets root."""
    pass


class NotFoundError(SnippetStoreError):
    """Requested snippet or folder does not exist."""
    pass


class SnippetNotFoundError(NotFoundError):
    """No snippet file matches the identifier."""

    def __init__(self, snippet_id: str | None = None):
        self.snippet_id = snippet_id
        super().__init__("snippet not found")


class FolderNotFoundError(NotFoundError):
    """No folder matches the identifier."""

    def __init__(self, folder_id: str | None = None):
        self.folder_id = folder_id
        super().__init__("folder not found")


class AlreadyExistsError(SnippetStoreError):
    """An entry with the same identity already exists."""
    pass


class SnippetAlreadyExistsError(AlreadyExistsError):
    def __init__(self, snippet_id: str | None = None):
        self.snippet_id = snippet_id
        super().__init__("snippet already exists")


class FolderAlreadyExistsError(AlreadyExistsError):
    def __init__(self, name: str | None = None):
        self.name = name
        super().__init__("folder already exists")


class ConflictInTargetFolderError(SnippetStoreError):
    """Update would overwrite a different snippet in the target location."""

    def __init__(self, snippet_id: str | None = None):
        self.snippet_id = snippet_id
        super().__init__("snippet already exists in target folder")


class NameRequiredError(SnippetStoreError):
    """Name is empty or was rejected by the sanitizer."""

    def __init__(self, kind: str = "folder"):
        self.kind = kind
        super().__init__(f"{kind} name is required")


class LimitExceededError(SnippetStoreError):
    """Requested page size is above the maximum."""

    def __init__(self, maximum: int = 1000):
        self.maximum = maximum
        super().__init__(f"limit cannot exceed {maximum}")
