"""Exception classes for zotfind."""


class ZotfindError(Exception):
    """Base exception for zotfind errors."""

    pass


class MalformedDateError(ZotfindError, ValueError):
    """Raised when a date or date expression cannot be parsed."""

    def __init__(self, text: str, reason: str = ""):
        """Initialize with the offending text."""
        self.text = text
        message = f"Malformed date: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class LoadError(ZotfindError):
    """Raised when the library index cannot be built from the row source.

    The underlying failure is available as ``__cause__``.
    """

    def __init__(self, stage: str, details: str = ""):
        """Initialize with the load stage that failed."""
        self.stage = stage
        message = f"Failed to load library ({stage})"
        if details:
            message += f": {details}"
        super().__init__(message)


class DanglingAuthorReferenceError(ZotfindError):
    """Raised when an item references a creator that was never loaded."""

    def __init__(self, item_id: int, author_id: int):
        """Initialize with the item and creator ids."""
        self.item_id = item_id
        self.author_id = author_id
        super().__init__(
            f"Item {item_id} references unknown creator {author_id}; "
            "the database snapshot is inconsistent"
        )


class UnexpectedFieldKindError(ZotfindError):
    """Raised when an item field row carries a field id outside 1, 2, 6."""

    def __init__(self, item_id: int, field_id: int):
        """Initialize with the item and field ids."""
        self.item_id = item_id
        self.field_id = field_id
        super().__init__(f"Unexpected field id {field_id} for item {item_id}")


class LaunchError(ZotfindError):
    """Raised when the Zotero application cannot be invoked."""

    def __init__(self, url: str, returncode: int | None = None, details: str = ""):
        """Initialize with the URL and exit status."""
        self.url = url
        self.returncode = returncode
        message = f"Failed to open {url}"
        if returncode is not None:
            message += f": zotero exited with status {returncode}"
        elif details:
            message += f": {details}"
        super().__init__(message)


class SnapshotError(ZotfindError):
    """Raised when the database snapshot cannot be created."""

    def __init__(self, path: str, details: str = ""):
        """Initialize with path and details."""
        self.path = path
        message = f"Cannot snapshot database at {path}"
        if details:
            message += f": {details}"
        super().__init__(message)
