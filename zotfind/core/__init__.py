"""Core models, date handling and exceptions."""

from .dates import (
    DateRange,
    matches,
    parse_date,
    parse_date_expr,
    parse_stored_date,
    parse_year_expr,
)
from .exceptions import (
    DanglingAuthorReferenceError,
    LaunchError,
    LoadError,
    MalformedDateError,
    SnapshotError,
    UnexpectedFieldKindError,
    ZotfindError,
)
from .models import Attachment, Author, AuthorOrder, FieldKind, Item, PartialDate

__all__ = [
    # Models
    "Attachment",
    "Author",
    "AuthorOrder",
    "FieldKind",
    "Item",
    "PartialDate",
    # Dates
    "DateRange",
    "matches",
    "parse_date",
    "parse_date_expr",
    "parse_stored_date",
    "parse_year_expr",
    # Exceptions
    "ZotfindError",
    "MalformedDateError",
    "LoadError",
    "DanglingAuthorReferenceError",
    "UnexpectedFieldKindError",
    "LaunchError",
    "SnapshotError",
]
