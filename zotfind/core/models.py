"""Core data models for library items.

This module defines the immutable structures the library index is built
from. They mirror the parts of the Zotero schema zotfind reads: items with
a handful of fields, creators (authors) and their byline order, and PDF
attachments stored under the Zotero data directory.

Key components:
- Author: Creator identity (first and last name)
- PartialDate: Date known to year, month or day precision
- Item: One bibliographic entry with title, abstract and dates
- AuthorOrder: Position of a creator on one item's byline
- Attachment: A file attached to an item
"""

import enum
from pathlib import Path

import msgspec

DEFAULT_TITLE = "No Title"
DEFAULT_ABSTRACT = "No Abstract"

STORAGE_PREFIX = "storage:"


class FieldKind(enum.IntEnum):
    """Zotero field ids read into an Item."""

    TITLE = 1
    ABSTRACT = 2
    DATE = 6


class Author(msgspec.Struct, frozen=True, kw_only=True):
    """A creator as stored in the library."""

    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        """Name in 'Last, First' order, omitting a missing first name."""
        if self.first_name:
            return f"{self.last_name}, {self.first_name}"
        return self.last_name


class PartialDate(msgspec.Struct, frozen=True):
    """A date known only to year, year and month, or the full day.

    Missing components are None. A literal 0 (as Zotero stores unknown
    months and days) is preserved here and treated as missing by the
    date comparator.
    """

    year: int
    month: int | None = None
    day: int | None = None

    def __str__(self) -> str:
        text = f"{self.year:04d}"
        if self.month:
            text += f"-{self.month:02d}"
            if self.day:
                text += f"-{self.day:02d}"
        return text


class Item(msgspec.Struct, frozen=True, kw_only=True):
    """A single bibliographic item in the library."""

    id: int
    key: str
    title: str = DEFAULT_TITLE
    abstract: str = DEFAULT_ABSTRACT
    publication_date: PartialDate | None = None
    added_date: PartialDate | None = None

    @property
    def year(self) -> int | None:
        """Publication year, if the item has a date."""
        if self.publication_date is None:
            return None
        return self.publication_date.year


class AuthorOrder(msgspec.Struct, frozen=True):
    """Byline position of one creator on one item. Position 0 is first."""

    author_id: int
    position: int


class Attachment(msgspec.Struct, frozen=True, kw_only=True):
    """A PDF attached to an item."""

    item_id: int
    key: str
    path: str | None = None

    def resolve(self, data_dir: Path) -> Path | None:
        """Resolve the stored path to a file on disk.

        Files imported into Zotero are stored as ``storage:<name>`` and live
        in ``<data_dir>/storage/<key>/<name>``. Linked files keep their
        original path.

        Args:
            data_dir: Zotero data directory

        Returns:
            Path to the attachment file, or None when the attachment has
            no file path (e.g. linked URLs).
        """
        if not self.path:
            return None
        if self.path.startswith(STORAGE_PREFIX):
            name = self.path[len(STORAGE_PREFIX) :]
            return Path(data_dir) / "storage" / self.key / name
        return Path(self.path)
