"""In-memory index of a Zotero library.

The index is built in one pass per row-source query and is not modified
afterwards. It keeps four maps:

- item id -> Item
- item id -> byline (list of AuthorOrder)
- creator id -> Author
- creator id -> ids of the items the creator appears on

Both directions of the item/creator relation are derived from the same
association rows, so neither refers to the other.
"""

import logging
from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import msgspec

from zotfind.core.dates import parse_stored_date
from zotfind.core.exceptions import (
    DanglingAuthorReferenceError,
    LoadError,
    UnexpectedFieldKindError,
)
from zotfind.core.models import Attachment, Author, AuthorOrder, FieldKind, Item
from zotfind.storage.backends.base import ItemFieldRow, RowSource

logger = logging.getLogger(__name__)


@contextmanager
def _loading(stage: str) -> Iterator[None]:
    """Wrap any failure while loading ``stage`` in a LoadError."""
    try:
        yield
    except LoadError:
        raise
    except Exception as e:
        raise LoadError(stage, str(e)) from e


class Library:
    """Items, creators and their associations held in memory."""

    def __init__(self, source: RowSource):
        self.source = source
        self.items: dict[int, Item] = {}
        self.authors: dict[int, Author] = {}
        self.item_authors: dict[int, list[AuthorOrder]] = {}
        self.author_items: dict[int, list[int]] = {}

    @classmethod
    def build(cls, source: RowSource) -> "Library":
        """Load a complete index from a row source.

        Raises:
            LoadError: If any row cannot be read or interpreted. Nothing is
                kept from a failed load.
        """
        library = cls(source)
        library.load()
        return library

    def load(self) -> None:
        """Query and parse the library from the row source."""
        self._load_authors()
        self._load_bylines()
        self._load_items()

        logger.debug(
            f"Loaded {len(self.items)} items, {len(self.authors)} creators, "
            f"{sum(len(orders) for orders in self.item_authors.values())} "
            "author associations"
        )

    def _load_authors(self) -> None:
        authors: dict[int, Author] = {}
        with _loading("creators"):
            for row in self.source.creators():
                authors[row.creator_id] = Author(
                    first_name=row.first_name, last_name=row.last_name
                )
        self.authors = authors

    def _load_bylines(self) -> None:
        item_authors: defaultdict[int, list[AuthorOrder]] = defaultdict(list)
        author_items: defaultdict[int, list[int]] = defaultdict(list)

        with _loading("item creators"):
            for row in self.source.item_creators():
                item_authors[row.item_id].append(
                    AuthorOrder(row.creator_id, row.order_index)
                )
                author_items[row.creator_id].append(row.item_id)

        self.item_authors = dict(item_authors)
        self.author_items = dict(author_items)

    def _load_items(self) -> None:
        items: dict[int, Item] = {}

        with _loading("items"):
            for row in self.source.item_fields():
                item = items.get(row.item_id)
                if item is None:
                    item = Item(
                        id=row.item_id,
                        key=row.key,
                        added_date=parse_stored_date(row.date_added),
                    )
                items[row.item_id] = _apply_field(item, row)

        self.items = items

    def get_item(self, item_id: int) -> Item | None:
        """Get an item by id."""
        return self.items.get(item_id)

    def get_authors_ordered(self, item_id: int) -> list[Author]:
        """Get the authors of an item in byline order.

        Authors are placed by their stored position. Repeated positions
        keep the order the associations were loaded in.

        Raises:
            DanglingAuthorReferenceError: If the byline names a creator that
                is not in the library.
        """
        orders = self.item_authors.get(item_id, [])

        authors = []
        for order in sorted(orders, key=lambda o: o.position):
            author = self.authors.get(order.author_id)
            if author is None:
                raise DanglingAuthorReferenceError(item_id, order.author_id)
            authors.append(author)
        return authors

    def author_position(self, item_id: int, author_id: int) -> int | None:
        """Byline position of a creator on an item, first occurrence."""
        for order in self.item_authors.get(item_id, []):
            if order.author_id == author_id:
                return order.position
        return None

    def get_attachments(self, item_id: int) -> list[Attachment]:
        """Query the PDF attachments of an item.

        Each call queries the row source again.
        """
        return [
            Attachment(item_id=row.item_id, key=row.key, path=row.path)
            for row in self.source.attachments(item_id)
        ]

    def statistics(self) -> dict[str, Any]:
        """Get index statistics."""
        return {
            "total_items": len(self.items),
            "total_authors": len(self.authors),
            "total_associations": sum(
                len(orders) for orders in self.item_authors.values()
            ),
            "items_with_authors": sum(
                1 for item_id in self.items if self.item_authors.get(item_id)
            ),
            "items_with_dates": sum(
                1 for item in self.items.values() if item.publication_date
            ),
        }

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items.values())

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.items


def _apply_field(item: Item, row: ItemFieldRow) -> Item:
    """Return ``item`` with the field carried by ``row`` set."""
    try:
        kind = FieldKind(row.field_id)
    except ValueError as e:
        raise UnexpectedFieldKindError(row.item_id, row.field_id) from e

    if kind is FieldKind.TITLE:
        return msgspec.structs.replace(item, title=row.value)
    elif kind is FieldKind.ABSTRACT:
        return msgspec.structs.replace(item, abstract=row.value)
    else:
        return msgspec.structs.replace(
            item, publication_date=parse_stored_date(row.value)
        )
