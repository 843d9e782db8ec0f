"""In-memory row source for testing and embedding."""

from collections import defaultdict
from collections.abc import Iterable, Iterator

from zotfind.core.models import FieldKind

from .base import AttachmentRow, CreatorRow, ItemCreatorRow, ItemFieldRow, RowSource


class MemoryRowSource(RowSource):
    """Row source holding its rows in lists.

    Rows can be passed in directly or added item by item with
    :meth:`add_item`, which generates the field and association rows a
    database would return.
    """

    def __init__(
        self,
        creators: Iterable[CreatorRow] = (),
        item_creators: Iterable[ItemCreatorRow] = (),
        item_fields: Iterable[ItemFieldRow] = (),
    ):
        self.creator_rows: list[CreatorRow] = list(creators)
        self.item_creator_rows: list[ItemCreatorRow] = list(item_creators)
        self.item_field_rows: list[ItemFieldRow] = list(item_fields)
        self.attachment_rows: dict[int, list[AttachmentRow]] = defaultdict(list)
        self.attachment_queries = 0
        self.closed = False

    def add_creator(
        self, creator_id: int, last_name: str, first_name: str = ""
    ) -> "MemoryRowSource":
        """Add a creator identity."""
        self.creator_rows.append(CreatorRow(creator_id, first_name, last_name))
        return self

    def add_item(
        self,
        item_id: int,
        key: str,
        title: str | None = None,
        abstract: str | None = None,
        date: str | None = None,
        added: str | None = None,
        creators: Iterable[int] = (),
    ) -> "MemoryRowSource":
        """Add an item with its fields and byline.

        Args:
            item_id: Item id
            key: Zotero item key
            title: Title field value
            abstract: Abstract field value
            date: Publication date as stored (e.g. ``"1949-06-08"``)
            added: Date added as stored (e.g. ``"2021-03-04 12:34:56"``)
            creators: Creator ids in byline order
        """
        fields = (
            (FieldKind.TITLE, title),
            (FieldKind.ABSTRACT, abstract),
            (FieldKind.DATE, date),
        )
        for kind, value in fields:
            if value is not None:
                self.item_field_rows.append(
                    ItemFieldRow(
                        item_id=item_id,
                        key=key,
                        field_id=int(kind),
                        value=value,
                        date_added=added,
                    )
                )

        for position, creator_id in enumerate(creators):
            self.item_creator_rows.append(
                ItemCreatorRow(item_id, creator_id, position)
            )
        return self

    def add_attachment(
        self, parent_id: int, item_id: int, key: str, path: str | None
    ) -> "MemoryRowSource":
        """Add a PDF attachment to an item."""
        self.attachment_rows[parent_id].append(AttachmentRow(item_id, key, path))
        return self

    def creators(self) -> Iterator[CreatorRow]:
        yield from self.creator_rows

    def item_creators(self) -> Iterator[ItemCreatorRow]:
        yield from self.item_creator_rows

    def item_fields(self) -> Iterator[ItemFieldRow]:
        yield from self.item_field_rows

    def attachments(self, parent_id: int) -> Iterator[AttachmentRow]:
        self.attachment_queries += 1
        yield from self.attachment_rows.get(parent_id, [])

    def close(self) -> None:
        self.closed = True
