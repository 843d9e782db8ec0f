"""Read-only row source over a Zotero SQLite database."""

import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from zotfind.core.exceptions import LoadError
from zotfind.core.models import FieldKind

from .base import AttachmentRow, CreatorRow, ItemCreatorRow, ItemFieldRow, RowSource

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

# Item types that are never shown as results
HIDDEN_ITEM_TYPES = ("attachment", "note", "annotation")

CREATORS_QUERY = """
    SELECT creatorID AS creator_id, firstName AS first_name, lastName AS last_name
    FROM creators
"""

ITEM_CREATORS_QUERY = """
    SELECT itemID AS item_id, creatorID AS creator_id, orderIndex AS order_index
    FROM itemCreators
"""

ITEM_FIELDS_QUERY = f"""
    SELECT
        items.itemID AS item_id,
        items.key AS key,
        items.dateAdded AS date_added,
        itemTypes.typeName AS item_type,
        itemData.fieldID AS field_id,
        itemDataValues.value AS value
    FROM items
    JOIN itemTypes ON items.itemTypeID = itemTypes.itemTypeID
    JOIN itemData ON items.itemID = itemData.itemID
    JOIN itemDataValues ON itemData.valueID = itemDataValues.valueID
    WHERE itemData.fieldID IN ({", ".join(str(int(kind)) for kind in FieldKind)})
        AND itemTypes.typeName NOT IN ({", ".join("?" for _ in HIDDEN_ITEM_TYPES)})
        AND items.itemID NOT IN (SELECT itemID FROM deletedItems)
    ORDER BY items.itemID
"""

ATTACHMENTS_QUERY = """
    SELECT
        itemAttachments.itemID AS item_id,
        items.key AS key,
        itemAttachments.path AS path
    FROM itemAttachments
    JOIN items ON itemAttachments.itemID = items.itemID
    WHERE itemAttachments.parentItemID = ?
        AND itemAttachments.contentType = ?
    ORDER BY itemAttachments.itemID
"""


class SQLiteRowSource(RowSource):
    """Row source reading a Zotero ``zotero.sqlite`` file.

    The database is opened read-only; point it at a snapshot while Zotero
    is running, since Zotero holds a lock on the live file.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        if not self.db_path.is_file():
            raise LoadError("open", f"database not found: {self.db_path}")

        uri = f"{self.db_path.resolve().as_uri()}?mode=ro"
        try:
            self.conn: sqlite3.Connection | None = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as e:
            raise LoadError("open", str(e)) from e
        self.connection.row_factory = sqlite3.Row
        logger.debug(f"Opened {self.db_path} read-only")

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the connection, ensuring it exists."""
        if self.conn is None:
            raise RuntimeError("Database connection is closed")
        return self.conn

    def creators(self) -> Iterator[CreatorRow]:
        for row in self.connection.execute(CREATORS_QUERY):
            yield CreatorRow(
                creator_id=row["creator_id"],
                first_name=row["first_name"] or "",
                last_name=row["last_name"] or "",
            )

    def item_creators(self) -> Iterator[ItemCreatorRow]:
        for row in self.connection.execute(ITEM_CREATORS_QUERY):
            yield ItemCreatorRow(
                item_id=row["item_id"],
                creator_id=row["creator_id"],
                order_index=row["order_index"],
            )

    def item_fields(self) -> Iterator[ItemFieldRow]:
        cursor = self.connection.execute(ITEM_FIELDS_QUERY, HIDDEN_ITEM_TYPES)
        for row in cursor:
            yield ItemFieldRow(
                item_id=row["item_id"],
                key=row["key"],
                field_id=row["field_id"],
                value=row["value"],
                date_added=row["date_added"],
                item_type=row["item_type"],
            )

    def attachments(self, parent_id: int) -> Iterator[AttachmentRow]:
        cursor = self.connection.execute(
            ATTACHMENTS_QUERY, (parent_id, PDF_CONTENT_TYPE)
        )
        for row in cursor:
            yield AttachmentRow(
                item_id=row["item_id"], key=row["key"], path=row["path"]
            )

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
