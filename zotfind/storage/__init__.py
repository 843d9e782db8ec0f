"""Access to the Zotero database.

Provides the row-source interface the library index is built from:

- **Row sources**: read-only SQLite (Zotero) and in-memory implementations
- **Snapshots**: copy the locked live database before reading it
"""

from zotfind.storage.backends import (
    AttachmentRow,
    CreatorRow,
    ItemCreatorRow,
    ItemFieldRow,
    MemoryRowSource,
    RowSource,
    SQLiteRowSource,
)
from zotfind.storage.snapshot import (
    DATABASE_NAME,
    MIRROR_NAME,
    database_path,
    snapshot_database,
)

__all__ = [
    # Row sources
    "RowSource",
    "SQLiteRowSource",
    "MemoryRowSource",
    # Rows
    "CreatorRow",
    "ItemCreatorRow",
    "ItemFieldRow",
    "AttachmentRow",
    # Snapshots
    "DATABASE_NAME",
    "MIRROR_NAME",
    "database_path",
    "snapshot_database",
]
