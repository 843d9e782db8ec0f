"""Row sources the library index is loaded from."""

from .base import AttachmentRow, CreatorRow, ItemCreatorRow, ItemFieldRow, RowSource
from .memory import MemoryRowSource
from .sqlite import SQLiteRowSource

__all__ = [
    "RowSource",
    "CreatorRow",
    "ItemCreatorRow",
    "ItemFieldRow",
    "AttachmentRow",
    "MemoryRowSource",
    "SQLiteRowSource",
]
