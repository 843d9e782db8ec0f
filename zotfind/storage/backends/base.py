"""Base row source interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class CreatorRow:
    """A creator identity."""

    creator_id: int
    first_name: str
    last_name: str


@dataclass(frozen=True)
class ItemCreatorRow:
    """An item-creator association with its byline position."""

    item_id: int
    creator_id: int
    order_index: int


@dataclass(frozen=True)
class ItemFieldRow:
    """One field value of one item, joined with the item's own columns."""

    item_id: int
    key: str
    field_id: int
    value: str
    date_added: str | None = None
    item_type: str = ""


@dataclass(frozen=True)
class AttachmentRow:
    """A PDF attachment of a parent item."""

    item_id: int
    key: str
    path: str | None


class RowSource(ABC):
    """Abstract source of library rows.

    Each method runs one query and yields its rows. Rows for one item are
    not guaranteed to be contiguous except in :meth:`item_fields`, where
    consumers must still not depend on it.
    """

    @abstractmethod
    def creators(self) -> Iterator[CreatorRow]:
        """Yield every creator identity."""
        pass

    @abstractmethod
    def item_creators(self) -> Iterator[ItemCreatorRow]:
        """Yield every item-creator association."""
        pass

    @abstractmethod
    def item_fields(self) -> Iterator[ItemFieldRow]:
        """Yield title, abstract and date field rows of every item."""
        pass

    @abstractmethod
    def attachments(self, parent_id: int) -> Iterator[AttachmentRow]:
        """Yield the PDF attachments of one item."""
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass

    def __enter__(self) -> "RowSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
