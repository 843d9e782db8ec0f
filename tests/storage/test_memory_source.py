"""Tests for the in-memory row source."""

from zotfind.core.models import FieldKind
from zotfind.storage.backends.base import (
    AttachmentRow,
    CreatorRow,
    ItemCreatorRow,
    ItemFieldRow,
)
from zotfind.storage.backends.memory import MemoryRowSource


def test_rows_passed_directly():
    source = MemoryRowSource(
        creators=[CreatorRow(1, "Ada", "Lovelace")],
        item_creators=[ItemCreatorRow(7, 1, 0)],
        item_fields=[ItemFieldRow(7, "NOTES843", 1, "Notes")],
    )

    assert list(source.creators()) == [CreatorRow(1, "Ada", "Lovelace")]
    assert list(source.item_creators()) == [ItemCreatorRow(7, 1, 0)]
    assert list(source.item_fields()) == [ItemFieldRow(7, "NOTES843", 1, "Notes")]


def test_add_item_generates_rows():
    source = (
        MemoryRowSource()
        .add_creator(1, "Lovelace", "Ada")
        .add_creator(2, "Babbage", "Charles")
        .add_item(
            7,
            "NOTES843",
            title="Notes",
            date="1843",
            added="2020-01-01 10:00:00",
            creators=[2, 1],
        )
    )

    fields = list(source.item_fields())
    assert [row.field_id for row in fields] == [FieldKind.TITLE, FieldKind.DATE]
    assert {row.date_added for row in fields} == {"2020-01-01 10:00:00"}
    assert {row.key for row in fields} == {"NOTES843"}

    assert list(source.item_creators()) == [
        ItemCreatorRow(7, 2, 0),
        ItemCreatorRow(7, 1, 1),
    ]


def test_add_item_without_fields():
    source = MemoryRowSource().add_item(1, "EMPTY001")

    assert list(source.item_fields()) == []


def test_attachments_counted_per_query():
    source = MemoryRowSource().add_attachment(1, 101, "PDFKEY01", "storage:a.pdf")

    assert list(source.attachments(1)) == [
        AttachmentRow(101, "PDFKEY01", "storage:a.pdf")
    ]
    assert list(source.attachments(2)) == []
    assert source.attachment_queries == 2


def test_context_manager_closes():
    with MemoryRowSource() as source:
        assert not source.closed

    assert source.closed
