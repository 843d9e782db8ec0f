"""Pytest configuration and fixtures."""

import sqlite3
from pathlib import Path

import pytest

ZOTERO_SCHEMA = """
    CREATE TABLE itemTypes (
        itemTypeID INTEGER PRIMARY KEY,
        typeName TEXT
    );
    CREATE TABLE items (
        itemID INTEGER PRIMARY KEY,
        itemTypeID INT NOT NULL,
        dateAdded TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        dateModified TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        key TEXT NOT NULL
    );
    CREATE TABLE itemDataValues (
        valueID INTEGER PRIMARY KEY,
        value UNIQUE
    );
    CREATE TABLE itemData (
        itemID INT,
        fieldID INT,
        valueID,
        PRIMARY KEY (itemID, fieldID)
    );
    CREATE TABLE creators (
        creatorID INTEGER PRIMARY KEY,
        firstName TEXT,
        lastName TEXT,
        fieldMode INT
    );
    CREATE TABLE itemCreators (
        itemID INT NOT NULL,
        creatorID INT NOT NULL,
        creatorTypeID INT NOT NULL DEFAULT 1,
        orderIndex INT NOT NULL DEFAULT 0,
        PRIMARY KEY (itemID, creatorID, creatorTypeID, orderIndex)
    );
    CREATE TABLE itemAttachments (
        itemID INTEGER PRIMARY KEY,
        parentItemID INT,
        linkMode INT,
        contentType TEXT,
        path TEXT
    );
    CREATE TABLE deletedItems (
        itemID INTEGER PRIMARY KEY,
        dateDeleted DEFAULT CURRENT_TIMESTAMP NOT NULL
    );
"""

ITEM_TYPES = [(1, "book"), (2, "journalArticle"), (3, "attachment"), (4, "note")]

# (itemID, itemTypeID, dateAdded, key)
ITEMS = [
    (1, 1, "2021-03-04 12:00:00", "ORWELL84"),
    (2, 2, "2022-11-20 08:30:00", "FARM1945"),
    (3, 2, "2023-01-15 09:00:00", "TURING50"),
    (4, 1, "2023-05-01 10:00:00", "NOAUTH01"),
    (5, 3, "2021-03-04 12:01:00", "PDFKEY01"),
    (6, 2, "2020-01-01 00:00:00", "TRASHED1"),
    (7, 3, "2023-01-15 09:05:00", "HTMLKEY1"),
]

# (itemID, fieldID, value)
ITEM_DATA = [
    (1, 1, "1984"),
    (1, 6, "1949-06-08 1949-06-08"),
    (2, 1, "Animal Farm Revisited"),
    (2, 6, "1945-08-17 1945-08-17"),
    (3, 1, "Computing Machinery and Intelligence"),
    (3, 2, "I propose to consider the question, 'Can machines think?'"),
    (3, 6, "1950-10-00 October 1950"),
    (3, 12, "Mind"),
    (4, 1, "Anonymous Pamphlet"),
    (4, 6, "2001-00-00 2001"),
    (5, 1, "Full Text PDF"),
    (6, 1, "Trashed Paper"),
    (6, 6, "1948-00-00 1948"),
    (7, 1, "Snapshot"),
]

CREATORS = [(10, "George", "Orwell"), (20, "Jane", "Smith"), (30, "Alan", "Turing")]

# (itemID, creatorID, orderIndex)
ITEM_CREATORS = [(1, 10, 0), (2, 10, 1), (2, 20, 0), (3, 30, 0), (6, 10, 0)]

# (itemID, parentItemID, contentType, path)
ATTACHMENTS = [
    (5, 1, "application/pdf", "storage:orwell-1984.pdf"),
    (7, 3, "text/html", "storage:index.html"),
]


def build_zotero_db(path: Path) -> Path:
    """Create a small database with the parts of the Zotero schema we read."""
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(ZOTERO_SCHEMA)
        conn.executemany("INSERT INTO itemTypes VALUES (?, ?)", ITEM_TYPES)
        conn.executemany(
            "INSERT INTO items (itemID, itemTypeID, dateAdded, key) "
            "VALUES (?, ?, ?, ?)",
            ITEMS,
        )

        values: dict[str, int] = {}
        for item_id, field_id, value in ITEM_DATA:
            if value not in values:
                values[value] = len(values) + 1
                conn.execute(
                    "INSERT INTO itemDataValues VALUES (?, ?)", (values[value], value)
                )
            conn.execute(
                "INSERT INTO itemData VALUES (?, ?, ?)",
                (item_id, field_id, values[value]),
            )

        conn.executemany(
            "INSERT INTO creators (creatorID, firstName, lastName, fieldMode) "
            "VALUES (?, ?, ?, 0)",
            CREATORS,
        )
        conn.executemany(
            "INSERT INTO itemCreators (itemID, creatorID, orderIndex) "
            "VALUES (?, ?, ?)",
            ITEM_CREATORS,
        )
        conn.executemany(
            "INSERT INTO itemAttachments (itemID, parentItemID, linkMode, "
            "contentType, path) VALUES (?, ?, 0, ?, ?)",
            ATTACHMENTS,
        )
        conn.execute("INSERT INTO deletedItems (itemID) VALUES (6)")
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables and config files for each test.

    This prevents a user's own zotfind configuration or Zotero data
    directory from leaking into tests.
    """
    monkeypatch.delenv("ZOTFIND_DATA_DIR", raising=False)
    monkeypatch.delenv("ZOTFIND_ZOTERO_COMMAND", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def zotero_data_dir(tmp_path):
    """Zotero data directory holding a populated zotero.sqlite."""
    data_dir = tmp_path / "Zotero"
    data_dir.mkdir()
    build_zotero_db(data_dir / "zotero.sqlite")
    return data_dir


@pytest.fixture
def zotero_db(zotero_data_dir):
    """Path to the populated zotero.sqlite."""
    return zotero_data_dir / "zotero.sqlite"
