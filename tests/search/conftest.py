"""Fixtures for library index and filtering tests."""

import pytest

from zotfind.search import Library
from zotfind.storage.backends.memory import MemoryRowSource


@pytest.fixture
def sample_source():
    """Row source with five items and four authors.

    Orwell appears first on "1984", second on "Animal Farm Revisited" and
    fourth on "Brave New World". "Anonymous Pamphlet" has no authors.
    """
    return (
        MemoryRowSource()
        .add_creator(10, "Orwell", "George")
        .add_creator(20, "Smith", "Jane")
        .add_creator(30, "Turing", "Alan")
        .add_creator(40, "Huxley", "Aldous")
        .add_item(
            1,
            "ORWELL84",
            title="1984",
            date="1949-06-08 1949-06-08",
            added="2021-03-04 12:00:00",
            creators=[10],
        )
        .add_item(
            2,
            "FARM1945",
            title="Animal Farm Revisited",
            date="1945-08-17 1945-08-17",
            added="2022-11-20 08:30:00",
            creators=[20, 10],
        )
        .add_item(
            3,
            "TURING50",
            title="Computing Machinery and Intelligence",
            abstract="I propose to consider the question, 'Can machines think?'",
            date="1950-10-00 October 1950",
            added="2023-01-15 09:00:00",
            creators=[30],
        )
        .add_item(
            4,
            "NOAUTH01",
            title="Anonymous Pamphlet",
            date="2001-00-00 2001",
            added="2023-05-01 10:00:00",
        )
        .add_item(
            5,
            "BRAVE932",
            title="Brave New World",
            date="1932",
            added="2021-03-04 18:00:00",
            creators=[40, 20, 30, 10],
        )
        .add_attachment(1, 101, "PDFKEY01", "storage:orwell-1984.pdf")
    )


@pytest.fixture
def library(sample_source):
    """Library built from the sample source."""
    return Library.build(sample_source)
