"""Find items in a Zotero library by author, publication date and date added."""

__version__ = "0.3.0"
