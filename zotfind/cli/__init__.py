"""Zotfind CLI.

A command-line interface for finding items in a Zotero library.
Built with Click and Rich.
"""

from zotfind.cli.main import cli

__all__ = ["cli"]
