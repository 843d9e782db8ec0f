"""CLI utilities."""

from .launcher import execute_url, item_url, open_pdf, select_item

__all__ = ["execute_url", "item_url", "open_pdf", "select_item"]
