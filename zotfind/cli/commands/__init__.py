"""CLI commands module."""

from . import find

__all__ = ["find"]
