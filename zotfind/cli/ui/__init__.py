"""Terminal UI components for the CLI."""

from .picker import (
    CandidatePicker,
    PickAction,
    PickResult,
    format_authors,
    format_date,
    highlight_name,
)

__all__ = [
    "CandidatePicker",
    "PickAction",
    "PickResult",
    "format_authors",
    "format_date",
    "highlight_name",
]
