"""Find queries built from command-line filter options."""

import msgspec

from zotfind.core.dates import DateRange, parse_date_expr, parse_year_expr

# Matches any author, but the item must have at least one
ANY_AUTHOR = "."


class FindQuery(msgspec.Struct, frozen=True, kw_only=True):
    """Filter criteria for one find invocation.

    Each field is an independent criterion; an empty field is inactive and
    does not take part in selection.
    """

    authors: tuple[str, ...] = ()
    date_range: DateRange = msgspec.field(default_factory=DateRange)
    added_range: DateRange = msgspec.field(default_factory=DateRange)

    @classmethod
    def from_options(
        cls,
        author: str | None = None,
        year: str | None = None,
        added: str | None = None,
    ) -> "FindQuery":
        """Build a query from raw option values.

        Args:
            author: Comma-separated last-name substrings, or ``.``
            year: Publication year expression
            added: Date-added expression

        Raises:
            MalformedDateError: If either date expression is malformed.
        """
        return cls(
            authors=split_authors(author),
            date_range=parse_year_expr(year),
            added_range=parse_date_expr(added),
        )

    @property
    def active(self) -> bool:
        """Whether any criterion is set."""
        return bool(self.authors) or self.date_range.active or self.added_range.active

    def __str__(self) -> str:
        parts = []
        if self.authors:
            parts.append(f"author:{','.join(self.authors)}")
        if self.date_range.active:
            parts.append(f"year:{self.date_range}")
        if self.added_range.active:
            parts.append(f"added:{self.added_range}")
        return " ".join(parts)


def split_authors(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated author list, trimming and dropping empty names."""
    if not value:
        return ()
    names = (name.strip() for name in value.split(","))
    return tuple(name for name in names if name)
