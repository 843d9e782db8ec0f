"""Partial-date parsing and before/after range matching.

Date expressions are comma-separated tokens:

- ``before:<date>`` sets the upper bound
- ``after:<date>`` sets the lower bound
- ``<date>`` sets both bounds, selecting exactly that year, month or day

where ``<date>`` is ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.

Matching treats each specified component of a bound as an independent
constraint: ``before:2000`` only looks at the year, so every date in 2000
matches it regardless of month or day.
"""

import re

import msgspec

from .exceptions import MalformedDateError
from .models import PartialDate

BEFORE_PREFIX = "before:"
AFTER_PREFIX = "after:"

# One bit per (bound side, precision) combination
BEFORE_YEAR = 1 << 0
BEFORE_MONTH = 1 << 1
BEFORE_DAY = 1 << 2
AFTER_YEAR = 1 << 3
AFTER_MONTH = 1 << 4
AFTER_DAY = 1 << 5

_COMPONENTS = (
    ("year", BEFORE_YEAR, AFTER_YEAR),
    ("month", BEFORE_MONTH, AFTER_MONTH),
    ("day", BEFORE_DAY, AFTER_DAY),
)

_YEAR_SPAN = re.compile(r"(\d{4})\s*-\s*(\d{4})")


class DateRange(msgspec.Struct, frozen=True, kw_only=True):
    """Before/after bounds used as a filter criterion."""

    before: PartialDate | None = None
    after: PartialDate | None = None

    @property
    def active(self) -> bool:
        """Whether either bound is set."""
        return self.before is not None or self.after is not None

    def matches(self, subject: PartialDate) -> bool:
        """Check whether a date satisfies every constrained component.

        A ``before`` component is satisfied when the bound is greater than
        or equal to the subject's component, an ``after`` component when it
        is less than or equal. Components the subject does not specify
        cannot violate a bound.
        """
        constrained = 0
        satisfied = 0

        for name, before_bit, after_bit in _COMPONENTS:
            value = _component(subject, name)

            bound = _component(self.before, name)
            if bound is not None:
                constrained |= before_bit
                if value is None or bound >= value:
                    satisfied |= before_bit

            bound = _component(self.after, name)
            if bound is not None:
                constrained |= after_bit
                if value is None or bound <= value:
                    satisfied |= after_bit

        return satisfied == constrained

    def __str__(self) -> str:
        parts = []
        if self.before is not None:
            parts.append(f"{BEFORE_PREFIX}{self.before}")
        if self.after is not None:
            parts.append(f"{AFTER_PREFIX}{self.after}")
        return ",".join(parts)


def _component(date: PartialDate | None, name: str) -> int | None:
    if date is None:
        return None
    value = getattr(date, name)
    # month and day of 0 mean "unknown"
    if name != "year" and not value:
        return None
    return value


def matches(date_range: DateRange, subject: PartialDate) -> bool:
    """Check whether ``subject`` falls inside ``date_range``."""
    return date_range.matches(subject)


def parse_date(text: str) -> PartialDate:
    """Parse ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.

    Omitted components are None. Values are kept as written; range
    checking is left to the comparator.

    Raises:
        MalformedDateError: If a component is not a number or there are
            too many components.
    """
    stripped = text.strip()
    parts = stripped.split("-")

    if len(parts) > 3:
        raise MalformedDateError(text, "expected YYYY[-MM[-DD]]")

    for part in parts:
        if not (part.isascii() and part.isdigit()):
            raise MalformedDateError(text, "components must be numbers")

    numbers = [int(part) for part in parts]
    return PartialDate(*numbers)


def parse_stored_date(text: str | None) -> PartialDate | None:
    """Parse a date as Zotero stores it.

    Zotero stores dates like ``"1949-00-00 1949"`` or timestamps like
    ``"2021-03-04 12:34:56"``; only the leading date token is read. An
    unknown year is stored as ``0000`` and gives None.
    """
    if text is None:
        return None
    tokens = text.split()
    if not tokens:
        return None

    date = parse_date(tokens[0])
    if date.year == 0:
        return None
    return date


def parse_date_expr(expr: str | None) -> DateRange:
    """Parse a date range expression.

    Examples: ``before:2000,after:1990-06``, ``2021-03``, ``after:2020-01-15``.

    Later tokens override earlier ones for the same bound. An empty or
    missing expression gives an inactive range.

    Raises:
        MalformedDateError: If any date in the expression is malformed.
    """
    if expr is None or not expr.strip():
        return DateRange()

    before: PartialDate | None = None
    after: PartialDate | None = None

    for raw in expr.split(","):
        token = raw.strip()
        if not token:
            continue

        if token.startswith(BEFORE_PREFIX):
            before = parse_date(token[len(BEFORE_PREFIX) :])
        elif token.startswith(AFTER_PREFIX):
            after = parse_date(token[len(AFTER_PREFIX) :])
        else:
            before = after = parse_date(token)

    return DateRange(before=before, after=after)


def parse_year_expr(expr: str | None) -> DateRange:
    """Parse a publication year expression.

    Accepts everything :func:`parse_date_expr` does, plus ``Y1-Y2`` for an
    inclusive span of years.
    """
    if expr is None or not expr.strip():
        return DateRange()

    if match := _YEAR_SPAN.fullmatch(expr.strip()):
        return DateRange(
            after=PartialDate(int(match[1])),
            before=PartialDate(int(match[2])),
        )

    return parse_date_expr(expr)
