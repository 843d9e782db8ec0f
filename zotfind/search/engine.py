"""Multi-criteria filtering and author-position scoring.

Every item carries a bit mask with one bit per criterion it satisfies and
a score. Each active criterion contributes its bit to the required mask;
an item is selected when its mask equals the required mask exactly.

Only the author criterion scores. Each matching author adds
``AUTHOR_SCORE * max(1, AUTHOR_SCORE_POSITION - position)``, so a first
author is worth 5 and anything from the fifth position on is worth 1.
"""

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import msgspec

from zotfind.core.dates import DateRange
from zotfind.core.models import Author, Item

from .index import Library
from .query import ANY_AUTHOR, FindQuery

logger = logging.getLogger(__name__)

# how much the correct order scores
AUTHOR_SCORE = 1
# how many positions get a bonus for the right author
AUTHOR_SCORE_POSITION = 5


class Criterion(enum.IntFlag):
    """Selection mask bits."""

    YEAR = 0b001
    AUTHOR = 0b010
    ADDED = 0b100


@dataclass
class ScoreMask:
    """Per-item selection state."""

    score: int = 0
    mask: Criterion = Criterion(0)


class Candidate(msgspec.Struct, frozen=True, kw_only=True):
    """A selected item with its score and resolved byline."""

    score: int
    item: Item
    authors: list[Author]


def position_score(position: int) -> int:
    """Score contributed by a matching author at a byline position."""
    return AUTHOR_SCORE * max(1, AUTHOR_SCORE_POSITION - position)


def author_matches(author: Author, names: Sequence[str]) -> bool:
    """Check whether an author's last name contains any of ``names``."""
    for name in names:
        if name == ANY_AUTHOR or name in author.last_name:
            return True
    return False


def filter_query(query: FindQuery, library: Library) -> list[Candidate]:
    """Select and rank the items matching every active criterion.

    Args:
        query: Filter criteria
        library: Loaded library index

    Returns:
        Candidates sorted by descending score. A query without active
        criteria selects nothing.
    """
    logger.debug(f"Filtering {len(library)} items by {query}")
    selected = {item_id: ScoreMask() for item_id in library.items}
    required = Criterion(0)

    if query.date_range.active:
        required |= Criterion.YEAR
        _mark_dates(selected, library, query.date_range, Criterion.YEAR)

    if query.added_range.active:
        required |= Criterion.ADDED
        _mark_dates(selected, library, query.added_range, Criterion.ADDED)

    if query.authors:
        required |= Criterion.AUTHOR
        _mark_authors(selected, library, query.authors)

    if not required:
        logger.debug("No active criteria")
        return []

    candidates = [
        Candidate(
            score=state.score,
            item=library.items[item_id],
            authors=library.get_authors_ordered(item_id),
        )
        for item_id, state in selected.items()
        if state.mask == required
    ]
    logger.debug(f"Selected {len(candidates)} of {len(library)} items")

    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates


def _mark_dates(
    selected: dict[int, ScoreMask],
    library: Library,
    date_range: DateRange,
    bit: Criterion,
) -> None:
    for item_id, item in library.items.items():
        if bit is Criterion.YEAR:
            date = item.publication_date
        else:
            date = item.added_date

        if date is not None and date_range.matches(date):
            selected[item_id].mask |= bit


def _mark_authors(
    selected: dict[int, ScoreMask],
    library: Library,
    names: Sequence[str],
) -> None:
    for author_id, author in library.authors.items():
        if not author_matches(author, names):
            continue

        for item_id in library.author_items.get(author_id, ()):
            state = selected.get(item_id)
            if state is None:
                # creator of an item without title, abstract or date rows
                logger.debug(f"Skipping unloaded item {item_id}")
                continue

            position = library.author_position(item_id, author_id)
            if position is None:
                continue

            state.score += position_score(position)
            state.mask |= Criterion.AUTHOR
