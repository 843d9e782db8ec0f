"""Library index and find queries.

Main components:
- Library: In-memory index of items, creators and bylines
- FindQuery: Author, publication-date and date-added criteria
- filter_query: Mask-based selection with author-position scoring
"""

from .engine import (
    AUTHOR_SCORE,
    AUTHOR_SCORE_POSITION,
    Candidate,
    Criterion,
    author_matches,
    filter_query,
    position_score,
)
from .index import Library
from .query import ANY_AUTHOR, FindQuery, split_authors

__all__ = [
    "Library",
    "FindQuery",
    "ANY_AUTHOR",
    "split_authors",
    "Candidate",
    "Criterion",
    "filter_query",
    "author_matches",
    "position_score",
    "AUTHOR_SCORE",
    "AUTHOR_SCORE_POSITION",
]
