"""Sorting of search results and the popularity heuristic."""
import logging
import unicodedata
from datetime import date
from typing import Iterable, List, Optional, Tuple, Union

from bookdir.models import (
    SORT_NEWEST,
    SORT_OPTIONS,
    SORT_RATING_DESC,
    SORT_RELEVANCE,
    SORT_REVIEWS_DESC,
    SORT_TITLE_ASC,
    BookRecord,
    ScoredBook,
)

logger = logging.getLogger(__name__)

# max age in years -> points
RECENCY_BUCKETS = ((1, 30), (3, 25), (5, 20), (10, 10), (20, 5))
# min reviews -> points
REVIEW_BUCKETS = ((10000, 40), (5000, 35), (1000, 30), (500, 25), (100, 20), (50, 15))
# min rating -> points
RATING_BUCKETS = ((4.8, 30), (4.5, 25), (4.2, 20), (4.0, 15), (3.5, 10))


def _recency_points(book: BookRecord, current_year: int) -> int:
    if not book.publication_year:
        return 0
    age = current_year - book.publication_year
    for max_age, points in RECENCY_BUCKETS:
        if age <= max_age:
            return points
    return 0


def _review_points(book: BookRecord) -> int:
    reviews = book.review_count or 0
    for minimum, points in REVIEW_BUCKETS:
        if reviews >= minimum:
            return points
    return 10 if reviews > 0 else 0


def _rating_points(book: BookRecord) -> int:
    if book.rating is None:
        return 0
    for minimum, points in RATING_BUCKETS:
        if book.rating >= minimum:
            return points
    return 5


def popularity_score(book: BookRecord, current_year: Optional[int] = None) -> int:
    """
    Composite recency/review-volume/rating score used when no query is active.

    Args:
        book: Book to score
        current_year: Reference year for recency (defaults to today)

    Returns:
        Score between 0 and 100
    """
    if current_year is None:
        current_year = date.today().year
    return (
        _recency_points(book, current_year)
        + _review_points(book)
        + _rating_points(book)
    )


def title_sort_key(title: str) -> Tuple[str, str]:
    """Collation key: accents stripped and case folded, raw title as tie-break."""
    decomposed = unicodedata.normalize("NFKD", title)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, title


def _as_scored(item: Union[ScoredBook, BookRecord]) -> ScoredBook:
    if isinstance(item, ScoredBook):
        return item
    return ScoredBook(item, 0.0)


def sort_books(
    results: Iterable[Union[ScoredBook, BookRecord]],
    option: str = SORT_RELEVANCE,
    has_active_query: bool = False,
    current_year: Optional[int] = None
) -> List[BookRecord]:
    """
    Sort books by one of the supported options.

    The sort is stable, so books with equal keys keep their incoming order.

    Args:
        results: ScoredBooks from a search, or plain BookRecords (score 0.0)
        option: One of SORT_OPTIONS
        has_active_query: Whether a text query produced the scores
        current_year: Reference year for the popularity fallback

    Returns:
        New ordered list of BookRecords
    """
    scored = [_as_scored(item) for item in results]

    if option not in SORT_OPTIONS:
        logger.warning(f"Unknown sort option {option!r}, falling back to relevance")
        option = SORT_RELEVANCE

    if option == SORT_RELEVANCE:
        if has_active_query:
            ordered = sorted(scored, key=lambda r: r.score)
        else:
            if current_year is None:
                current_year = date.today().year
            ordered = sorted(
                scored,
                key=lambda r: popularity_score(r.book, current_year),
                reverse=True,
            )
    elif option == SORT_RATING_DESC:
        ordered = sorted(scored, key=lambda r: r.book.rating or 0, reverse=True)
    elif option == SORT_REVIEWS_DESC:
        ordered = sorted(scored, key=lambda r: r.book.review_count or 0, reverse=True)
    elif option == SORT_NEWEST:
        ordered = sorted(scored, key=lambda r: r.book.publication_year or 0, reverse=True)
    else:
        ordered = sorted(scored, key=lambda r: title_sort_key(r.book.title))

    return [r.book for r in ordered]
