"""Declarative multi-facet filtering of book lists."""
from typing import Iterable, List

from bookdir.models import BookRecord, FilterState, ScoredBook


def _intersects(values: Iterable[str], selected: Iterable[str]) -> bool:
    selected = set(selected)
    return any(value in selected for value in values)


def matches_filters(book: BookRecord, state: FilterState) -> bool:
    """
    Check a single book against a filter state.

    Facets combine with AND; values within one facet combine with OR.
    A rating floor excludes unrated books, while a year range lets books
    with an unknown year through.
    """
    if state.categories and book.category not in state.categories:
        return False

    if state.topics and not _intersects(book.topics, state.topics):
        return False

    if state.formats and not _intersects(book.formats, state.formats):
        return False

    if state.players and not _intersects(book.players_mentioned, state.players):
        return False

    if state.teams and not _intersects(book.teams_mentioned, state.teams):
        return False

    if state.min_rating is not None:
        if book.rating is None or book.rating < state.min_rating:
            return False

    low, high = state.year_range
    year = book.publication_year
    if year is not None:
        if low is not None and year < low:
            return False
        if high is not None and year > high:
            return False

    return True


def filter_books(books: Iterable[BookRecord], state: FilterState) -> List[BookRecord]:
    """
    Apply filters to a list of books.

    Args:
        books: Books to filter
        state: Filter selections

    Returns:
        New list of matching books in input order
    """
    return [book for book in books if matches_filters(book, state)]


def filter_scored(results: Iterable[ScoredBook], state: FilterState) -> List[ScoredBook]:
    """Filter search results, keeping each book's match score."""
    return [result for result in results if matches_filters(result.book, state)]
