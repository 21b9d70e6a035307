"""Facet counts for the filter UI."""
from collections import Counter
from typing import Dict, Iterable, List, Tuple, Union

from bookdir.models import BookRecord, FacetCounts


def compute_facets(books: Iterable[BookRecord]) -> FacetCounts:
    """
    Count how often each facet value occurs in a book set.

    Pass the full catalog for stable counts or a filtered subset for
    narrowing counts.

    Args:
        books: Books to aggregate

    Returns:
        Facet name -> {value: count}; years are keyed by int
    """
    categories: Counter = Counter()
    topics: Counter = Counter()
    formats: Counter = Counter()
    players: Counter = Counter()
    teams: Counter = Counter()
    years: Counter = Counter()

    for book in books:
        if book.category:
            categories[book.category] += 1
        topics.update(book.topics)
        formats.update(book.formats)
        players.update(book.players_mentioned)
        teams.update(book.teams_mentioned)
        if book.publication_year:
            years[book.publication_year] += 1

    return {
        "categories": dict(categories),
        "topics": dict(topics),
        "formats": dict(formats),
        "players": dict(players),
        "teams": dict(teams),
        "years": dict(years),
    }


def top_values(
    counts: Dict[Union[str, int], int],
    limit: int
) -> List[Tuple[Union[str, int], int]]:
    """Most frequent values first, ties broken by value."""
    ranked = sorted(counts.items(), key=lambda item: (-item[1], str(item[0])))
    return ranked[:max(limit, 0)]
