"""Content-based "similar books" recommendations."""
from typing import Iterable, List

from bookdir.models import BookRecord

CATEGORY_WEIGHT = 10
TOPIC_WEIGHT = 3
PLAYER_WEIGHT = 5
TEAM_WEIGHT = 4
AUTHOR_WEIGHT = 8


def _shared(a: Iterable[str], b: Iterable[str]) -> int:
    return len(set(a) & set(b))


def similarity_score(reference: BookRecord, candidate: BookRecord) -> int:
    """
    Score how similar ``candidate`` is to ``reference``.

    Sums a category match, shared topics/players/teams and a same-author
    bonus (case-insensitive).
    """
    score = 0

    if candidate.category == reference.category:
        score += CATEGORY_WEIGHT

    score += _shared(reference.topics, candidate.topics) * TOPIC_WEIGHT
    score += _shared(reference.players_mentioned, candidate.players_mentioned) * PLAYER_WEIGHT
    score += _shared(reference.teams_mentioned, candidate.teams_mentioned) * TEAM_WEIGHT

    if candidate.author.lower() == reference.author.lower():
        score += AUTHOR_WEIGHT

    return score


def similar_to(
    reference: BookRecord,
    catalog: Iterable[BookRecord],
    limit: int = 6
) -> List[BookRecord]:
    """
    Find books similar to a reference book.

    Args:
        reference: Book to compare against
        catalog: Catalog or any iterable of books
        limit: Maximum number of results

    Returns:
        Up to ``limit`` books ordered by similarity, then rating. The
        reference itself and books with zero similarity are excluded.
    """
    if limit <= 0:
        return []

    scored = []
    for candidate in catalog:
        if candidate.id == reference.id:
            continue
        score = similarity_score(reference, candidate)
        if score > 0:
            scored.append((score, candidate))

    scored.sort(key=lambda pair: (pair[0], pair[1].rating or 0), reverse=True)
    return [candidate for _score, candidate in scored[:limit]]
