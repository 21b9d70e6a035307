"""Weighted multi-field fuzzy search over the catalog, backed by rapidfuzz."""
import logging
import sys
from typing import Dict, Iterable, List, Optional

from rapidfuzz import fuzz, process, utils

from bookdir.models import BookRecord, ScoredBook

logger = logging.getLogger(__name__)

# title > author > players/teams > description ~ topics
DEFAULT_FIELD_WEIGHTS: Dict[str, float] = {
    "title": 2.0,
    "author": 1.5,
    "players_mentioned": 1.0,
    "teams_mentioned": 1.0,
    "description": 0.8,
    "topics": 0.7,
    "category": 0.6,
}

DEFAULT_THRESHOLD = 0.4
MIN_QUERY_LENGTH = 2

# Keeps an exact match from zeroing out the other fields' contribution
EPSILON = sys.float_info.epsilon


def field_ratio(needle: str, entry: str, score_cutoff: Optional[float] = None, **kwargs) -> float:
    """
    Similarity (0-100) of a query against one field entry.

    ``partial_ratio`` aligns the shorter string inside the longer one, so an
    entry shorter than the query is scaled by ``len(entry) / len(needle)``:
    a short label found inside a long query only covers part of it.
    """
    if not needle or not entry:
        return 0.0

    ratio = fuzz.partial_ratio(needle, entry)
    if len(entry) < len(needle):
        ratio *= len(entry) / len(needle)

    if score_cutoff is not None and ratio < score_cutoff:
        return 0.0
    return ratio


class SearchIndex:
    """
    Read-only fuzzy index over a fixed list of books.

    Each field is stored as a flat list of preprocessed strings together
    with the position of the book that owns each string, so that one
    rapidfuzz ``process.extract`` call scores a whole field.
    """

    def __init__(
        self,
        books: Iterable[BookRecord],
        field_weights: Optional[Dict[str, float]] = None,
        threshold: float = DEFAULT_THRESHOLD,
        min_query_length: int = MIN_QUERY_LENGTH
    ):
        """
        Build the index.

        Args:
            books: Books to index, in the order results should tie-break
            field_weights: Field name -> weight (defaults to DEFAULT_FIELD_WEIGHTS)
            threshold: Maximum per-field distance (0-1) that counts as a match
            min_query_length: Queries shorter than this pass everything through
        """
        self.books: List[BookRecord] = list(books)
        self.field_weights = dict(field_weights or DEFAULT_FIELD_WEIGHTS)
        self.threshold = threshold
        self.min_query_length = min_query_length

        max_weight = max(self.field_weights.values(), default=1.0) or 1.0
        self._norm_weights = {
            name: weight / max_weight for name, weight in self.field_weights.items()
        }

        self._choices: Dict[str, List[str]] = {}
        self._owners: Dict[str, List[int]] = {}
        for name in self.field_weights:
            choices, owners = [], []
            for position, book in enumerate(self.books):
                value = getattr(book, name)
                entries = (value,) if isinstance(value, str) else value
                for entry in entries:
                    processed = utils.default_process(entry)
                    if processed:
                        choices.append(processed)
                        owners.append(position)
            self._choices[name] = choices
            self._owners[name] = owners

        logger.info(
            f"Search index built over {len(self.books)} books "
            f"({len(self.field_weights)} fields)"
        )

    def is_active_query(self, text) -> bool:
        """True when ``text`` is long enough to narrow results."""
        return isinstance(text, str) and len(text.strip()) >= self.min_query_length

    def query(self, text) -> List[ScoredBook]:
        """
        Run a fuzzy query.

        Args:
            text: Free-text query

        Returns:
            ScoredBooks ordered best match first (lower score is better).
            Empty or too-short queries return every book with score 0.0.
        """
        if not self.is_active_query(text):
            return [ScoredBook(book, 0.0) for book in self.books]

        needle = utils.default_process(text)
        if not needle:
            return [ScoredBook(book, 0.0) for book in self.books]

        cutoff = (1.0 - self.threshold) * 100
        combined: Dict[int, float] = {}

        for name, choices in self._choices.items():
            if not choices:
                continue

            # Best distance per book for this field
            best: Dict[int, float] = {}
            matches = process.extract(
                needle,
                choices,
                scorer=field_ratio,
                processor=None,
                score_cutoff=cutoff,
                limit=None,
            )
            for _choice, ratio, choice_index in matches:
                position = self._owners[name][choice_index]
                distance = 1.0 - ratio / 100.0
                if distance < best.get(position, 1.0):
                    best[position] = distance

            weight = self._norm_weights[name]
            for position, distance in best.items():
                field_score = max(distance, EPSILON) ** weight
                combined[position] = combined.get(position, 1.0) * field_score

        ranked = sorted(combined.items(), key=lambda pair: (pair[1], pair[0]))
        logger.debug(f"Query {text!r} matched {len(ranked)} of {len(self.books)} books")
        return [ScoredBook(self.books[position], score) for position, score in ranked]

    def rebuild(self, books: Iterable[BookRecord]) -> "SearchIndex":
        """Build a fresh index with the same settings over a different book set."""
        return SearchIndex(
            books,
            field_weights=self.field_weights,
            threshold=self.threshold,
            min_query_length=self.min_query_length,
        )


def build_index(
    records: Iterable[BookRecord],
    field_weights: Optional[Dict[str, float]] = None,
    **kwargs
) -> SearchIndex:
    """Build a SearchIndex over ``records``."""
    return SearchIndex(records, field_weights=field_weights, **kwargs)


def search(
    books: Iterable[BookRecord],
    query: str,
    index: Optional[SearchIndex] = None
) -> List[ScoredBook]:
    """
    Search books, building a throwaway index when none is given.

    Args:
        books: Books to search
        query: Free-text query
        index: Prebuilt index over ``books`` (preferred for repeated queries)

    Returns:
        Ranked ScoredBooks
    """
    if index is None:
        index = build_index(books)
    return index.query(query)
