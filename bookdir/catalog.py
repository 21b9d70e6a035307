"""In-memory catalog store with id and slug lookups."""
import logging
from datetime import date
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from bookdir.models import BookRecord
from bookdir.parse import deduplicate_books, parse_book

logger = logging.getLogger(__name__)

DEFAULT_MIN_YEAR = 1980


class Catalog:
    """Immutable collection of books with O(1) lookups by id and slug."""

    def __init__(self, books: Iterable[BookRecord]):
        """
        Build the catalog and its lookup indexes.

        Args:
            books: Ordered BookRecord objects with unique ids and slugs
        """
        self._books: Tuple[BookRecord, ...] = tuple(books)
        self._by_id: Dict[str, BookRecord] = {}
        self._by_slug: Dict[str, BookRecord] = {}

        for book in self._books:
            self._by_id.setdefault(book.id, book)
            self._by_slug.setdefault(book.slug, book)

        logger.info(f"Catalog ready with {len(self._books)} books")

    @classmethod
    def load(cls, records: Iterable[Union[BookRecord, Dict[str, Any]]]) -> "Catalog":
        """
        Create a catalog from BookRecords or raw record dicts.

        Dicts that fail to parse are skipped and duplicate ids or slugs are
        collapsed the same way the catalog file loader does.
        """
        books = []
        for record in records:
            if not isinstance(record, BookRecord):
                record = parse_book(record)
            if record is not None:
                books.append(record)
        return cls(deduplicate_books(books))

    def get_by_id(self, book_id: Optional[str]) -> Optional[BookRecord]:
        """Get a book by ID, or None if unknown."""
        if book_id is None:
            return None
        return self._by_id.get(book_id)

    def get_by_slug(self, slug: Optional[str]) -> Optional[BookRecord]:
        """Get a book by slug, or None if unknown."""
        if slug is None:
            return None
        return self._by_slug.get(slug)

    def all(self) -> List[BookRecord]:
        """All books in catalog order."""
        return list(self._books)

    def slugs(self) -> List[str]:
        return [book.slug for book in self._books]

    def categories(self) -> List[str]:
        return sorted({book.category for book in self._books if book.category})

    def topics(self) -> List[str]:
        return self._unique_values("topics")

    def players(self) -> List[str]:
        return self._unique_values("players_mentioned")

    def teams(self) -> List[str]:
        return self._unique_values("teams_mentioned")

    def formats(self) -> List[str]:
        return self._unique_values("formats")

    def year_range(self) -> Tuple[int, int]:
        """
        Get the span of publication years.

        Returns:
            (min_year, max_year), defaulting to (1980, current year)
            when no book has a year
        """
        years = [book.publication_year for book in self._books if book.publication_year]
        if not years:
            return DEFAULT_MIN_YEAR, date.today().year
        return min(years), max(years)

    def filter_options(self) -> Dict[str, Any]:
        """Collect the option lists used to render the filter controls."""
        return {
            "categories": self.categories(),
            "topics": self.topics(),
            "players": self.players(),
            "teams": self.teams(),
            "formats": self.formats(),
            "year_range": self.year_range(),
        }

    def _unique_values(self, field_name: str) -> List[str]:
        values = set()
        for book in self._books:
            values.update(getattr(book, field_name))
        return sorted(values)

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[BookRecord]:
        return iter(self._books)
