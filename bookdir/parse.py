"""Parse and normalize catalog records emitted by the ingestion script."""
import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from bookdir.models import BookRecord

logger = logging.getLogger(__name__)

MISSING_MARKERS = {"", "n/a", "nan"}
MIN_YEAR = 1900


class CatalogLoadError(Exception):
    """Raised when the catalog file cannot be read or decoded."""


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip().lower() in MISSING_MARKERS


def _clean_string(value: Any) -> str:
    if _is_missing(value):
        return ""
    return str(value).strip()


def parse_review_count(text: Any) -> Optional[int]:
    """
    Parse a review count display string into a number.

    Args:
        text: Display value such as "3500+", "1.2k" or "1,234"

    Returns:
        Integer review count or None if it cannot be parsed
    """
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        return int(round(text)) if text >= 0 else None
    if _is_missing(text):
        return None

    cleaned = str(text).strip().lower()
    multiplier = 1
    if "k" in cleaned:
        multiplier = 1000
        cleaned = cleaned.replace("k", "")

    cleaned = re.sub(r"[+,\s]", "", cleaned)
    try:
        number = float(cleaned)
    except ValueError:
        return None

    if number < 0:
        return None
    return int(round(number * multiplier))


def _parse_rating(value: Any) -> Optional[float]:
    if _is_missing(value) or isinstance(value, bool):
        return None
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return None
    return rating if 0 <= rating <= 5 else None


def _parse_year(value: Any) -> Optional[int]:
    if _is_missing(value) or isinstance(value, bool):
        return None
    try:
        year = int(value)
    except (TypeError, ValueError):
        return None
    if MIN_YEAR <= year <= date.today().year + 1:
        return year
    return None


def _parse_labels(value: Any) -> Tuple[str, ...]:
    """Strip labels, drop empty entries and dedupe preserving order."""
    if _is_missing(value):
        return ()
    if isinstance(value, str):
        value = re.split(r"[;,]", value)
    elif not isinstance(value, (list, tuple)):
        value = [value]

    labels = []
    for raw in value:
        label = _clean_string(raw)
        if label and label not in labels:
            labels.append(label)
    return tuple(labels)


def parse_book(item: Dict[str, Any]) -> Optional[BookRecord]:
    """
    Parse a single normalized record into a BookRecord.

    Args:
        item: Record dict with camelCase keys (id, slug, title, author, ...)

    Returns:
        BookRecord or None if a required field is missing
    """
    if not isinstance(item, dict):
        logger.warning(f"Skipping non-object record: {item!r:.60}")
        return None

    book_id = _clean_string(item.get("id"))
    slug = _clean_string(item.get("slug"))
    title = _clean_string(item.get("title"))
    if not (book_id and slug and title):
        logger.warning(f"Skipping record missing id/slug/title: {book_id or '?'}")
        return None

    review_display = _clean_string(item.get("reviewCountDisplay")) or "N/A"
    review_count = parse_review_count(item.get("reviewCount"))
    if review_count is None:
        review_count = parse_review_count(review_display)

    return BookRecord(
        id=book_id,
        slug=slug,
        title=title,
        author=_clean_string(item.get("author")) or "Unknown",
        rating=_parse_rating(item.get("rating")),
        review_count=review_count,
        review_count_display=review_display,
        publication_year=_parse_year(item.get("publicationYear")),
        category=_clean_string(item.get("category")) or "General",
        topics=_parse_labels(item.get("topics")),
        players_mentioned=_parse_labels(item.get("playersMentioned")),
        teams_mentioned=_parse_labels(item.get("teamsMentioned")),
        formats=_parse_labels(item.get("formats")),
        description=" ".join(_clean_string(item.get("description")).split()),
        amazon_url=_clean_string(item.get("amazonUrl")),
        publication_date=_clean_string(item.get("publicationDate")) or None,
        asin=_clean_string(item.get("asin")) or None,
        cover_url=_clean_string(item.get("coverUrl")) or None,
    )


def parse_books(items: Iterable[Dict[str, Any]]) -> List[BookRecord]:
    """
    Parse a list of records.

    Args:
        items: Iterable of record dicts

    Returns:
        List of BookRecord objects (invalid records are skipped)
    """
    books = []

    for item in items:
        book = parse_book(item)
        if book:
            books.append(book)

    return books


def deduplicate_books(books: List[BookRecord]) -> List[BookRecord]:
    """
    Remove duplicate books by ID, then by slug.

    When an ID repeats, the copy with more reviews wins but keeps the
    position of the first occurrence.

    Args:
        books: List of BookRecord objects

    Returns:
        Deduplicated list of books
    """
    by_id: Dict[str, BookRecord] = {}

    for book in books:
        existing = by_id.get(book.id)
        if existing is None:
            by_id[book.id] = book
            continue

        logger.warning(f"Duplicate found: {book.title} by {book.author}")
        if (book.review_count or 0) > (existing.review_count or 0):
            by_id[book.id] = book

    seen_slugs = set()
    unique_books = []

    for book in by_id.values():
        if book.slug in seen_slugs:
            logger.warning(f"Dropping book {book.id} with duplicate slug {book.slug}")
            continue
        seen_slugs.add(book.slug)
        unique_books.append(book)

    return unique_books


def load_books_file(path: Union[str, Path]) -> List[BookRecord]:
    """
    Load and normalize the catalog JSON file.

    Args:
        path: Path to a JSON list of records, or an object with a "books" list

    Returns:
        Deduplicated list of BookRecord objects

    Raises:
        CatalogLoadError: If the file is missing or is not valid JSON
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Catalog file is not valid JSON: {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("books", [])
    if not isinstance(data, list):
        raise CatalogLoadError(f"Catalog file must hold a list of books: {path}")

    books = deduplicate_books(parse_books(data))
    logger.info(f"Loaded {len(books)} books from {path}")
    return books
