"""Data models for the book directory."""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union


# Sort options
SORT_RELEVANCE = "relevance"
SORT_RATING_DESC = "rating-desc"
SORT_REVIEWS_DESC = "reviews-desc"
SORT_NEWEST = "newest"
SORT_TITLE_ASC = "title-asc"

SORT_OPTIONS = (
    SORT_RELEVANCE,
    SORT_RATING_DESC,
    SORT_REVIEWS_DESC,
    SORT_NEWEST,
    SORT_TITLE_ASC,
)

FACET_FIELDS = ("categories", "topics", "formats", "players", "teams", "years")

# facet name -> {value: count}; year keys are ints
FacetCounts = Dict[str, Dict[Union[str, int], int]]


@dataclass(frozen=True)
class BookRecord:
    """Normalized book representation, immutable once loaded."""
    id: str
    slug: str
    title: str
    author: str
    rating: Optional[float] = None
    review_count: Optional[int] = None
    review_count_display: str = "N/A"
    publication_year: Optional[int] = None
    category: str = "General"
    topics: Tuple[str, ...] = ()
    players_mentioned: Tuple[str, ...] = ()
    teams_mentioned: Tuple[str, ...] = ()
    formats: Tuple[str, ...] = ()
    description: str = ""
    amazon_url: str = ""
    publication_date: Optional[str] = None
    asin: Optional[str] = None
    cover_url: Optional[str] = None

    @property
    def topics_str(self) -> str:
        """Format topics as comma-separated string."""
        return ", ".join(self.topics) if self.topics else "None"

    @property
    def formats_str(self) -> str:
        return "/".join(self.formats) if self.formats else "N/A"

    def to_dict(self) -> Dict:
        """Serialize back to the camelCase JSON record shape."""
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "author": self.author,
            "rating": self.rating,
            "reviewCount": self.review_count,
            "reviewCountDisplay": self.review_count_display,
            "publicationDate": self.publication_date,
            "publicationYear": self.publication_year,
            "formats": list(self.formats),
            "amazonUrl": self.amazon_url,
            "category": self.category,
            "description": self.description,
            "playersMentioned": list(self.players_mentioned),
            "teamsMentioned": list(self.teams_mentioned),
            "topics": list(self.topics),
            "asin": self.asin,
            "coverUrl": self.cover_url,
        }


@dataclass(frozen=True)
class ScoredBook:
    """A book paired with its text-match score (lower is better, 0 is exact)."""
    book: BookRecord
    score: float = 0.0


@dataclass
class FilterState:
    """
    Query descriptor for the catalog UI.

    Empty selections mean "no constraint from this field". Either bound of
    ``year_range`` may be None, meaning unbounded on that side.
    """
    search: str = ""
    categories: Tuple[str, ...] = ()
    topics: Tuple[str, ...] = ()
    players: Tuple[str, ...] = ()
    teams: Tuple[str, ...] = ()
    formats: Tuple[str, ...] = ()
    min_rating: Optional[float] = None
    year_range: Tuple[Optional[int], Optional[int]] = field(default=(None, None))

    def active_count(self) -> int:
        """Count active constraints the way the filter badge shows them."""
        count = (
            len(self.categories)
            + len(self.topics)
            + len(self.players)
            + len(self.teams)
            + len(self.formats)
        )
        if self.min_rating:
            count += 1
        if self.year_range[0] or self.year_range[1]:
            count += 1
        return count
