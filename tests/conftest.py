"""Shared fixtures for engine tests."""
import pytest

from bookdir.models import BookRecord


def _book(book_id, **overrides):
    fields = {
        "id": book_id,
        "slug": f"book-{book_id}",
        "title": f"Book {book_id}",
        "author": "Unknown",
    }
    fields.update(overrides)
    return BookRecord(**fields)


@pytest.fixture
def make_book():
    """Factory for BookRecords with sensible defaults."""
    return _book


@pytest.fixture
def book_a():
    return _book(
        "A",
        title="Alpha Leadership",
        author="Ann Writer",
        category="Biography",
        topics=("Leadership",),
        rating=4.8,
        review_count=12000,
        review_count_display="12000+",
        publication_year=2020,
    )


@pytest.fixture
def book_b():
    return _book(
        "B",
        title="Bravo Coaching",
        author="Bob Author",
        category="Biography",
        topics=("Leadership", "Coaching"),
        rating=4.0,
        review_count=300,
        review_count_display="300",
        publication_year=2005,
    )


@pytest.fixture
def book_c():
    return _book(
        "C",
        title="Charlie Chronicles",
        author="Cal Historian",
        category="History",
        rating=None,
        publication_year=1995,
    )


@pytest.fixture
def scenario_books(book_a, book_b, book_c):
    return [book_a, book_b, book_c]


@pytest.fixture
def sample_records():
    """Normalized JSON records as emitted by the ingestion script."""
    return [
        {
            "id": "rings1",
            "slug": "eleven-rings-phil-jackson-rings1",
            "title": "Eleven Rings",
            "author": "Phil Jackson",
            "rating": 4.7,
            "reviewCount": 3500,
            "reviewCountDisplay": "3500+",
            "publicationYear": 2013,
            "formats": ["Paperback", "Kindle"],
            "category": "Coaching",
            "description": "A coach reflects on the championship teams he led.",
            "playersMentioned": ["Michael Jordan", "Kobe Bryant"],
            "teamsMentioned": ["Chicago Bulls", "Los Angeles Lakers"],
            "topics": ["Leadership", "Championships"],
        },
        {
            "id": "rules1",
            "slug": "the-jordan-rules-sam-smith-rules1",
            "title": "The Jordan Rules",
            "author": "Sam Smith",
            "rating": 4.5,
            "reviewCount": 1200,
            "reviewCountDisplay": "1.2k",
            "publicationYear": 1992,
            "formats": ["Paperback"],
            "category": "Team History",
            "description": "An inside account of a turbulent season in Chicago.",
            "playersMentioned": ["Michael Jordan", "Scottie Pippen"],
            "teamsMentioned": ["Chicago Bulls"],
            "topics": ["Championships", "Locker Room"],
        },
        {
            "id": "mamba1",
            "slug": "the-mamba-mentality-kobe-bryant-mamba1",
            "title": "The Mamba Mentality",
            "author": "Kobe Bryant",
            "rating": 4.8,
            "reviewCount": 12000,
            "reviewCountDisplay": "12000+",
            "publicationYear": 2018,
            "formats": ["Hardcover"],
            "category": "Biography",
            "description": "On preparation and competing at the highest level.",
            "playersMentioned": ["Kobe Bryant"],
            "teamsMentioned": ["Los Angeles Lakers"],
            "topics": ["Mindset", "Training"],
        },
        {
            "id": "hoops1",
            "slug": "sacred-hoops-phil-jackson-hoops1",
            "title": "Sacred Hoops",
            "author": "Phil Jackson",
            "rating": None,
            "reviewCount": None,
            "reviewCountDisplay": "N/A",
            "publicationYear": None,
            "formats": ["Paperback"],
            "category": "Coaching",
            "description": "Spiritual lessons of a hardwood warrior.",
            "playersMentioned": ["Michael Jordan"],
            "teamsMentioned": ["Chicago Bulls"],
            "topics": ["Leadership", "Mindfulness"],
        },
    ]
