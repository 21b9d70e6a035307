"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Catalog
    CATALOG_PATH = os.getenv("CATALOG_PATH", "data/books.json")

    # Search
    SEARCH_THRESHOLD = float(os.getenv("SEARCH_THRESHOLD", "0.4"))
    SEARCH_MIN_QUERY_LENGTH = int(os.getenv("SEARCH_MIN_QUERY_LENGTH", "2"))

    # Presentation defaults
    SIMILAR_LIMIT = int(os.getenv("SIMILAR_LIMIT", "6"))
    FACET_TOP_LIMIT = int(os.getenv("FACET_TOP_LIMIT", "50"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
