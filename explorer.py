#!/usr/bin/env python3
"""Book Directory Explorer CLI - search, filter and browse the catalog."""
import argparse
import json
import sys
from tabulate import tabulate
from bookdir.catalog import Catalog
from bookdir.config import Config
from bookdir.facets import compute_facets, top_values
from bookdir.models import FACET_FIELDS, SORT_OPTIONS, SORT_RELEVANCE, FilterState
from bookdir.parse import load_books_file
from bookdir.query import run_query
from bookdir.search_index import build_index
from bookdir.similarity import similar_to
from bookdir.sorting import sort_books
import logging

logger = logging.getLogger(__name__)


def setup_logging(config: Config):
    """Configure root logging."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def load_catalog(args, config: Config) -> Catalog:
    """Load the catalog from --catalog or the configured path."""
    return Catalog(load_books_file(args.catalog or config.CATALOG_PATH))


def find_book(catalog: Catalog, key: str):
    """Look up a book by slug, then by ID."""
    return catalog.get_by_slug(key) or catalog.get_by_id(key)


def truncate(text: str, width: int) -> str:
    return text[:width] + "..." if len(text) > width else text


def display_books(books, format_type: str):
    """Display books in specified format."""
    if format_type == "table":
        headers = ["Title", "Author", "Year", "Rating", "Reviews", "Category"]
        rows = [
            [
                truncate(book.title, 50),
                truncate(book.author, 30),
                book.publication_year or "Unknown",
                book.rating if book.rating is not None else "N/A",
                book.review_count_display,
                truncate(book.category, 25)
            ]
            for book in books
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([book.to_dict() for book in books], indent=2))

    elif format_type == "compact":
        for i, book in enumerate(books, 1):
            print(f"{i}. {book.title} - {book.author}")


def search_catalog(args, config: Config):
    """Search, filter and sort the catalog."""
    catalog = load_catalog(args, config)
    index = build_index(
        catalog.all(),
        threshold=config.SEARCH_THRESHOLD,
        min_query_length=config.SEARCH_MIN_QUERY_LENGTH
    )

    state = FilterState(
        search=args.query or "",
        categories=tuple(args.category),
        topics=tuple(args.topic),
        players=tuple(args.player),
        teams=tuple(args.team),
        formats=tuple(args.format),
        min_rating=args.min_rating,
        year_range=(args.year_from, args.year_to)
    )

    books = run_query(index, state, args.sort)
    logger.info(f"Found {len(books)} books ({state.active_count()} active filters)")

    display_books(books[:args.limit], args.output_format)


def show_book(args, config: Config):
    """Show a single book."""
    catalog = load_catalog(args, config)
    book = find_book(catalog, args.key)

    if not book:
        logger.error(f"No book found for {args.key!r}")
        sys.exit(1)

    rows = [
        ["Title", book.title],
        ["Author", book.author],
        ["Rating", book.rating if book.rating is not None else "N/A"],
        ["Reviews", book.review_count_display],
        ["Published", book.publication_date or book.publication_year or "Unknown"],
        ["Category", book.category],
        ["Formats", book.formats_str],
        ["Topics", book.topics_str],
        ["Players", ", ".join(book.players_mentioned) or "None"],
        ["Teams", ", ".join(book.teams_mentioned) or "None"],
        ["Slug", book.slug],
    ]
    print("\n" + tabulate(rows, tablefmt="grid"))
    if book.description:
        print(f"\n{book.description}\n")


def show_similar(args, config: Config):
    """Show books similar to one book."""
    catalog = load_catalog(args, config)
    book = find_book(catalog, args.key)

    if not book:
        logger.error(f"No book found for {args.key!r}")
        sys.exit(1)

    similar = similar_to(book, catalog, args.limit or config.SIMILAR_LIMIT)
    logger.info(f"{len(similar)} books similar to {book.title}")
    display_books(similar, args.output_format)


def show_facets(args, config: Config):
    """Show facet counts over the full catalog."""
    catalog = load_catalog(args, config)
    facets = compute_facets(catalog)
    limit = args.top or config.FACET_TOP_LIMIT

    for name in args.field or facets.keys():
        rows = top_values(facets[name], limit)
        print(f"\n{name.upper()} ({len(facets[name])} values)")
        print(tabulate(rows, headers=["Value", "Books"], tablefmt="simple"))


def show_stats(args, config: Config):
    """Show catalog statistics."""
    catalog = load_catalog(args, config)
    options = catalog.filter_options()
    year_from, year_to = options["year_range"]

    print("\n" + "=" * 50)
    print("CATALOG STATISTICS")
    print("=" * 50)
    print(f"Total books: {len(catalog)}")
    print(f"Categories: {len(options['categories'])}")
    print(f"Topics: {len(options['topics'])}")
    print(f"Players mentioned: {len(options['players'])}")
    print(f"Teams mentioned: {len(options['teams'])}")
    print(f"Formats: {', '.join(options['formats'])}")
    print(f"Year range: {year_from} - {year_to}")
    print("=" * 50)

    print("\nTop 5 by reviews:")
    for i, book in enumerate(sort_books(catalog, "reviews-desc")[:5], 1):
        print(f"  {i}. {book.title} ({book.review_count_display} reviews)")
    print()


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Book Explorer - browse the book directory catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fuzzy search (typos are fine)
  %(prog)s search "jordn"

  # Filter and sort without a query
  %(prog)s search --category Biography --min-rating 4.5 --sort newest

  # Books similar to a given slug
  %(prog)s similar eleven-rings-the-soul-of-success-phil-jackson-3f2a1b --limit 5

  # Facet counts
  %(prog)s facets --field players --top 20
        """
    )
    parser.add_argument("--catalog", help="Catalog JSON file (default: $CATALOG_PATH)")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search and filter books")
    search_parser.add_argument("query", nargs="?", default="", help="Search query")
    search_parser.add_argument("--category", action="append", default=[], help="Category (repeatable)")
    search_parser.add_argument("--topic", action="append", default=[], help="Topic (repeatable)")
    search_parser.add_argument("--player", action="append", default=[], help="Player (repeatable)")
    search_parser.add_argument("--team", action="append", default=[], help="Team (repeatable)")
    search_parser.add_argument("--format", action="append", default=[], help="Format (repeatable)")
    search_parser.add_argument("--min-rating", type=float, help="Minimum rating")
    search_parser.add_argument("--year-from", type=int, help="Earliest publication year")
    search_parser.add_argument("--year-to", type=int, help="Latest publication year")
    search_parser.add_argument("--sort", choices=SORT_OPTIONS, default=SORT_RELEVANCE, help="Sort order")
    search_parser.add_argument("--limit", type=int, default=20, help="Max results (default: 20)")
    search_parser.add_argument("--output-format", choices=["table", "json", "compact"], default="table", help="Output format")

    # Show command
    show_parser = subparsers.add_parser("show", help="Show one book")
    show_parser.add_argument("key", help="Book slug or ID")

    # Similar command
    similar_parser = subparsers.add_parser("similar", help="Show similar books")
    similar_parser.add_argument("key", help="Book slug or ID")
    similar_parser.add_argument("--limit", type=int, help="Max results (default: $SIMILAR_LIMIT)")
    similar_parser.add_argument("--output-format", choices=["table", "json", "compact"], default="table", help="Output format")

    # Facets command
    facets_parser = subparsers.add_parser("facets", help="Show facet counts")
    facets_parser.add_argument("--field", action="append", choices=FACET_FIELDS, help="Facet to show (repeatable)")
    facets_parser.add_argument("--top", type=int, help="Values per facet (default: $FACET_TOP_LIMIT)")

    # Stats command
    subparsers.add_parser("stats", help="Show catalog statistics")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config()
    setup_logging(config)

    try:
        if args.command == "search":
            search_catalog(args, config)

        elif args.command == "show":
            show_book(args, config)

        elif args.command == "similar":
            show_similar(args, config)

        elif args.command == "facets":
            show_facets(args, config)

        elif args.command == "stats":
            show_stats(args, config)

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
