"""Search -> filter -> sort query pipeline."""
import logging
from typing import List

from bookdir.filters import filter_scored
from bookdir.models import SORT_RELEVANCE, BookRecord, FilterState
from bookdir.search_index import SearchIndex
from bookdir.sorting import sort_books

logger = logging.getLogger(__name__)


def run_query(
    index: SearchIndex,
    state: FilterState,
    sort_option: str = SORT_RELEVANCE
) -> List[BookRecord]:
    """
    Run the full catalog query for one UI interaction.

    Args:
        index: Search index built over the catalog
        state: Search text and filter selections
        sort_option: One of SORT_OPTIONS

    Returns:
        Ordered list of matching books
    """
    results = index.query(state.search)
    filtered = filter_scored(results, state)
    ordered = sort_books(
        filtered,
        sort_option,
        has_active_query=index.is_active_query(state.search),
    )

    logger.debug(
        f"Query search={state.search!r} filters={state.active_count()} "
        f"sort={sort_option}: {len(results)} matched, {len(ordered)} after filters"
    )
    return ordered
