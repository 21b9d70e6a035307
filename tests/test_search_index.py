"""Tests for the fuzzy text index."""
import pytest

from bookdir.catalog import Catalog
from bookdir.search_index import build_index, field_ratio, search


@pytest.fixture
def catalog(sample_records):
    return Catalog.load(sample_records)


@pytest.fixture
def index(catalog):
    return build_index(catalog.all())


@pytest.mark.parametrize("query", ["", "   ", "a", " a "])
def test_short_query_passes_everything_through(index, catalog, query):
    """Empty and one-character queries do not narrow the results."""
    results = index.query(query)

    assert [r.book for r in results] == catalog.all()
    assert all(r.score == 0.0 for r in results)


def test_non_string_query_passes_through(index, catalog):
    assert len(index.query(None)) == len(catalog)


def test_exact_title_ranks_first(index):
    results = index.query("Jordan Rules")

    assert results[0].book.id == "rules1"


def test_typo_tolerance(index):
    results = index.query("Mamba Mentalty")

    assert results
    assert results[0].book.id == "mamba1"


def test_matches_multi_valued_fields(index):
    """A player name only present in playersMentioned still matches."""
    results = index.query("Scottie Pippen")

    assert [r.book.id for r in results][0] == "rules1"


def test_no_match_returns_empty(index):
    assert index.query("qqqqqqqq") == []


def test_scores_ascend(index):
    results = index.query("Phil Jackson")
    scores = [r.score for r in results]

    assert scores == sorted(scores)
    assert {r.book.id for r in results[:2]} == {"rings1", "hoops1"}


def test_title_outweighs_description(make_book):
    in_title = make_book("t", title="Leadership Lessons")
    in_description = make_book(
        "d", title="Court Vision", description="Notes on leadership under pressure."
    )
    index = build_index([in_description, in_title])

    results = index.query("leadership")

    assert [r.book.id for r in results] == ["t", "d"]


def test_author_outweighs_description(make_book):
    by_author = make_book("a", title="Sacred Hoops", author="Phil Jackson")
    mentions = make_book("d", title="Court Vision", description="Interview with Phil Jackson.")
    index = build_index([mentions, by_author])

    results = index.query("phil jackson")

    assert [r.book.id for r in results] == ["a", "d"]


def test_custom_field_weights(catalog):
    """Only the configured fields are searched."""
    index = build_index(catalog.all(), {"title": 1.0})

    assert index.query("Scottie Pippen") == []


def test_rebuild_for_different_book_set(index, catalog):
    subset = [book for book in catalog.all() if book.category == "Coaching"]

    rebuilt = index.rebuild(subset)

    assert [r.book.id for r in rebuilt.query("")] == ["rings1", "hoops1"]
    assert all(r.book.category == "Coaching" for r in rebuilt.query("Jordan"))
    assert len(index.query("")) == 4


def test_search_helper_builds_index(catalog):
    results = search(catalog.all(), "Eleven Rings")

    assert results[0].book.id == "rings1"


def test_search_helper_pass_through(catalog):
    assert len(search(catalog.all(), "")) == len(catalog)
    assert len(search(catalog.all(), "a")) == len(catalog)


def test_empty_index():
    index = build_index([])

    assert index.query("") == []
    assert index.query("jordan") == []


def test_title_outweighs_author(make_book):
    by_author = make_book("a", title="Sacred Hoops", author="Court Vision")
    by_title = make_book("t", title="Court Vision")
    index = build_index([by_author, by_title])

    results = index.query("court vision")

    assert [r.book.id for r in results] == ["t", "a"]


def test_author_outweighs_players(make_book):
    mentions = make_book("p", players_mentioned=("Larry Bird",))
    by_author = make_book("a", author="Larry Bird")
    index = build_index([mentions, by_author])

    results = index.query("larry bird")

    assert [r.book.id for r in results] == ["a", "p"]


@pytest.mark.parametrize("field_name", ["players_mentioned", "teams_mentioned"])
def test_players_and_teams_outweigh_topics(make_book, field_name):
    by_topic = make_book("o", topics=("Boston Celtics",))
    by_field = make_book("f", **{field_name: ("Boston Celtics",)})
    index = build_index([by_topic, by_field])

    results = index.query("boston celtics")

    assert [r.book.id for r in results] == ["f", "o"]


def test_near_exact_title_beats_short_label_inside_query(make_book):
    """A short topic contained in a longer query is only a partial match."""
    by_title = make_book("t", title="Draft Picks: An Analysis")
    by_topic = make_book("g", title="Hardwood Memoirs", topics=("Draft",))
    index = build_index([by_topic, by_title])

    results = index.query("draft picks analysis")

    assert results[0].book.id == "t"
    assert "g" not in [r.book.id for r in results]


def test_short_label_inside_unrelated_query_does_not_match(make_book):
    index = build_index([make_book("h", teams_mentioned=("Heat",))])

    assert index.query("theater history") == []


def test_field_ratio_scales_entries_shorter_than_query():
    assert field_ratio("boston celtics", "boston celtics") == 100
    assert field_ratio("heat", "miami heat") == 100
    assert field_ratio("theater history", "heat") <= 100 * 4 / 15
    assert field_ratio("theater history", "heat", score_cutoff=60) == 0.0
    assert field_ratio("", "heat") == 0.0
