"""Filter evaluation: neutral filters, permissive-on-absence, AND/OR semantics."""
from ratings_viz.data.filters import apply_filters, matches
from ratings_viz.data.schemas import FilterState

from conftest import make_record


RECORDS = [
    make_record(title="Dune", year=2021, your_rating=8, title_type="movie", genres=("Sci-Fi", "Adventure")),
    make_record(title="Dune: Part Two", year=2024, your_rating=9, title_type="movie", genres=("Sci-Fi",)),
    make_record(title="Chernobyl", year=2019, your_rating=10, title_type="tvMiniSeries", genres=("Drama", "History")),
    make_record(title="Mystery Box", year=None, your_rating=None, title_type="", genres=()),
]


def test_neutral_filter_matches_everything():
    state = FilterState()
    assert state.is_neutral()
    assert all(matches(r, state) for r in RECORDS)
    assert apply_filters(RECORDS, state) == RECORDS


def test_no_filter_state_returns_copy():
    out = apply_filters(RECORDS, None)
    assert out == RECORDS and out is not RECORDS


def test_null_year_passes_any_year_range():
    state = FilterState(min_year=2030, max_year=2040)
    assert matches(RECORDS[3], state)
    assert not any(matches(r, state) for r in RECORDS[:3])


def test_year_range_is_inclusive():
    state = FilterState(min_year=2019, max_year=2021)
    assert [r.title for r in apply_filters(RECORDS, state)] == ["Dune", "Chernobyl", "Mystery Box"]


def test_query_is_case_insensitive_substring():
    state = FilterState(query="  dUNe ")
    assert [r.title for r in apply_filters(RECORDS, state)] == ["Dune", "Dune: Part Two"]


def test_min_rating_keeps_unrated():
    state = FilterState(min_rating=9)
    assert [r.title for r in apply_filters(RECORDS, state)] == ["Dune: Part Two", "Chernobyl", "Mystery Box"]


def test_zero_min_rating_keeps_negative_ratings():
    odd = make_record(title="Odd", your_rating=-1.0)
    assert matches(odd, FilterState())
    assert not matches(odd, FilterState(min_rating=1))


def test_title_type_exact_match():
    state = FilterState(title_type="movie")
    assert [r.title for r in apply_filters(RECORDS, state)] == ["Dune", "Dune: Part Two"]
    assert len(apply_filters(RECORDS, FilterState(title_type="all"))) == 4


def test_genres_match_any():
    state = FilterState(genres=("History", "Adventure"))
    assert [r.title for r in apply_filters(RECORDS, state)] == ["Dune", "Chernobyl"]


def test_dimensions_combine_with_and():
    state = FilterState(query="dune", min_rating=9, genres=("Sci-Fi",))
    assert [r.title for r in apply_filters(RECORDS, state)] == ["Dune: Part Two"]
    assert not state.is_neutral()
