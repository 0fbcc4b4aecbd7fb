"""
Filter evaluation. A record missing the field a filter targets passes that filter.
"""
from __future__ import annotations

from ratings_viz.config import ALL_TYPES
from ratings_viz.data.schemas import CanonicalRecord, FilterState


def _query_ok(record: CanonicalRecord, query: str) -> bool:
    q = query.strip().lower()
    return not q or q in record.title.lower()


def _year_ok(record: CanonicalRecord, state: FilterState) -> bool:
    if record.year is None:
        return True
    if state.min_year is not None and record.year < state.min_year:
        return False
    if state.max_year is not None and record.year > state.max_year:
        return False
    return True


def _rating_ok(record: CanonicalRecord, min_rating: float) -> bool:
    if not min_rating:
        return True
    return record.your_rating is None or record.your_rating >= min_rating


def _type_ok(record: CanonicalRecord, title_type: str) -> bool:
    return not title_type or title_type == ALL_TYPES or record.title_type == title_type


def _genres_ok(record: CanonicalRecord, genres) -> bool:
    if not genres:
        return True
    wanted = set(genres)
    return any(g in wanted for g in record.genres)


def matches(record: CanonicalRecord, state: FilterState) -> bool:
    """True when the record passes every active filter dimension."""
    return (
        _year_ok(record, state)
        and _type_ok(record, state.title_type)
        and _rating_ok(record, state.min_rating)
        and _query_ok(record, state.query)
        and _genres_ok(record, state.genres)
    )


def apply_filters(records: list[CanonicalRecord], state: FilterState | None) -> list[CanonicalRecord]:
    """Filtered view of records in original order."""
    if state is None:
        return list(records)
    return [r for r in records if matches(r, state)]
