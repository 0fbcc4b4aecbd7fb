"""
Table view — sort and paginate the filtered records.
"""
from __future__ import annotations

import math

from ratings_viz.config import DEFAULT_PAGE_SIZE
from ratings_viz.data.schemas import CanonicalRecord, SortDirection, SortKey, TableView


def _sort_value(record: CanonicalRecord, key: SortKey):
    if key == SortKey.TITLE:
        return record.title.casefold()
    return getattr(record, key.value)


def _sort_key(key: SortKey):
    # Missing values rank below everything else
    def keyfunc(record: CanonicalRecord):
        value = _sort_value(record, key)
        return (0,) if value is None else (1, value)
    return keyfunc


def sort_records(
    records: list[CanonicalRecord],
    key: SortKey = SortKey.DATE_RATED,
    direction: SortDirection = SortDirection.DESC,
) -> list[CanonicalRecord]:
    return sorted(records, key=_sort_key(SortKey(key)), reverse=SortDirection(direction) == SortDirection.DESC)


def total_pages(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def build_view(
    records: list[CanonicalRecord],
    sort_key: SortKey = SortKey.DATE_RATED,
    direction: SortDirection = SortDirection.DESC,
    page_size: int = DEFAULT_PAGE_SIZE,
    page: int = 1,
) -> TableView:
    """Sorted page of records. Out-of-range pages clamp to the nearest valid page."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    pages = total_pages(len(records), page_size)
    page = min(max(page, 1), pages)

    ordered = sort_records(records, sort_key, direction)
    start = (page - 1) * page_size
    return TableView(
        rows=ordered[start:start + page_size],
        page=page,
        page_size=page_size,
        total_pages=pages,
        total=len(records),
    )


def table_row(record: CanonicalRecord, poster: str | None = None) -> dict:
    """JSON-ready row for the ratings table."""
    return {
        "external_id": record.external_id,
        "title": record.title,
        "title_type": record.title_type,
        "url": record.url or None,
        "year": record.year,
        "your_rating": record.your_rating,
        "imdb_rating": record.imdb_rating,
        "runtime_minutes": record.runtime_minutes,
        "genres": list(record.genres),
        "directors": record.directors,
        "date_rated": record.date_rated,
        "release_date": record.release_date,
        "poster": poster,
    }
