"""
FastAPI dependencies — DataStore and PosterClient singletons, filter/sort parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query

from ratings_viz.config import ALL_TYPES, DEFAULT_PAGE_SIZE
from ratings_viz.data.schemas import FilterState, SortDirection, SortKey
from ratings_viz.data.store import DataStore
from ratings_viz.posters import PosterClient

# ---------------------------------------------------------------------------
# Global singletons (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None
_posters: PosterClient | None = None


def set_store(store: DataStore) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


def set_poster_client(client: PosterClient) -> None:
    global _posters
    _posters = client


def get_poster_client() -> PosterClient:
    global _posters
    if _posters is None:
        _posters = PosterClient()
    return _posters


# ---------------------------------------------------------------------------
# Filter / sort parsing from query params
# ---------------------------------------------------------------------------

def parse_filters(
    q: str = Query("", description="Case-insensitive title substring"),
    min_year: Optional[float] = Query(None),
    max_year: Optional[float] = Query(None),
    min_rating: float = Query(0, description="Minimum own rating"),
    title_type: str = Query(ALL_TYPES, description="Exact title type or 'all'"),
    genre: list[str] = Query([], description="Any of these genres (repeatable)"),
) -> FilterState:
    """Parse filter query parameters into a FilterState."""
    return FilterState(
        query=q,
        min_year=min_year,
        max_year=max_year,
        min_rating=min_rating,
        title_type=title_type or ALL_TYPES,
        genres=tuple(genre),
    )


def parse_sort(
    sort: str = Query(SortKey.DATE_RATED.value, description="title|year|your_rating|imdb_rating|date_rated"),
    direction: str = Query(SortDirection.DESC.value, description="asc|desc"),
) -> tuple[SortKey, SortDirection]:
    try:
        key = SortKey(sort)
    except ValueError:
        raise HTTPException(400, f"Invalid sort: {sort}")
    try:
        dirn = SortDirection(direction)
    except ValueError:
        raise HTTPException(400, f"Invalid direction: {direction}")
    return key, dirn


def parse_page(
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=1000),
) -> tuple[int, int]:
    return page, page_size
