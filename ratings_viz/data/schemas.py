"""
Record, filter, and table-view schemas.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ratings_viz.config import ALL_TYPES, DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class CanonicalRecord:
    """One normalized ratings row. Built once per raw row, never mutated."""
    title: str = ""
    title_type: str = ""
    url: str = ""
    genres: tuple[str, ...] = ()
    directors: str = ""
    external_id: str = ""
    your_rating: Optional[float] = None
    imdb_rating: Optional[float] = None
    runtime_minutes: Optional[float] = None
    year: Optional[float] = None
    date_rated: Optional[dt.date] = None
    release_date: Optional[dt.date] = None
    source: dict[str, str] = field(default_factory=dict, repr=False)  # raw row, for export

    def director_names(self) -> list[str]:
        """Split the raw directors field into trimmed names."""
        if not self.directors:
            return []
        return [d.strip() for d in self.directors.split(",") if d.strip()]


@dataclass
class FilterState:
    """Active dashboard filters. Every field at its default means "no constraint"."""
    query: str = ""
    min_year: Optional[float] = None
    max_year: Optional[float] = None
    min_rating: float = 0
    title_type: str = ALL_TYPES
    genres: tuple[str, ...] = ()

    def is_neutral(self) -> bool:
        return (
            not self.query.strip()
            and self.min_year is None
            and self.max_year is None
            and not self.min_rating
            and (not self.title_type or self.title_type == ALL_TYPES)
            and not self.genres
        )


class SortKey(str, Enum):
    TITLE = "title"
    YEAR = "year"
    YOUR_RATING = "your_rating"
    IMDB_RATING = "imdb_rating"
    DATE_RATED = "date_rated"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class TableView:
    """One page of the sorted, filtered table."""
    rows: list[CanonicalRecord]
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int = 1
    total: int = 0
