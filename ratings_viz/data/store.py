"""
DataStore — in-memory ratings snapshot.

Every successful load replaces the whole snapshot (raw rows, columns, records);
a failed load leaves the previous snapshot untouched.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import requests
from loguru import logger

from ratings_viz.config import DEFAULT_YEAR_RANGE, PREFERENCES_FILE
from ratings_viz.data.filters import apply_filters
from ratings_viz.data.loader import (
    LoadError,
    export_csv,
    fetch_csv_text,
    parse_csv_text,
    read_csv_file,
)
from ratings_viz.data.normalize import normalize_rows
from ratings_viz.data.preferences import load_preferences, remember_source_url
from ratings_viz.data.schemas import CanonicalRecord, FilterState


class DataStore:
    """Current ratings data with filtered accessors."""

    def __init__(self, preferences_path: Path = PREFERENCES_FILE) -> None:
        self.raw_rows: list[dict[str, str]] = []
        self.columns: list[str] = []
        self.records: list[CanonicalRecord] = []
        self.source: Optional[str] = None
        self.preferences_path = preferences_path

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _replace(self, rows: list[dict[str, str]], columns: list[str], source: str) -> "DataStore":
        records = normalize_rows(rows)
        self.raw_rows, self.columns, self.records, self.source = rows, columns, records, source
        logger.info(f"[Store] Loaded {len(records):,} rows from {source}")
        return self

    def load_rows(self, rows: list[dict[str, str]], source: str = "rows") -> "DataStore":
        """Load already-parsed rows (column order taken from the first row)."""
        columns = list(rows[0].keys()) if rows else []
        return self._replace(list(rows), columns, source)

    def load_text(self, text: str, source: str = "text") -> "DataStore":
        rows, columns = parse_csv_text(text)
        return self._replace(rows, columns, source)

    def load_file(self, filepath: str | Path) -> "DataStore":
        rows, columns = read_csv_file(filepath)
        return self._replace(rows, columns, Path(filepath).name)

    def load_paste(self, text: str) -> "DataStore":
        """Load pasted clipboard text; text without a comma is not treated as CSV."""
        if not text or "," not in text:
            raise LoadError("Pasted text does not look like CSV.")
        return self.load_text(text, source="paste")

    def load_url(self, url: str, session: requests.Session | None = None) -> "DataStore":
        """Fetch CSV from a URL and remember the URL once it loads."""
        text = fetch_csv_text(url, session=session)
        self.load_text(text, source=url.strip())
        remember_source_url(url.strip(), self.preferences_path)
        return self

    def reload(self, session: requests.Session | None = None) -> "DataStore":
        """Re-fetch the last remembered URL."""
        url = load_preferences(self.preferences_path).source_url
        if not url:
            raise LoadError("No saved source URL to reload.")
        return self.load_url(url, session=session)

    @property
    def is_loaded(self) -> bool:
        return bool(self.records)

    # ------------------------------------------------------------------
    # Filtering & export
    # ------------------------------------------------------------------

    def filtered(self, state: FilterState | None = None) -> list[CanonicalRecord]:
        return apply_filters(self.records, state)

    def export_csv(self, state: FilterState | None = None) -> str:
        """Filtered (not paginated) rows as CSV in the source's own columns."""
        return export_csv(self.filtered(state), self.columns or None)

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def title_types(self) -> list[str]:
        return sorted({r.title_type for r in self.records if r.title_type})

    def genres(self) -> list[str]:
        return sorted({g for r in self.records for g in r.genres})

    def year_range(self) -> tuple[float, float]:
        """(min, max) year across all records, used as the default year filter."""
        years = [r.year for r in self.records if r.year is not None]
        if not years:
            return DEFAULT_YEAR_RANGE
        return min(years), max(years)

    def options(self) -> dict:
        return {
            "title_types": self.title_types(),
            "genres": self.genres(),
            "year_range": list(self.year_range()),
        }

    def row_count(self) -> int:
        return len(self.records)
