"""
Header alias lookup, field parsing, and raw row → CanonicalRecord normalization.
"""
from __future__ import annotations

import datetime as dt
import math
import re
import warnings

import pandas as pd

from ratings_viz.config import COLUMN_ALIASES
from ratings_viz.data.schemas import CanonicalRecord

_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]")
_DIGIT_RE = re.compile(r"\d")


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------

def parse_number(value) -> float | None:
    """Parse a loosely formatted number; anything unusable becomes None.

    Everything except digits, '.' and '-' is stripped before conversion, so
    "1,234" → 1234.0 and "N/A" → None, but "7-8" → None.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if math.isfinite(value) else None
    cleaned = _NON_NUMERIC_RE.sub("", str(value))
    if cleaned == "":
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_date(value) -> dt.date | None:
    """Parse a date string in whatever format pandas can infer; time is dropped."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    # Digit-free text ("now", "today") is never a date
    if not _DIGIT_RE.search(text):
        return None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            ts = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
    if pd.isna(ts):
        return None
    return ts.date()


def split_genres(value) -> tuple[str, ...]:
    """Comma-separated genres → trimmed tuple (order and duplicates kept)."""
    if not value:
        return ()
    return tuple(g.strip() for g in str(value).split(",") if g.strip())


def _as_year(value: float | None):
    if value is not None and value.is_integer():
        return int(value)
    return value


# ---------------------------------------------------------------------------
# Header lookup
# ---------------------------------------------------------------------------

def _header_key(name) -> str:
    return str(name).strip().lstrip("\ufeff").strip().lower()


def header_index(row: dict) -> dict[str, str]:
    """Map normalized header name → cell value (first spelling of a header wins)."""
    index: dict[str, str] = {}
    for key, value in row.items():
        if key is None:
            continue
        index.setdefault(_header_key(key), "" if value is None else str(value))
    return index


def lookup(index: dict[str, str], aliases: list[str]) -> str:
    """Return the first non-empty value among the alias spellings, else ""."""
    for alias in aliases:
        value = index.get(_header_key(alias), "")
        if value.strip():
            return value
    return ""


# ---------------------------------------------------------------------------
# Row normalization
# ---------------------------------------------------------------------------

def normalize_row(row: dict, index: int) -> CanonicalRecord:
    """Build the canonical record for one parsed CSV row. Never raises."""
    cells = header_index(row)

    def get(field_name: str) -> str:
        return lookup(cells, COLUMN_ALIASES[field_name])

    return CanonicalRecord(
        title=get("title"),
        title_type=get("title_type"),
        url=get("url"),
        genres=split_genres(get("genres")),
        directors=get("directors"),
        external_id=get("external_id") or str(index),
        your_rating=parse_number(get("your_rating")),
        imdb_rating=parse_number(get("imdb_rating")),
        runtime_minutes=parse_number(get("runtime_minutes")),
        year=_as_year(parse_number(get("year"))),
        date_rated=parse_date(get("date_rated")),
        release_date=parse_date(get("release_date")),
        source={str(k): ("" if v is None else str(v)) for k, v in row.items() if k is not None},
    )


def normalize_rows(rows: list[dict]) -> list[CanonicalRecord]:
    """Normalize every raw row, preserving order (1:1)."""
    return [normalize_row(row, i) for i, row in enumerate(rows)]
