"""
CSV parsing from text, files and URLs, plus CSV export of filtered records.
"""
from __future__ import annotations

import io
from pathlib import Path

import pandas as pd
import requests
from loguru import logger

from ratings_viz.config import DERIVED_PREFIX, REQUEST_TIMEOUT
from ratings_viz.data.schemas import CanonicalRecord


class LoadError(Exception):
    """The source could not be read or parsed as CSV."""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

_READ_OPTIONS = dict(header=None, dtype=str, keep_default_na=False, skip_blank_lines=True, engine="python")


def _dedupe(names: list[str]) -> list[str]:
    """Suffix repeated header names (.1, .2, ...) the way pandas does."""
    seen: dict[str, int] = {}
    out = []
    for name in names:
        n = seen.get(name, 0)
        out.append(name if n == 0 else f"{name}.{n}")
        seen[name] = n + 1
    return out


def _read_frame(text: str) -> pd.DataFrame:
    """First row is the header; data rows longer than it are cut to its width."""
    try:
        width = pd.read_csv(io.StringIO(text), nrows=1, **_READ_OPTIONS).shape[1]
        df = pd.read_csv(io.StringIO(text), on_bad_lines=lambda fields: fields[:width], **_READ_OPTIONS)
    except pd.errors.EmptyDataError as exc:
        raise LoadError("The CSV is empty.") from exc
    except (pd.errors.ParserError, ValueError) as exc:
        raise LoadError(f"Failed to parse CSV: {exc}") from exc
    header = _dedupe([str(c).lstrip("\ufeff").strip() for c in df.iloc[0]])
    df = df.iloc[1:].reset_index(drop=True)
    df.columns = header
    return df.fillna("")


def parse_csv_text(text: str) -> tuple[list[dict[str, str]], list[str]]:
    """Parse CSV text with a header row → (raw rows, column names)."""
    if text is None or not text.strip():
        raise LoadError("The CSV is empty.")
    df = _read_frame(text.lstrip("\ufeff"))
    return df.to_dict("records"), list(df.columns)


def read_csv_file(filepath: str | Path) -> tuple[list[dict[str, str]], list[str]]:
    """Read a CSV file from disk → (raw rows, column names)."""
    filepath = Path(filepath)
    if not filepath.exists():
        raise LoadError(f"File not found: {filepath}")
    logger.info(f"[Loader] Reading {filepath}")
    try:
        text = filepath.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Could not read {filepath.name}: {exc}") from exc
    return parse_csv_text(text)


def fetch_csv_text(url: str, session: requests.Session | None = None) -> str:
    """Download CSV text from a URL."""
    if not url or not url.strip():
        raise LoadError("No URL given.")
    getter = session or requests
    try:
        resp = getter.get(url.strip(), timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.warning(f"[Loader] Fetch failed for {url}: {exc}")
        raise LoadError("Could not fetch CSV from that URL.") from exc
    resp.encoding = resp.encoding or "utf-8"
    return resp.text


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def export_columns(records: list[CanonicalRecord], columns: list[str] | None = None) -> list[str]:
    """Source columns to export, in source order, without derived fields."""
    if columns is None:
        columns = []
        seen = set()
        for r in records:
            for key in r.source:
                if key not in seen:
                    seen.add(key)
                    columns.append(key)
    return [c for c in columns if not c.startswith(DERIVED_PREFIX)]


def export_csv(records: list[CanonicalRecord], columns: list[str] | None = None) -> str:
    """Serialize the records' original source rows back to CSV text."""
    cols = export_columns(records, columns)
    if not cols:
        return ""
    df = pd.DataFrame([r.source for r in records], columns=cols).fillna("")
    return df.to_csv(index=False, lineterminator="\n")
