"""Data loading, normalization, filtering, and the in-memory store."""
from .schemas import CanonicalRecord, FilterState, SortDirection, SortKey, TableView
from .normalize import normalize_row, normalize_rows, parse_number, parse_date, split_genres
from .filters import matches, apply_filters
from .loader import LoadError, parse_csv_text, export_csv
from .store import DataStore
