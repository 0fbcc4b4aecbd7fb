"""
Ratings Visualizer — Configuration: paths, column aliases, constants.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with RATINGS_VIZ_DATA_DIR env var
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("RATINGS_VIZ_DATA_DIR", str(Path.home() / ".ratings_viz")))
BASE_FOLDER = _data_dir
REPORTS_FOLDER = _data_dir / "reports"
PREFERENCES_FILE = _data_dir / "preferences.json"

# ---------------------------------------------------------------------------
# Column aliases per logical field. Compared case-insensitively; order matters
# (first non-empty match wins).
# ---------------------------------------------------------------------------
COLUMN_ALIASES = {
    "your_rating": ["Your Rating", "rating"],
    "imdb_rating": ["IMDb Rating"],
    "runtime_minutes": ["Runtime (mins)", "runtime"],
    "year": ["Year"],
    "date_rated": ["Date Rated", "rated_at"],
    "release_date": ["Release Date"],
    "title": ["Title"],
    "title_type": ["Title Type", "type"],
    "url": ["URL"],
    "genres": ["Genres"],
    "directors": ["Directors"],
    "external_id": ["Const"],
}

# Prefix of derived columns that never leave the app in a CSV export
DERIVED_PREFIX = "__"

# ---------------------------------------------------------------------------
# Filter defaults
# ---------------------------------------------------------------------------
ALL_TYPES = "all"
DEFAULT_YEAR_RANGE = (1900, 2100)  # shown when no record carries a year

# ---------------------------------------------------------------------------
# Analytics constants
# ---------------------------------------------------------------------------
DIRECTOR_MIN_TITLES = 3
MONTHLY_WINDOW = 24
TOP_GENRES = 15
HISTOGRAM_BUCKETS = 10
WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# ---------------------------------------------------------------------------
# Table view
# ---------------------------------------------------------------------------
DEFAULT_PAGE_SIZE = 100

# ---------------------------------------------------------------------------
# Network — CSV fetch and poster enrichment
# ---------------------------------------------------------------------------
REQUEST_TIMEOUT = float(os.environ.get("RATINGS_VIZ_REQUEST_TIMEOUT", "30"))
POSTER_TIMEOUT = 10
POSTER_WORKERS = int(os.environ.get("POSTER_WORKERS", "8"))
OMDB_API_KEY = os.environ.get("OMDB_API_KEY", "")
POSTER_API_URL = os.environ.get("POSTER_API_URL", "https://www.omdbapi.com/")
TITLE_ID_PATTERN = r"tt\d+"

# ---------------------------------------------------------------------------
# UI preference defaults
# ---------------------------------------------------------------------------
DEFAULT_THEME_DARK = True
DEFAULT_ACCENT = "violet"
