"""
Session-spanning preferences: last CSV source URL, theme flag, accent colour.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from ratings_viz.config import DEFAULT_ACCENT, DEFAULT_THEME_DARK, PREFERENCES_FILE


@dataclass
class Preferences:
    source_url: Optional[str] = None
    theme_dark: bool = DEFAULT_THEME_DARK
    accent: str = DEFAULT_ACCENT


def load_preferences(path: Path = PREFERENCES_FILE) -> Preferences:
    """Read preferences; a missing or corrupt file yields defaults."""
    if not path.exists():
        return Preferences()
    try:
        payload = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning(f"[Preferences] Ignoring unreadable {path}: {exc}")
        return Preferences()
    if not isinstance(payload, dict):
        return Preferences()
    return Preferences(
        source_url=payload.get("source_url") or None,
        theme_dark=bool(payload.get("theme_dark", DEFAULT_THEME_DARK)),
        accent=str(payload.get("accent") or DEFAULT_ACCENT),
    )


def save_preferences(prefs: Preferences, path: Path = PREFERENCES_FILE) -> Preferences:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(prefs), indent=2))
    return prefs


def remember_source_url(url: str, path: Path = PREFERENCES_FILE) -> Preferences:
    """Persist the last successfully loaded CSV URL."""
    prefs = load_preferences(path)
    prefs.source_url = url
    return save_preferences(prefs, path)
