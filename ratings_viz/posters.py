"""
Poster enrichment — optional, decorative lookup of poster image URLs.

Posters are looked up by the IMDb title id found in a record's URL, fetched in
parallel for one table page at a time, and cached for the life of the process.
A failed lookup leaves the poster empty and is never retried.
"""
from __future__ import annotations

import re
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import requests
from loguru import logger

from ratings_viz.config import (
    OMDB_API_KEY, POSTER_API_URL, POSTER_TIMEOUT, POSTER_WORKERS, TITLE_ID_PATTERN,
)
from ratings_viz.data.schemas import CanonicalRecord

_TITLE_ID_RE = re.compile(TITLE_ID_PATTERN)


def extract_title_id(url: str | None) -> str | None:
    """First IMDb title id (tt1234567) in a URL, if any."""
    if not url:
        return None
    m = _TITLE_ID_RE.search(url)
    return m.group(0) if m else None


class PosterClient:
    """OMDb-style poster lookups with a per-title cache."""

    def __init__(
        self,
        api_key: str = OMDB_API_KEY,
        base_url: str = POSTER_API_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.session = session or requests.Session()
        self._cache: dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def _fetch(self, title_id: str) -> Optional[str]:
        try:
            resp = self.session.get(
                self.base_url,
                params={"i": title_id, "apikey": self.api_key},
                timeout=POSTER_TIMEOUT,
            )
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.debug(f"[Posters] Lookup failed for {title_id}: {exc}")
            return None
        poster = payload.get("Poster") if isinstance(payload, dict) else None
        if not poster or poster == "N/A":
            return None
        return poster

    def _store(self, title_id: str, poster: Optional[str]) -> None:
        with self._lock:
            self._cache[title_id] = poster

    def poster_for(self, title_id: str) -> Optional[str]:
        if title_id in self._cache:
            return self._cache[title_id]
        poster = self._fetch(title_id)
        self._store(title_id, poster)
        return poster

    def posters_for(self, records: list[CanonicalRecord]) -> dict[str, Optional[str]]:
        """Poster URL per record external id; uncached titles fetched concurrently."""
        ids = {r.external_id: extract_title_id(r.url) or extract_title_id(r.external_id) for r in records}
        if not self.enabled:
            return {ext_id: None for ext_id in ids}

        pending = sorted({tid for tid in ids.values() if tid and tid not in self._cache})
        if pending:
            with ThreadPoolExecutor(max_workers=min(POSTER_WORKERS, len(pending))) as pool:
                for tid, poster in zip(pending, pool.map(self._fetch, pending)):
                    self._store(tid, poster)

        return {ext_id: (self._cache.get(tid) if tid else None) for ext_id, tid in ids.items()}
