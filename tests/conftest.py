"""Shared fixtures: record builder, sample IMDb export, isolated store."""
from __future__ import annotations

import datetime as dt

import pytest

from ratings_viz.data.schemas import CanonicalRecord
from ratings_viz.data.store import DataStore


SAMPLE_CSV = """Const,Your Rating,Date Rated,Title,Original Title,URL,Title Type,IMDb Rating,Runtime (mins),Year,Genres,Num Votes,Release Date,Directors
tt0111161,10,2024-01-01,The Shawshank Redemption,The Shawshank Redemption,https://www.imdb.com/title/tt0111161/,movie,9.3,142,1994,Drama,2900000,1994-09-23,Frank Darabont
tt0068646,9,2024-01-02,The Godfather,The Godfather,https://www.imdb.com/title/tt0068646/,movie,9.2,175,1972,"Crime, Drama",2000000,1972-03-24,Francis Ford Coppola
tt1375666,8,2024-01-03,Inception,Inception,https://www.imdb.com/title/tt1375666/,movie,8.8,148,2010,"Action, Adventure, Sci-Fi",2500000,2010-07-16,Christopher Nolan
tt0816692,9,2024-02-01,Interstellar,Interstellar,https://www.imdb.com/title/tt0816692/,movie,8.7,169,2014,"Adventure, Drama, Sci-Fi",2100000,2014-11-07,Christopher Nolan
tt0468569,7,2024-02-03,The Dark Knight,The Dark Knight,https://www.imdb.com/title/tt0468569/,movie,9.0,152,2008,"Action, Crime, Drama",2800000,2008-07-18,Christopher Nolan
tt0903747,10,2024-02-04,Breaking Bad,Breaking Bad,https://www.imdb.com/title/tt0903747/,tvSeries,9.5,49,2008,"Crime, Drama, Thriller",2100000,2008-01-20,
tt9999999,,,Unrated Short,Unrated Short,,short,N/A,,,Animation,,,
"""


def make_record(**fields) -> CanonicalRecord:
    """CanonicalRecord with sensible blanks for everything not given."""
    return CanonicalRecord(**fields)


def rated(day: dt.date, rating: float | None = 7, **fields) -> CanonicalRecord:
    return CanonicalRecord(date_rated=day, your_rating=rating, **fields)


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def store(tmp_path) -> DataStore:
    return DataStore(preferences_path=tmp_path / "preferences.json")


@pytest.fixture
def loaded_store(store, sample_csv) -> DataStore:
    return store.load_text(sample_csv, source="sample.csv")


class FakeResponse:
    def __init__(self, text: str = "", status: int = 200, payload=None) -> None:
        self.text = text
        self.status_code = status
        self.encoding = "utf-8"
        self._payload = payload

    def raise_for_status(self) -> None:
        import requests
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; records every call."""

    def __init__(self, responder) -> None:
        self.responder = responder
        self.calls: list[tuple] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        return self.responder(url, params)
