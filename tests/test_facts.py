"""Summary facts: averages, watch time, disagreement, top director."""
import datetime as dt

import pytest

from ratings_viz.analytics.facts import (
    biggest_disagreement,
    director_stats,
    summarize,
    top_director,
    watch_time,
)

from conftest import make_record


def test_director_needs_three_titles():
    records = [
        make_record(title="A", directors="Denis Villeneuve", your_rating=8),
        make_record(title="B", directors="Denis Villeneuve", your_rating=9),
    ]
    assert top_director(records) is None

    records.append(make_record(title="C", directors="Denis Villeneuve", your_rating=7))
    assert top_director(records) == {"director": "Denis Villeneuve", "average": 8.0, "count": 3}


def test_director_split_and_unrated_titles():
    records = [
        make_record(directors="Joel Coen, Ethan Coen", your_rating=9),
        make_record(directors="Joel Coen,Ethan Coen", your_rating=8),
        make_record(directors="Joel Coen", your_rating=7),
        make_record(directors="Ethan Coen", your_rating=None),
        make_record(directors="", your_rating=10),
    ]
    stats = director_stats(records)
    assert list(stats) == ["Joel Coen", "Ethan Coen"]
    assert stats["Joel Coen"] == {"sum": 24.0, "count": 3}
    assert stats["Ethan Coen"] == {"sum": 17.0, "count": 2}
    assert top_director(records)["director"] == "Joel Coen"


def test_director_tie_keeps_first_seen():
    records = [make_record(directors="B", your_rating=8) for _ in range(3)]
    records += [make_record(directors="A", your_rating=8) for _ in range(3)]
    assert top_director(records)["director"] == "B"


def test_disagreement_first_record_wins():
    records = [
        make_record(title="Loved it", your_rating=9, imdb_rating=5),
        make_record(title="Meh", your_rating=6, imdb_rating=6.5),
    ]
    d = biggest_disagreement(records)
    assert d["title"] == "Loved it"
    assert d["delta"] == pytest.approx(4.0)


def test_disagreement_tie_and_missing():
    records = [
        make_record(title="No IMDb", your_rating=1, imdb_rating=None),
        make_record(title="First", your_rating=8, imdb_rating=6),
        make_record(title="Second", your_rating=4, imdb_rating=6),
    ]
    assert biggest_disagreement(records)["title"] == "First"
    assert biggest_disagreement(records[:1]) is None
    assert biggest_disagreement([]) is None


def test_watch_time_skips_missing_runtime():
    records = [make_record(runtime_minutes=90), make_record(runtime_minutes=None), make_record(runtime_minutes=150)]
    assert watch_time(records) == {"minutes": 240, "hours": 4.0}
    assert watch_time([]) == {"minutes": 0, "hours": 0.0}


def test_summarize_empty_input_uses_sentinels():
    s = summarize([], dt.date(2024, 6, 1))
    assert s["count"] == 0
    assert s["avg_your_rating"] is None
    assert s["avg_imdb_rating"] is None
    assert s["watch_time"]["hours"] == 0
    assert s["streak"]["length"] == 0
    assert s["gap"]["days"] == 0
    assert s["disagreement"] is None
    assert s["top_director"] is None
    assert all(d["average"] == 0 and d["count"] == 0 for d in s["weekday_averages"])
    assert len(s["monthly_activity"]) == 24


def test_summarize_sample(loaded_store):
    s = summarize(loaded_store.records, dt.date(2024, 2, 10))
    assert s["count"] == 7
    assert s["avg_your_rating"] == pytest.approx(53 / 6)
    assert s["avg_imdb_rating"] == pytest.approx((9.3 + 9.2 + 8.8 + 8.7 + 9.0 + 9.5) / 6)
    assert s["watch_time"]["minutes"] == 142 + 175 + 148 + 169 + 152 + 49
    assert s["streak"]["length"] == 3
    assert s["gap"]["days"] == 29
    assert s["top_director"] == {"director": "Christopher Nolan", "average": 8.0, "count": 3}
    assert s["monthly_activity"][-1] == {"month": "2024-02", "count": 3}
