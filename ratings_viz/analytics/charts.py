"""
Chart-ready projections of the filtered records.
"""
from __future__ import annotations

import math
from collections import Counter

import pandas as pd

from ratings_viz.config import HISTOGRAM_BUCKETS, TOP_GENRES
from ratings_viz.data.schemas import CanonicalRecord


def time_series(records: list[CanonicalRecord]) -> list[dict]:
    """Own rating over time, oldest first."""
    points = [
        {"date": r.date_rated, "your_rating": r.your_rating, "title": r.title}
        for r in records
        if r.date_rated is not None and r.your_rating is not None
    ]
    return sorted(points, key=lambda p: p["date"])


def histogram_bucket(rating: float | None) -> int | None:
    """Bucket 1..10 for a rating; half-up rounding, None outside [1, 10]."""
    if rating is None or rating < 1 or rating > HISTOGRAM_BUCKETS:
        return None
    return int(math.floor(rating + 0.5))


def rating_histogram(records: list[CanonicalRecord]) -> list[dict]:
    bins = [{"bucket": i + 1, "count": 0} for i in range(HISTOGRAM_BUCKETS)]
    for r in records:
        bucket = histogram_bucket(r.your_rating)
        if bucket is not None:
            bins[bucket - 1]["count"] += 1
    return bins


def your_vs_imdb(records: list[CanonicalRecord]) -> list[dict]:
    return [
        {"your_rating": r.your_rating, "imdb_rating": r.imdb_rating, "title": r.title}
        for r in records
        if r.your_rating is not None and r.imdb_rating is not None
    ]


def runtime_vs_your(records: list[CanonicalRecord]) -> list[dict]:
    return [
        {"runtime_minutes": r.runtime_minutes, "your_rating": r.your_rating, "title": r.title}
        for r in records
        if r.runtime_minutes is not None and r.your_rating is not None
    ]


def average_by_year(records: list[CanonicalRecord]) -> list[dict]:
    """Mean own rating per release year, ascending by year."""
    df = pd.DataFrame(
        [(r.year, r.your_rating) for r in records if r.year is not None and r.your_rating is not None],
        columns=["year", "your_rating"],
    )
    if df.empty:
        return []
    grouped = df.groupby("year").agg(
        average=("your_rating", "mean"),
        count=("your_rating", "count"),
    ).reset_index().sort_values("year")

    rows = []
    for _, g in grouped.iterrows():
        year = float(g["year"])
        rows.append({
            "year": int(year) if year.is_integer() else year,
            "average": float(g["average"]),
            "count": int(g["count"]),
        })
    return rows


def genre_counts(records: list[CanonicalRecord], limit: int = TOP_GENRES) -> list[dict]:
    """Most frequent genres, descending; ties keep first-appearance order."""
    counts = Counter(g for r in records for g in r.genres)
    return [{"genre": g, "count": n} for g, n in counts.most_common(limit)]


def chart_bundle(records: list[CanonicalRecord]) -> dict:
    return {
        "time_series": time_series(records),
        "rating_histogram": rating_histogram(records),
        "your_vs_imdb": your_vs_imdb(records),
        "runtime_vs_your": runtime_vs_your(records),
        "average_by_year": average_by_year(records),
        "genre_counts": genre_counts(records),
    }
