"""
Summary analytics — KPIs and "fascinating facts" over the filtered records.
"""
from __future__ import annotations

import datetime as dt

from ratings_viz.config import DIRECTOR_MIN_TITLES, MONTHLY_WINDOW
from ratings_viz.analytics.common import average, safe_divide
from ratings_viz.analytics.activity import (
    longest_gap,
    longest_streak,
    monthly_activity,
    rated_dates,
    weekday_averages,
)
from ratings_viz.data.schemas import CanonicalRecord


def watch_time(records: list[CanonicalRecord]) -> dict:
    """Total known runtime. Titles without a runtime add nothing."""
    minutes = sum(r.runtime_minutes for r in records if r.runtime_minutes is not None)
    return {"minutes": minutes, "hours": safe_divide(minutes, 60)}


def biggest_disagreement(records: list[CanonicalRecord]) -> dict | None:
    """Title where own rating and IMDb rating differ most (first one on ties)."""
    best = None
    for r in records:
        if r.your_rating is None or r.imdb_rating is None:
            continue
        delta = abs(r.your_rating - r.imdb_rating)
        if best is None or delta > best["delta"]:
            best = {
                "title": r.title,
                "external_id": r.external_id,
                "your_rating": r.your_rating,
                "imdb_rating": r.imdb_rating,
                "delta": delta,
            }
    return best


def director_stats(records: list[CanonicalRecord]) -> dict[str, dict]:
    """Running {sum, count} of own ratings per director, in first-rated order."""
    stats: dict[str, dict] = {}
    for r in records:
        if r.your_rating is None:
            continue
        for name in r.director_names():
            entry = stats.setdefault(name, {"sum": 0.0, "count": 0})
            entry["sum"] += r.your_rating
            entry["count"] += 1
    return stats


def top_director(
    records: list[CanonicalRecord],
    min_titles: int = DIRECTOR_MIN_TITLES,
) -> dict | None:
    """Director with the best average own rating over at least `min_titles` titles."""
    best = None
    for name, entry in director_stats(records).items():
        if entry["count"] < min_titles:
            continue
        avg = entry["sum"] / entry["count"]
        if best is None or avg > best["average"]:
            best = {"director": name, "average": avg, "count": entry["count"]}
    return best


def summarize(
    records: list[CanonicalRecord],
    now: dt.date | dt.datetime,
    months: int = MONTHLY_WINDOW,
) -> dict:
    """Every summary statistic for the dashboard header and fact cards."""
    dates = rated_dates(records)
    return {
        "count": len(records),
        "avg_your_rating": average(r.your_rating for r in records),
        "avg_imdb_rating": average(r.imdb_rating for r in records),
        "watch_time": watch_time(records),
        "streak": longest_streak(dates),
        "gap": longest_gap(dates),
        "disagreement": biggest_disagreement(records),
        "top_director": top_director(records),
        "weekday_averages": weekday_averages(records),
        "monthly_activity": monthly_activity(records, now, months),
    }
