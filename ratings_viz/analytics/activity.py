"""
Rating-activity analytics — streaks, gaps, weekday averages, monthly window.
"""
from __future__ import annotations

import datetime as dt
from collections import Counter

import pandas as pd

from ratings_viz.config import MONTHLY_WINDOW, WEEKDAY_LABELS
from ratings_viz.analytics.common import day_of, safe_divide
from ratings_viz.data.schemas import CanonicalRecord


def rated_dates(records: list[CanonicalRecord]) -> list[dt.date]:
    return [r.date_rated for r in records if r.date_rated is not None]


def unique_days(dates) -> list[dt.date]:
    """Distinct calendar days, ascending."""
    return sorted({day_of(d) for d in dates if d is not None})


# ---------------------------------------------------------------------------
# Streaks & gaps
# ---------------------------------------------------------------------------

def longest_streak(dates) -> dict:
    """Longest run of consecutive rating days.

    The earliest run wins when several share the maximum length. No days
    gives length 0 with no start/end.
    """
    days = unique_days(dates)
    if not days:
        return {"length": 0, "start": None, "end": None}

    best = {"length": 1, "start": days[0], "end": days[0]}
    run_start, run_len = days[0], 1
    for prev, cur in zip(days, days[1:]):
        if (cur - prev).days == 1:
            run_len += 1
            continue
        if run_len > best["length"]:
            best = {"length": run_len, "start": run_start, "end": prev}
        run_start, run_len = cur, 1
    if run_len > best["length"]:
        best = {"length": run_len, "start": run_start, "end": days[-1]}
    return best


def longest_gap(dates) -> dict:
    """Largest number of days between consecutive rating days."""
    days = unique_days(dates)
    if len(days) < 2:
        return {"days": 0, "start": None, "end": None}

    best = {"days": 0, "start": days[0], "end": days[1]}
    for prev, cur in zip(days, days[1:]):
        gap = (cur - prev).days
        if gap > best["days"]:
            best = {"days": gap, "start": prev, "end": cur}
    return best


# ---------------------------------------------------------------------------
# Calendar aggregates
# ---------------------------------------------------------------------------

def weekday_averages(records: list[CanonicalRecord]) -> list[dict]:
    """Average own rating per weekday, Sunday first.

    Weekdays without ratings report average 0 and count 0 so a bar chart
    draws an empty bar instead of a hole.
    """
    sums = [0.0] * 7
    counts = [0] * 7
    for r in records:
        if r.date_rated is None or r.your_rating is None:
            continue
        idx = (day_of(r.date_rated).weekday() + 1) % 7  # Monday=0 → Sunday=0
        sums[idx] += r.your_rating
        counts[idx] += 1

    return [
        {"day": i, "label": WEEKDAY_LABELS[i], "average": safe_divide(sums[i], counts[i]), "count": counts[i]}
        for i in range(7)
    ]


def monthly_activity(
    records: list[CanonicalRecord],
    now: dt.date | dt.datetime,
    months: int = MONTHLY_WINDOW,
) -> list[dict]:
    """Ratings per month for the `months` months ending at `now` (inclusive).

    The window is anchored to `now`, not to the data, so trailing months can
    be empty when the export predates it.
    """
    counts = Counter(f"{d.year}-{d.month:02d}" for d in rated_dates(records))
    end = pd.Period(year=now.year, month=now.month, freq="M")
    window = pd.period_range(end=end, periods=months, freq="M")
    return [{"month": str(p), "count": counts.get(str(p), 0)} for p in window]
