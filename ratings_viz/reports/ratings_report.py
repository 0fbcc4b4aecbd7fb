"""
Ratings Report — summary KPIs, facts, and chart tables for the filtered ratings.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path

from ratings_viz.analytics.charts import chart_bundle
from ratings_viz.analytics.common import sanitize_for_json
from ratings_viz.analytics.facts import summarize
from ratings_viz.analytics.table import sort_records, table_row
from ratings_viz.data.schemas import CanonicalRecord
from ratings_viz.excel.writer import ExcelWriter


RATING_COLS = [
    ("title", "text", "Title"),
    ("title_type", "text", "Type"),
    ("year", "number", "Year"),
    ("your_rating", "rating", "Your Rating"),
    ("imdb_rating", "rating", "IMDb Rating"),
    ("runtime_minutes", "number", "Runtime (mins)"),
    ("genres", "text", "Genres"),
    ("directors", "text", "Directors"),
    ("date_rated", "date", "Date Rated"),
]

YEAR_COLS = [
    ("year", "number", "Year"),
    ("average", "decimal", "Avg Your Rating"),
    ("count", "number", "Titles"),
]

GENRE_COLS = [
    ("genre", "text", "Genre"),
    ("count", "number", "Titles"),
]

MONTH_COLS = [
    ("month", "text", "Month"),
    ("count", "number", "Ratings"),
]

WEEKDAY_COLS = [
    ("label", "text", "Day"),
    ("average", "decimal", "Avg Your Rating"),
    ("count", "number", "Ratings"),
]


def _fmt(n, digits: int = 1) -> str:
    return "–" if n is None else f"{n:.{digits}f}"


def _fmt_range(start, end) -> str:
    if start is None or end is None:
        return ""
    return f" ({start:%Y-%m-%d} → {end:%Y-%m-%d})"


def fact_lines(summary: dict) -> list[tuple[str, str]]:
    """Human-readable fact cards, in dashboard order."""
    streak, gap = summary["streak"], summary["gap"]
    dis, top = summary["disagreement"], summary["top_director"]

    lines = [
        ("Longest streak", f"{streak['length']} days{_fmt_range(streak['start'], streak['end'])}"
         if streak["length"] > 0 else "–"),
        ("Longest gap", f"{gap['days']} days{_fmt_range(gap['start'], gap['end'])}"
         if gap["days"] > 0 else "–"),
        ("Biggest disagreement",
         f"{dis['title']}: you {_fmt(dis['your_rating'])} vs IMDb {_fmt(dis['imdb_rating'])} "
         f"(Δ {_fmt(dis['delta'])})" if dis else "–"),
    ]
    if top:
        lines.append(("Top director", f"{top['director']}: avg {_fmt(top['average'], 2)} over {top['count']} titles"))
    return lines


def generate_json(records: list[CanonicalRecord], now: dt.datetime | None = None) -> dict:
    now = now or dt.datetime.now()
    ordered = sort_records(records)
    return sanitize_for_json({
        "generated_at": now,
        "summary": summarize(records, now),
        "charts": chart_bundle(records),
        "rows": [table_row(r) for r in ordered],
    })


def build_workbook(records: list[CanonicalRecord], now: dt.datetime | None = None) -> ExcelWriter:
    now = now or dt.datetime.now()
    summary = summarize(records, now)
    charts = chart_bundle(records)
    ew = ExcelWriter()

    ws = ew.add_sheet("Summary")
    ew.write_title(ws, "IMDb RATINGS", f"Ratings Report  |  {summary['count']:,} titles  |  Generated {now:%B %d, %Y}")

    row = ew.write_section(ws, 5, "OVERVIEW")
    row = ew.write_kpi_row(ws, row, [
        (summary["count"], "TITLES", "number"),
        (summary["avg_your_rating"], "AVG YOUR RATING", "decimal"),
        (summary["avg_imdb_rating"], "AVG IMDb RATING", "decimal"),
        (summary["watch_time"]["hours"], "EST. WATCH HOURS", "number"),
    ])

    row = ew.write_section(ws, row, "FASCINATING FACTS")
    row = ew.write_facts(ws, row, fact_lines(summary))

    row = ew.write_section(ws, row, "BY DAY OF WEEK")
    ew.write_table(ws, row, WEEKDAY_COLS, summary["weekday_averages"], freeze=False)

    rows = [table_row(r) for r in sort_records(records)]
    ws_r = ew.add_sheet("Ratings")
    ew.write_table(ws_r, 1, RATING_COLS, rows,
                   highlight_fn=lambda _, r: "gold" if r.get("your_rating") == 10 else None)

    for sheet_name, cols, data in [
        ("By Year", YEAR_COLS, charts["average_by_year"]),
        ("Genres", GENRE_COLS, charts["genre_counts"]),
        ("Monthly", MONTH_COLS, summary["monthly_activity"]),
    ]:
        ws_d = ew.add_sheet(sheet_name)
        ew.write_table(ws_d, 1, cols, data)

    return ew


def generate_excel(
    records: list[CanonicalRecord],
    output_path: str | Path,
    now: dt.datetime | None = None,
) -> Path:
    return build_workbook(records, now).save(output_path)
