#!/usr/bin/env python3
"""
Ratings Visualizer CLI — summaries, exports, Excel reports, and the API server.

USAGE:
  python -m ratings_viz.cli summary ratings.csv                     # KPIs + facts
  python -m ratings_viz.cli summary --url https://…/ratings.csv     # from a URL
  python -m ratings_viz.cli summary ratings.csv --genre Drama --min-rating 8

  python -m ratings_viz.cli export ratings.csv -o filtered.csv --type movie
  python -m ratings_viz.cli report ratings.csv -o ratings.xlsx
  python -m ratings_viz.cli report ratings.csv --json -o ratings.json

  python -m ratings_viz.cli serve                                   # Start API server
  python -m ratings_viz.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import datetime as dt
import json
import os
import sys
from pathlib import Path

from ratings_viz.config import ALL_TYPES, REPORTS_FOLDER
from ratings_viz.analytics.facts import summarize
from ratings_viz.data.loader import LoadError
from ratings_viz.data.schemas import FilterState
from ratings_viz.data.store import DataStore
from ratings_viz.reports.ratings_report import fact_lines, generate_excel, generate_json


def _build_filters(args) -> FilterState:
    """Build a FilterState from CLI args."""
    return FilterState(
        query=args.query or "",
        min_year=args.min_year,
        max_year=args.max_year,
        min_rating=args.min_rating,
        title_type=args.type or ALL_TYPES,
        genres=tuple(args.genre or ()),
    )


def _load(args) -> DataStore:
    store = DataStore()
    if args.url:
        return store.load_url(args.url)
    if args.csv:
        return store.load_file(args.csv)
    return store.reload()


def _fmt(n, digits: int = 1) -> str:
    return "–" if n is None else f"{n:.{digits}f}"


def cmd_summary(args):
    """Print KPIs and fact cards for the filtered ratings."""
    store = _load(args)
    records = store.filtered(_build_filters(args))
    s = summarize(records, dt.datetime.now())

    print("\n" + "=" * 70)
    print("  RATINGS VISUALIZER — SUMMARY")
    print("=" * 70)
    print(f"  Source:            {store.source}")
    print(f"  Titles:            {s['count']:,} of {store.row_count():,}")
    print(f"  Avg your rating:   {_fmt(s['avg_your_rating'], 2)}")
    print(f"  Avg IMDb rating:   {_fmt(s['avg_imdb_rating'], 2)}")
    print(f"  Est. watch time:   {s['watch_time']['hours']:,.1f} h")
    print()
    for label, text in fact_lines(s):
        print(f"  {label + ':':<22}{text}")
    print()
    print("  Day of week:  " + "  ".join(f"{d['label']} {d['average']:.1f}" for d in s["weekday_averages"]))
    print()


def cmd_export(args):
    """Write the filtered rows as CSV."""
    store = _load(args)
    filters = _build_filters(args)
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(store.export_csv(filters), encoding="utf-8")
    print(f"  Exported {len(store.filtered(filters)):,} rows → {out}")


def cmd_report(args):
    """Write the Excel ratings report, or its JSON form with --json."""
    store = _load(args)
    records = store.filtered(_build_filters(args))
    ext = "json" if args.json else "xlsx"
    out = Path(args.output) if args.output else REPORTS_FOLDER / f"Ratings_Report_{dt.date.today():%Y-%m-%d}.{ext}"
    if args.json:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(generate_json(records), indent=2), encoding="utf-8")
        path = out
    else:
        path = generate_excel(records, out)
    print(f"  Report saved → {path}")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Ratings Visualizer API on port {args.port}...")
    uvicorn.run("ratings_viz.main:app", host=args.host, port=args.port, reload=args.reload)


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("csv", nargs="?", help="Ratings CSV export (default: saved URL)")
    p.add_argument("--url", help="Fetch the CSV from this URL instead")
    p.add_argument("--query", "-q", help="Title contains (case-insensitive)")
    p.add_argument("--min-year", type=float, help="Earliest release year")
    p.add_argument("--max-year", type=float, help="Latest release year")
    p.add_argument("--min-rating", type=float, default=0, help="Minimum own rating")
    p.add_argument("--type", help="Title type (e.g. movie, tvSeries)")
    p.add_argument("--genre", action="append", help="Genre (repeatable, any match)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ratings Visualizer — personal IMDb ratings analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    summary_parser = subparsers.add_parser("summary", help="Print summary facts")
    _add_source_args(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    export_parser = subparsers.add_parser("export", help="Export filtered rows as CSV")
    _add_source_args(export_parser)
    export_parser.add_argument("--output", "-o", default="filtered.csv", help="Output CSV (default: filtered.csv)")
    export_parser.set_defaults(func=cmd_export)

    report_parser = subparsers.add_parser("report", help="Generate the Excel report")
    _add_source_args(report_parser)
    report_parser.add_argument("--output", "-o", help="Output .xlsx (or .json) path")
    report_parser.add_argument("--json", action="store_true", help="Write the report as JSON instead of Excel")
    report_parser.set_defaults(func=cmd_report)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1
    try:
        args.func(args)
    except LoadError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
