"""
Export endpoints: filtered CSV and the Excel ratings report.
"""
from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Response

from ratings_viz.data.schemas import FilterState
from ratings_viz.data.store import DataStore
from ratings_viz.reports import ratings_report
from ratings_viz.api.dependencies import get_store, parse_filters

router = APIRouter(prefix="/api", tags=["export"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/export.csv")
def export_csv(
    store: DataStore = Depends(get_store),
    filters: FilterState = Depends(parse_filters),
):
    """Every filtered row (not just the current page) in the source's columns."""
    return Response(
        content=store.export_csv(filters),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="filtered.csv"'},
    )


@router.get("/report.xlsx")
def export_report(
    store: DataStore = Depends(get_store),
    filters: FilterState = Depends(parse_filters),
):
    ew = ratings_report.build_workbook(store.filtered(filters), dt.datetime.now())
    return Response(
        content=ew.to_bytes(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="ratings_report.xlsx"'},
    )
