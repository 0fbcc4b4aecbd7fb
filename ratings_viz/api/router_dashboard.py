"""
Dashboard endpoints — summary facts, chart data, ratings table, posters.
"""
from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ratings_viz.analytics.charts import chart_bundle
from ratings_viz.analytics.common import sanitize_for_json
from ratings_viz.analytics.facts import summarize
from ratings_viz.analytics.table import build_view, table_row
from ratings_viz.data.schemas import FilterState
from ratings_viz.data.store import DataStore
from ratings_viz.posters import PosterClient
from ratings_viz.api.dependencies import (
    get_poster_client, get_store, parse_filters, parse_page, parse_sort,
)

router = APIRouter(prefix="/api", tags=["dashboard"])


def _safe_json(data) -> JSONResponse:
    return JSONResponse(content=sanitize_for_json(data))


@router.get("/summary")
def summary(
    store: DataStore = Depends(get_store),
    filters: FilterState = Depends(parse_filters),
):
    """Counts, averages, watch time, streaks, and the other fact cards."""
    return _safe_json(summarize(store.filtered(filters), dt.datetime.now()))


@router.get("/charts")
def charts(
    store: DataStore = Depends(get_store),
    filters: FilterState = Depends(parse_filters),
):
    return _safe_json(chart_bundle(store.filtered(filters)))


@router.get("/table")
def table(
    store: DataStore = Depends(get_store),
    filters: FilterState = Depends(parse_filters),
    sort=Depends(parse_sort),
    paging=Depends(parse_page),
    posters: bool = Query(False, description="Attach poster URLs for this page"),
    client: PosterClient = Depends(get_poster_client),
):
    """One sorted page of the filtered ratings."""
    sort_key, direction = sort
    page, page_size = paging
    view = build_view(store.filtered(filters), sort_key, direction, page_size, page)
    poster_map = client.posters_for(view.rows) if posters else {}
    return _safe_json({
        "rows": [table_row(r, poster_map.get(r.external_id)) for r in view.rows],
        "page": view.page,
        "page_size": view.page_size,
        "total_pages": view.total_pages,
        "total": view.total,
    })


@router.get("/posters/{title_id}")
def poster(title_id: str, client: PosterClient = Depends(get_poster_client)):
    return {"title_id": title_id, "poster": client.poster_for(title_id) if client.enabled else None}
