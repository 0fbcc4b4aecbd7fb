"""
Ratings Visualizer — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from ratings_viz.config import PREFERENCES_FILE
from ratings_viz.data.loader import LoadError
from ratings_viz.data.preferences import load_preferences
from ratings_viz.data.store import DataStore
from ratings_viz.posters import PosterClient
from ratings_viz.api.dependencies import set_poster_client, set_store
from ratings_viz.api.router_meta import router as meta_router
from ratings_viz.api.router_source import router as source_router
from ratings_viz.api.router_dashboard import router as dashboard_router
from ratings_viz.api.router_export import router as export_router


def startup_store(preferences_path=PREFERENCES_FILE) -> DataStore:
    """Create the store and auto-load the remembered URL, if any."""
    store = DataStore(preferences_path=preferences_path)
    url = load_preferences(preferences_path).source_url
    if url:
        try:
            store.load_url(url)
        except LoadError as exc:
            logger.warning(f"[Startup] Saved source {url} could not be loaded: {exc}")
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the remembered source at startup."""
    store = startup_store()
    set_store(store)
    set_poster_client(PosterClient())

    if store.row_count() > 0:
        logger.info(f"Ratings Visualizer ready — {store.row_count():,} titles from {store.source}")
    else:
        logger.info("Ratings Visualizer ready — no data yet. Upload, paste, or link a CSV.")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Ratings Visualizer API",
        description="Personal IMDb ratings dashboard — facts, charts, table, export",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(source_router)
    app.include_router(dashboard_router)
    app.include_router(export_router)
    return app


app = create_app()
