"""
Meta endpoints: health, filter options, preferences, reload.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ratings_viz.data.loader import LoadError
from ratings_viz.data.preferences import load_preferences, save_preferences
from ratings_viz.data.store import DataStore
from ratings_viz.api.dependencies import get_store
from ratings_viz.api.response_models import (
    HealthResponse, LoadResponse, OptionsResponse, PreferencesModel, PreferencesUpdate,
)

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    return HealthResponse(status="ok", rows=store.row_count(), source=store.source)


@router.get("/options", response_model=OptionsResponse)
def options(store: DataStore = Depends(get_store)):
    """Title types, genres and year bounds for the filter controls."""
    return OptionsResponse(**store.options())


@router.get("/preferences", response_model=PreferencesModel)
def get_preferences(store: DataStore = Depends(get_store)):
    prefs = load_preferences(store.preferences_path)
    return PreferencesModel(source_url=prefs.source_url, theme_dark=prefs.theme_dark, accent=prefs.accent)


@router.put("/preferences", response_model=PreferencesModel)
def update_preferences(update: PreferencesUpdate, store: DataStore = Depends(get_store)):
    prefs = load_preferences(store.preferences_path)
    if update.theme_dark is not None:
        prefs.theme_dark = update.theme_dark
    if update.accent:
        prefs.accent = update.accent
    save_preferences(prefs, store.preferences_path)
    return PreferencesModel(source_url=prefs.source_url, theme_dark=prefs.theme_dark, accent=prefs.accent)


@router.post("/reload", response_model=LoadResponse)
def reload_data(store: DataStore = Depends(get_store)):
    """Re-fetch the saved source URL. On failure the current data stays loaded."""
    try:
        store.reload()
    except LoadError as exc:
        raise HTTPException(400, str(exc))
    return LoadResponse(status="loaded", rows=store.row_count(), source=store.source)
