"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ratings_viz.config import DEFAULT_ACCENT, DEFAULT_THEME_DARK


class HealthResponse(BaseModel):
    status: str
    rows: int
    source: Optional[str] = None


class OptionsResponse(BaseModel):
    title_types: list[str]
    genres: list[str]
    year_range: list[int | float]


class PreferencesModel(BaseModel):
    source_url: Optional[str] = None
    theme_dark: bool = DEFAULT_THEME_DARK
    accent: str = DEFAULT_ACCENT


class PreferencesUpdate(BaseModel):
    theme_dark: Optional[bool] = None
    accent: Optional[str] = None


class PasteRequest(BaseModel):
    text: str


class UrlRequest(BaseModel):
    url: str


class LoadResponse(BaseModel):
    status: str
    rows: int
    source: Optional[str] = None
