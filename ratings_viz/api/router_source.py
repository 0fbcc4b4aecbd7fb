"""
Source endpoints: load ratings from an uploaded file, pasted text, or a URL.
A failed load answers 400 and keeps whatever was loaded before.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File

from ratings_viz.data.loader import LoadError
from ratings_viz.data.store import DataStore
from ratings_viz.api.dependencies import get_store
from ratings_viz.api.response_models import LoadResponse, PasteRequest, UrlRequest

router = APIRouter(prefix="/api/source", tags=["source"])


def _loaded(store: DataStore) -> LoadResponse:
    return LoadResponse(status="loaded", rows=store.row_count(), source=store.source)


@router.post("/upload", response_model=LoadResponse)
async def upload_csv(file: UploadFile = File(...), store: DataStore = Depends(get_store)):
    """Load a ratings CSV export from a multipart upload."""
    if not file.filename:
        raise HTTPException(400, "Missing filename")
    content = await file.read()
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(400, "Failed to parse CSV: file is not UTF-8 text")
    try:
        store.load_text(text, source=file.filename)
    except LoadError as exc:
        raise HTTPException(400, str(exc))
    return _loaded(store)


@router.post("/paste", response_model=LoadResponse)
def paste_csv(body: PasteRequest, store: DataStore = Depends(get_store)):
    try:
        store.load_paste(body.text)
    except LoadError as exc:
        raise HTTPException(400, str(exc))
    return _loaded(store)


@router.post("/url", response_model=LoadResponse)
def load_from_url(body: UrlRequest, store: DataStore = Depends(get_store)):
    """Fetch a CSV from a URL; the URL is remembered once it loads."""
    try:
        store.load_url(body.url)
    except LoadError as exc:
        raise HTTPException(400, str(exc))
    return _loaded(store)
