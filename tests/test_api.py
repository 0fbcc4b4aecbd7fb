"""HTTP API through FastAPI's TestClient (startup hook not run)."""
import io

import pytest
import requests
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from ratings_viz.api.dependencies import set_poster_client, set_store
from ratings_viz.data.loader import parse_csv_text
from ratings_viz.data.store import DataStore
from ratings_viz.main import app
from ratings_viz.posters import PosterClient

from conftest import SAMPLE_CSV, FakeResponse


@pytest.fixture
def api_store(tmp_path):
    store = DataStore(preferences_path=tmp_path / "preferences.json")
    set_store(store)
    set_poster_client(PosterClient(api_key=""))
    return store


@pytest.fixture
def client(api_store):
    return TestClient(app)


@pytest.fixture
def loaded(client, api_store):
    api_store.load_text(SAMPLE_CSV, source="sample.csv")
    return client


def test_health_empty(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "rows": 0, "source": None}


def test_paste_then_options(client):
    resp = client.post("/api/source/paste", json={"text": SAMPLE_CSV})
    assert resp.status_code == 200
    assert resp.json()["rows"] == 7

    opts = client.get("/api/options").json()
    assert opts["year_range"] == [1972, 2014]
    assert "tvSeries" in opts["title_types"]


def test_bad_paste_keeps_data(loaded):
    resp = loaded.post("/api/source/paste", json={"text": "hello"})
    assert resp.status_code == 400
    assert loaded.get("/api/health").json()["rows"] == 7


def test_upload(client):
    files = {"file": ("ratings.csv", SAMPLE_CSV.encode("utf-8"), "text/csv")}
    resp = client.post("/api/source/upload", files=files)
    assert resp.status_code == 200
    assert resp.json() == {"status": "loaded", "rows": 7, "source": "ratings.csv"}


def test_upload_empty_file(client):
    files = {"file": ("empty.csv", b"", "text/csv")}
    assert client.post("/api/source/upload", files=files).status_code == 400


def test_url_load_and_preferences(client, monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, timeout=None: FakeResponse(SAMPLE_CSV))
    resp = client.post("/api/source/url", json={"url": "https://example.com/r.csv"})
    assert resp.status_code == 200
    assert client.get("/api/preferences").json()["source_url"] == "https://example.com/r.csv"

    assert client.post("/api/reload").status_code == 200


def test_url_failure(client, monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, timeout=None: FakeResponse(status=500))
    resp = client.post("/api/source/url", json={"url": "https://example.com/r.csv"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Could not fetch CSV from that URL."
    assert client.post("/api/reload").status_code == 400


def test_update_preferences(client):
    resp = client.put("/api/preferences", json={"theme_dark": False})
    assert resp.json() == {"source_url": None, "theme_dark": False, "accent": "violet"}
    resp = client.put("/api/preferences", json={"accent": "teal"})
    assert resp.json()["theme_dark"] is False
    assert resp.json()["accent"] == "teal"


def test_summary_with_filters(loaded):
    body = loaded.get("/api/summary").json()
    assert body["count"] == 7
    assert body["top_director"]["director"] == "Christopher Nolan"
    assert body["streak"]["start"] == "2024-01-01"

    body = loaded.get("/api/summary", params={"title_type": "movie"}).json()
    assert body["count"] == 5


def test_charts(loaded):
    body = loaded.get("/api/charts", params=[("genre", "Sci-Fi"), ("genre", "Thriller")]).json()
    assert [p["title"] for p in body["time_series"]] == ["Inception", "Interstellar", "Breaking Bad"]
    assert body["time_series"][0]["date"] == "2024-01-03"


def test_table_paging_and_sort(loaded):
    body = loaded.get("/api/table", params={"sort": "title", "direction": "asc", "page_size": 3, "page": 9}).json()
    assert body["page"] == 3
    assert body["total_pages"] == 3
    assert body["total"] == 7
    assert [r["title"] for r in body["rows"]] == ["Unrated Short"]


def test_table_default_sort_and_posters(loaded):
    body = loaded.get("/api/table", params={"posters": True}).json()
    assert body["rows"][0]["title"] == "Breaking Bad"
    assert body["rows"][-1]["date_rated"] is None
    assert all(r["poster"] is None for r in body["rows"])


def test_table_bad_params(loaded):
    assert loaded.get("/api/table", params={"sort": "nope"}).status_code == 400
    assert loaded.get("/api/table", params={"direction": "up"}).status_code == 400
    assert loaded.get("/api/table", params={"page_size": 0}).status_code == 422


def test_poster_disabled(loaded):
    assert loaded.get("/api/posters/tt0111161").json() == {"title_id": "tt0111161", "poster": None}


def test_export_csv(loaded):
    resp = loaded.get("/api/export.csv", params={"min_year": 2010})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    rows, _ = parse_csv_text(resp.text)
    assert [r["Title"] for r in rows] == ["Inception", "Interstellar", "Unrated Short"]


def test_report_xlsx(loaded):
    resp = loaded.get("/api/report.xlsx")
    assert resp.status_code == 200
    wb = load_workbook(io.BytesIO(resp.content))
    assert wb.sheetnames == ["Summary", "Ratings", "By Year", "Genres", "Monthly"]
