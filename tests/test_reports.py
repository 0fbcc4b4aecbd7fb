"""JSON and Excel ratings reports."""
import datetime as dt

from openpyxl import load_workbook

from ratings_viz.analytics.facts import summarize
from ratings_viz.reports.ratings_report import fact_lines, generate_excel, generate_json

NOW = dt.datetime(2024, 2, 10, 12, 0)


def test_generate_json_is_plain_json(loaded_store):
    report = generate_json(loaded_store.records, NOW)
    assert report["generated_at"] == "2024-02-10T12:00:00"
    assert report["summary"]["gap"] == {"days": 29, "start": "2024-01-03", "end": "2024-02-01"}
    assert report["rows"][0]["title"] == "Breaking Bad"
    assert report["rows"][0]["date_rated"] == "2024-02-04"
    assert report["charts"]["rating_histogram"][9] == {"bucket": 10, "count": 2}


def test_generate_excel(loaded_store, tmp_path):
    path = generate_excel(loaded_store.records, tmp_path / "out" / "report.xlsx", NOW)
    assert path.exists()
    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Ratings", "By Year", "Genres", "Monthly"]

    ratings = wb["Ratings"]
    assert ratings.cell(row=1, column=1).value == "Title"
    assert ratings.cell(row=2, column=1).value == "Breaking Bad"
    assert ratings.max_row == 8


def test_generate_excel_empty(tmp_path):
    path = generate_excel([], tmp_path / "empty.xlsx", NOW)
    assert load_workbook(path)["Monthly"].max_row == 25


def test_fact_lines(loaded_store):
    labels = dict(fact_lines(summarize(loaded_store.records, NOW)))
    assert labels["Longest streak"].startswith("3 days (2024-01-01")
    assert labels["Longest gap"].startswith("29 days")
    assert labels["Biggest disagreement"].startswith("The Dark Knight")
    assert labels["Top director"] == "Christopher Nolan: avg 8.00 over 3 titles"


def test_fact_lines_empty():
    lines = fact_lines(summarize([], NOW))
    assert [label for label, _ in lines] == ["Longest streak", "Longest gap", "Biggest disagreement"]
    assert all(text == "–" for _, text in lines)
