"""Preferences persistence."""
from ratings_viz.data.preferences import (
    Preferences,
    load_preferences,
    remember_source_url,
    save_preferences,
)


def test_missing_file_gives_defaults(tmp_path):
    prefs = load_preferences(tmp_path / "nope.json")
    assert prefs == Preferences()
    assert prefs.source_url is None
    assert prefs.theme_dark is True
    assert prefs.accent == "violet"


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")
    assert load_preferences(path) == Preferences()
    path.write_text("[1, 2]")
    assert load_preferences(path) == Preferences()


def test_save_and_load(tmp_path):
    path = tmp_path / "nested" / "prefs.json"
    save_preferences(Preferences(source_url="https://x/y.csv", theme_dark=False, accent="teal"), path)
    assert load_preferences(path) == Preferences("https://x/y.csv", False, "teal")


def test_remember_url_keeps_other_settings(tmp_path):
    path = tmp_path / "prefs.json"
    save_preferences(Preferences(theme_dark=False, accent="amber"), path)
    remember_source_url("https://example.com/r.csv", path)
    prefs = load_preferences(path)
    assert prefs.source_url == "https://example.com/r.csv"
    assert prefs.theme_dark is False
    assert prefs.accent == "amber"
