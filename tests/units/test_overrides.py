import pytest

from uomregistry.units.overrides import parse_overrides, read_bundled_overrides, read_overrides


def test_parse_key_value_lines():
    text = "feet=ft\n  meter = m \n"
    assert parse_overrides(text) == {"feet": "ft", "meter": "m"}


def test_split_at_first_equals():
    assert parse_overrides("a=b=c") == {"a": "b=c"}


def test_comments_and_blank_lines_ignored():
    text = "# comment\n\n! also a comment\nfeet=ft\n"
    assert parse_overrides(text) == {"feet": "ft"}


def test_malformed_lines_skipped(caplog):
    caplog.set_level("DEBUG", logger="uomregistry.units.overrides")
    assert parse_overrides("no separator\n=value\nfeet=ft") == {"feet": "ft"}
    assert "Skipping malformed override line 1" in caplog.text


def test_empty_value_kept():
    assert parse_overrides("Euc=") == {"Euc": ""}


def test_last_occurrence_wins():
    assert parse_overrides("a=1\na=2") == {"a": "2"}


def test_read_missing_file_is_empty(tmp_path):
    assert read_overrides(tmp_path / "nope.txt") == {}


def test_read_none_is_empty():
    assert read_overrides(None) == {}


def test_read_undecodable_file_is_empty(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"\xff\xfe\xfa=\xff")
    assert read_overrides(path) == {}


def test_read_file(tmp_path):
    path = tmp_path / "aliases.txt"
    path.write_text("deg c=degC\nµs=us\n", encoding="utf-8")
    assert read_overrides(path) == {"deg c": "degC", "µs": "us"}


def test_bundled_files():
    aliases = read_bundled_overrides("unit_aliases.txt")
    assert aliases["feet"] == "ft"
    display = read_bundled_overrides("display_symbols.txt")
    assert display["Euc"] == "frac"


def test_missing_bundled_file_is_empty():
    assert read_bundled_overrides("does_not_exist.txt") == {}
