"""Tests for env parsing and formatting helpers."""

from qbt_autopilot.utils import (
    display_name, format_bytes, parse_bool, parse_float, parse_int, parse_list, truncate_name
)


def test_parse_bool(monkeypatch) -> None:
    monkeypatch.setenv("FLAG", "Yes")
    assert parse_bool("FLAG") is True
    monkeypatch.setenv("FLAG", "off")
    assert parse_bool("FLAG", True) is False
    monkeypatch.setenv("FLAG", "maybe")
    assert parse_bool("FLAG", True) is False
    monkeypatch.delenv("FLAG")
    assert parse_bool("FLAG", True) is True


def test_parse_int_and_float_fall_back_and_clamp(monkeypatch) -> None:
    monkeypatch.setenv("NUM", "abc")
    assert parse_int("NUM", 14) == 14
    assert parse_float("NUM", 2.0) == 2.0
    monkeypatch.setenv("NUM", "-3")
    assert parse_int("NUM", 14, 0) == 0
    assert parse_float("NUM", 2.0, 0) == 0


def test_parse_list(monkeypatch) -> None:
    monkeypatch.setenv("ITEMS", " a, b ,,c ")
    assert parse_list("ITEMS") == ["a", "b", "c"]
    monkeypatch.delenv("ITEMS")
    assert parse_list("ITEMS") == []


def test_display_name_strips_suffix_and_dots() -> None:
    assert display_name("Some.Show.S01.torrent") == "Some Show S01"
    assert display_name("Plain Name") == "Plain Name"
    # Only a trailing suffix is removed
    assert display_name("a.torrent.b") == "a torrent b"


def test_format_bytes() -> None:
    assert format_bytes(None) == "0 B"
    assert format_bytes(512) == "512 B"
    assert format_bytes(1500) == "1.50 kB"
    assert format_bytes(1_500_000_000) == "1.50 GB"
    assert format_bytes("junk") == "0 B"


def test_truncate_name() -> None:
    assert truncate_name("short") == "short"
    assert truncate_name("x" * 70, 10) == "xxxxxxx..."
